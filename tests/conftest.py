# tests/conftest.py

from decimal import Decimal

import pytest

from hybridscaler.models.resources import Constraints, PodMetrics, Resources, ResourcesList, State
from hybridscaler.strategy.factory import clear_strategy_cache


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Pytest fixture to mock environment variables for the config module.

    This fixture runs automatically for every test (`autouse=True`) so the
    learning defaults are predictable and isolated from the actual environment.
    """
    monkeypatch.setenv("HYBRIDSCALER_QLEARNING_EPSILON", "0.1")
    monkeypatch.setenv("HYBRIDSCALER_LEARNING_TYPE", "QLEARNING")


@pytest.fixture(autouse=True)
def reset_strategy_cache():
    """Every test starts without cached agents."""
    clear_strategy_cache()
    yield
    clear_strategy_cache()


def build_state(
    replicas=4,
    containers=None,
    usage_cpu="0.1",
    usage_memory="50000000",
    target_cpu="0.5",
    target_memory="0.5",
    min_replicas=1,
    max_replicas=10,
    min_cpu="0.01",
    max_cpu="2",
    min_memory="1000000",
    max_memory="1000000000",
    limits_to_requests_ratio=None,
) -> State:
    """
    Builds a State whose pod totals are the sum of ``containers``.

    ``containers`` maps a container name to (cpu requests, cpu limits,
    memory requests, memory limits); the default is a single container with
    100m/200m CPU and 100MB/200MB memory.
    """
    if containers is None:
        containers = {"app": ("0.1", "0.2", "100000000", "200000000")}

    container_resources = {}
    requests = ResourcesList()
    limits = ResourcesList()
    for name, (cpu_req, cpu_lim, mem_req, mem_lim) in containers.items():
        resources = Resources(
            requests=ResourcesList(cpu=Decimal(cpu_req), memory=Decimal(mem_req)),
            limits=ResourcesList(cpu=Decimal(cpu_lim), memory=Decimal(mem_lim)),
        )
        container_resources[name] = resources
        requests.cpu += resources.requests.cpu
        requests.memory += resources.requests.memory
        limits.cpu += resources.limits.cpu
        limits.memory += resources.limits.memory

    return State(
        replicas=replicas,
        container_resources=container_resources,
        constraints=Constraints(
            min_replicas=min_replicas,
            max_replicas=max_replicas,
            min_resources=ResourcesList(cpu=Decimal(min_cpu), memory=Decimal(min_memory)),
            max_resources=ResourcesList(cpu=Decimal(max_cpu), memory=Decimal(max_memory)),
            limits_to_requests_ratio=limits_to_requests_ratio,
        ),
        pod_metrics=PodMetrics(
            resource_usage=ResourcesList(cpu=Decimal(usage_cpu), memory=Decimal(usage_memory)),
            requests=requests,
            limits=limits,
        ),
        target_utilization=ResourcesList(cpu=Decimal(target_cpu), memory=Decimal(target_memory)),
    )


@pytest.fixture
def make_state():
    """Factory fixture returning :func:`build_state`."""
    return build_state


@pytest.fixture
def scaler_document():
    """A HybridScaler resource as the API server would return it."""
    return {
        "apiVersion": "scaling.autoscaling.custom/v1",
        "kind": "HybridScaler",
        "metadata": {"name": "web", "namespace": "shop", "uid": "1234"},
        "spec": {
            "scaleTargetRef": {"apiVersion": "apps/v1", "kind": "Deployment", "name": "web"},
            "minReplicas": 1,
            "maxReplicas": 10,
            "interval": 30,
            "learningType": "QLEARNING",
            "qLearningParams": {
                "cpuCost": "1",
                "memoryCost": "1n",
                "underprovisioningPenalty": "2",
                "learningRate": "500m",
                "discountFactor": "900m",
            },
            "resourcePolicy": {
                "minAllowed": {"cpu": "10m", "memory": "1M"},
                "maxAllowed": {"cpu": "2", "memory": "1G"},
                "targetUtilization": {"cpu": 50, "memory": 50},
                "limitsToRequestsRatioCpu": "2",
                "limitsToRequestsRatioMemory": "2",
            },
        },
        "status": {
            "replicas": 4,
            "containerResources": {
                "app": {
                    "requests": {"cpu": "60m", "memory": "60M"},
                    "limits": {"cpu": "120m", "memory": "120M"},
                },
                "sidecar": {
                    "requests": {"cpu": "40m", "memory": "40M"},
                    "limits": {"cpu": "80m", "memory": "80M"},
                },
            },
            "podMetrics": {"resourceUsage": {"cpu": "100m", "memory": "50M"}, "latencyThresholdExceeded": False},
        },
    }
