# tests/reinforcement/test_quantization.py
"""
Unit tests for the reduction of workload states to Q-table keys.
"""

from decimal import Decimal

import pytest

from hybridscaler.core.exceptions import InvalidInputError
from hybridscaler.reinforcement import convert_state, quantize_percentage


@pytest.mark.parametrize(
    "value, quantum, expected",
    [
        ("14", "20", 0),
        ("29", "20", 20),
        ("40", "20", 40),
        ("101", "20", 100),
        ("250", "25", 100),
        ("99.9", "25", 75),
        ("0", "25", 0),
    ],
)
def test_quantize_percentage(value, quantum, expected):
    assert quantize_percentage(Decimal(value), Decimal(quantum)) == expected


def test_convert_state(make_state):
    state = make_state(
        replicas=4,
        containers={"app": ("0.1", "0.2", "100000000", "150000000")},
        usage_cpu="0.05",
        usage_memory="40000000",
        max_cpu="0.2",
        max_memory="200000000",
    )

    rl_state = convert_state(state, Decimal(25))

    # limits at 100% and 75% of the maximum, cpu on target, memory at 80% of it
    assert rl_state.name == "4_100_75_100_75"
    assert rl_state.replicas == 4
    assert rl_state.cpu_requests == Decimal("0.1")
    assert rl_state.memory_requests == Decimal(100000000)
    assert rl_state.cpu_utilization == Decimal("0.5")
    assert rl_state.memory_utilization == Decimal("0.4")
    assert rl_state.cpu_target_utilization == Decimal("0.5")


def test_convert_state_defaults_to_configured_quantum(make_state, mocker):
    mocker.patch("hybridscaler.reinforcement.quantization.config.PERCENTAGE_QUANTUM", 50)
    state = make_state(replicas=3, usage_cpu="0.1", usage_memory="50000000", max_cpu="0.4", max_memory="1000000000")

    # limits at 50% and 20% of the maximum, cpu at 200% and memory at 100% of the target
    assert convert_state(state).name == "3_50_0_100_100"


def test_convert_state_caps_overloaded_utilization(make_state):
    state = make_state(usage_cpu="1", usage_memory="500000000", max_cpu="0.2", max_memory="200000000")
    assert convert_state(state, Decimal(25)).name == "4_100_100_100_100"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"containers": {"app": ("0", "0.2", "100000000", "200000000")}}, "cpu requests"),
        ({"containers": {"app": ("0.1", "0.2", "0", "200000000")}}, "memory requests"),
        ({"max_cpu": "0"}, "max cpu"),
        ({"max_memory": "0"}, "max memory"),
        ({"target_cpu": "0"}, "cpu target utilization"),
        ({"target_memory": "0"}, "memory target utilization"),
    ],
)
def test_convert_state_rejects_zero_divisors(make_state, overrides, message):
    with pytest.raises(InvalidInputError, match=message):
        convert_state(make_state(**overrides), Decimal(25))
