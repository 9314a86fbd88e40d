# src/hybridscaler/core/state_builder.py
"""
Glue between the HybridScaler custom resource and the decision engine.

The controller fills the resource's status with the live replica count, the
containers' configured resources and the pods' average usage. This module
turns that into a :class:`State`, runs the scaling strategy and renders the
resulting decision back into Kubernetes resource lists.
"""

import base64
import binascii
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional, Tuple

from ..models.resources import Constraints, PodMetrics, Resources, ResourcesList, ScalingDecision, State
from ..models.scaler import ContainerResourceSpec, HybridScaler, HybridScalerSpec, HybridScalerStatus
from ..strategy.base import ScalingStrategy
from ..strategy.factory import get_scaling_strategy
from ..utils.decimal_utils import HUNDRED, exact, quo_round
from ..utils.k8s_utils import format_quantity, parse_quantity
from .exceptions import InvalidInputError, SerializationError

logger = logging.getLogger(__name__)

CPU = "cpu"
MEMORY = "memory"

# Target utilization percent -> fraction keeps two fractional digits.
TARGET_UTILIZATION_SCALE = 2


def _resources_list(quantities: Dict) -> ResourcesList:
    return ResourcesList(cpu=parse_quantity(quantities.get(CPU)), memory=parse_quantity(quantities.get(MEMORY)))


def _target_utilization(spec: HybridScalerSpec, resource: str) -> Decimal:
    percent = spec.resource_policy.target_utilization.get(resource)
    if percent is None:
        raise InvalidInputError(f"cannot find target {resource} utilization")
    return quo_round(Decimal(percent), HUNDRED, TARGET_UTILIZATION_SCALE, ROUND_HALF_UP)


def prepare_state(spec: HybridScalerSpec, status: HybridScalerStatus) -> State:
    """
    Builds the decision engine's input from a HybridScaler's spec and status.

    Container requests and limits are summed into pod level totals.

    Raises:
        InvalidInputError: If a quantity is malformed or a target utilization is missing.
    """
    container_resources: Dict[str, Resources] = {}
    pod_requests = ResourcesList()
    pod_limits = ResourcesList()

    with exact():
        for name, container in status.container_resources.items():
            resources = Resources(requests=_resources_list(container.requests), limits=_resources_list(container.limits))
            container_resources[name] = resources

            pod_requests.cpu += resources.requests.cpu
            pod_requests.memory += resources.requests.memory
            pod_limits.cpu += resources.limits.cpu
            pod_limits.memory += resources.limits.memory

    policy = spec.resource_policy
    limits_to_requests_ratio = None
    if policy.limits_to_requests_ratio_cpu is not None and policy.limits_to_requests_ratio_memory is not None:
        limits_to_requests_ratio = ResourcesList(
            cpu=parse_quantity(policy.limits_to_requests_ratio_cpu),
            memory=parse_quantity(policy.limits_to_requests_ratio_memory),
        )

    constraints = Constraints(
        min_replicas=spec.min_replicas or 0,
        max_replicas=spec.max_replicas or 0,
        min_resources=_resources_list(policy.min_allowed),
        max_resources=_resources_list(policy.max_allowed),
        limits_to_requests_ratio=limits_to_requests_ratio,
    )

    target_utilization = ResourcesList(
        cpu=_target_utilization(spec, CPU),
        memory=_target_utilization(spec, MEMORY),
    )

    return State(
        replicas=status.replicas,
        container_resources=container_resources,
        constraints=constraints,
        pod_metrics=PodMetrics(
            resource_usage=_resources_list(status.pod_metrics.resource_usage),
            requests=pod_requests,
            limits=pod_limits,
            latency_threshold_exceeded=status.pod_metrics.latency_threshold_exceeded,
        ),
        target_utilization=target_utilization,
    )


def interpret_decision(decision: ScalingDecision) -> Dict[str, ContainerResourceSpec]:
    """Renders the decision's container resources as Kubernetes quantity strings."""
    return {
        name: ContainerResourceSpec(
            requests={CPU: format_quantity(r.requests.cpu), MEMORY: format_quantity(r.requests.memory)},
            limits={CPU: format_quantity(r.limits.cpu), MEMORY: format_quantity(r.limits.memory)},
        )
        for name, r in decision.container_resources.items()
    }


def _decode_status_blob(value: Optional[str]) -> Optional[bytes]:
    if not value:
        return None
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SerializationError(f"learning state in status is not valid base64, {e}") from e


def decide(
    scaler: HybridScaler, strategy: Optional[ScalingStrategy] = None, state: Optional[State] = None
) -> Tuple[ScalingDecision, HybridScalerStatus]:
    """
    Makes one scaling decision for ``scaler``.

    Returns the decision and a copy of the status holding the new learning
    state and the decided replicas and container resources. Nothing is
    returned on error, so the caller keeps the previous status. A ``state``
    already built with :func:`prepare_state` is used as is.
    """
    if strategy is None:
        strategy = get_scaling_strategy(scaler.spec.learning_type, scaler.spec.q_learning_params, scaler.key)

    if state is None:
        state = prepare_state(scaler.spec, scaler.status)
    logger.debug("Prepared state for %s: %s", scaler.key, state)

    decision, learning_state = strategy.make_decision(state, _decode_status_blob(scaler.status.learning_state))

    status = scaler.status.model_copy(deep=True)
    status.replicas = decision.replicas
    status.container_resources = interpret_decision(decision)
    status.learning_state = base64.b64encode(learning_state).decode("ascii") if learning_state else None

    logger.info(
        "Decision for %s: %s replicas (%s)",
        scaler.key,
        decision.replicas,
        decision.description or "no action",
    )
    return decision, status
