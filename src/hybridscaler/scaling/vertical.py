# src/hybridscaler/scaling/vertical.py

import logging
from decimal import ROUND_CEILING, ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import Optional, Tuple

from ..core.exceptions import InvalidInputError
from ..models.resources import Resources, ResourcesList, ScalingDecision, State
from ..utils.decimal_utils import RATIO_SCALE, exact, limit_value, quo_round
from .common import current_to_target_utilization_ratio

logger = logging.getLogger(__name__)


def _desired_pod_resources(
    resource: str, state: State, limits_to_requests_ratio: Decimal
) -> Tuple[Decimal, Decimal, str]:
    """
    Returns the desired pod requests and limits of ``resource`` together with
    the rounding mode to use when distributing them over the containers.
    """
    metrics = state.pod_metrics
    minimum = getattr(state.constraints.min_resources, resource)
    maximum = getattr(state.constraints.max_resources, resource)
    pod_requests = getattr(metrics.requests, resource)

    try:
        ratio = current_to_target_utilization_ratio(
            getattr(metrics.resource_usage, resource),
            pod_requests,
            getattr(state.target_utilization, resource),
        )
    except InvalidInputError as e:
        raise InvalidInputError(f"unable to calculate {resource} current to target utilization ratio, {e}") from e

    with exact():
        desired_requests = limit_value(pod_requests * ratio, minimum, maximum)
        # limits may land back in range after the requests were limited
        desired_limits = limit_value(desired_requests * limits_to_requests_ratio, minimum, maximum)

    # containers must not drop below their share of the minimum nor exceed
    # their share of the maximum
    rounding = ROUND_HALF_UP
    if desired_requests == minimum:
        rounding = ROUND_CEILING
    if desired_limits == maximum:
        rounding = ROUND_DOWN

    return desired_requests, desired_limits, rounding


def vertical(
    state: State,
    cpu_limits_to_requests_ratio: Optional[Decimal],
    memory_limits_to_requests_ratio: Optional[Decimal],
) -> ScalingDecision:
    """
    Recommends new resource requests and limits, keeping the ratio between
    both and each container's share of the pod's resources.

    Pod requests move by the current-to-target utilization ratio and are
    limited to the constraints' resource bounds; pod limits follow from the
    limits-to-requests ratio and are limited again. Every container is then
    scaled by ``desired_pod / current_pod``.

    Raises:
        InvalidInputError: If a ratio is missing or replicas, requests, limits
            or target utilization are zero.
    """
    if cpu_limits_to_requests_ratio is None or memory_limits_to_requests_ratio is None:
        raise InvalidInputError("no limits to requests ratios provided")

    if state.replicas == 0:
        raise InvalidInputError("unable to calculate new pod resources, current number of replicas is zero")

    cpu_requests, cpu_limits, cpu_rounding = _desired_pod_resources("cpu", state, cpu_limits_to_requests_ratio)
    memory_requests, memory_limits, memory_rounding = _desired_pod_resources(
        "memory", state, memory_limits_to_requests_ratio
    )

    pod = state.pod_metrics
    try:
        factors = Resources(
            requests=ResourcesList(
                cpu=quo_round(cpu_requests, pod.requests.cpu, RATIO_SCALE, cpu_rounding),
                memory=quo_round(memory_requests, pod.requests.memory, RATIO_SCALE, memory_rounding),
            ),
            limits=ResourcesList(
                cpu=quo_round(cpu_limits, pod.limits.cpu, RATIO_SCALE, cpu_rounding),
                memory=quo_round(memory_limits, pod.limits.memory, RATIO_SCALE, memory_rounding),
            ),
        )
    except InvalidInputError as e:
        raise InvalidInputError(f"unable to scale container resources, pod limits cannot be zero, {e}") from e

    container_resources = {}
    with exact():
        for name, resources in state.container_resources.items():
            container_resources[name] = Resources(
                requests=ResourcesList(
                    cpu=resources.requests.cpu * factors.requests.cpu,
                    memory=resources.requests.memory * factors.requests.memory,
                ),
                limits=ResourcesList(
                    cpu=resources.limits.cpu * factors.limits.cpu,
                    memory=resources.limits.memory * factors.limits.memory,
                ),
            )

    logger.debug(
        "Vertical scaling to pod requests cpu=%s memory=%s, limits cpu=%s memory=%s",
        cpu_requests,
        memory_requests,
        cpu_limits,
        memory_limits,
    )
    return ScalingDecision(replicas=state.replicas, container_resources=container_resources)
