# src/hybridscaler/scaling/common.py

import logging
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal

from ..core.exceptions import InvalidInputError
from ..models.resources import State
from ..utils.decimal_utils import RATIO_SCALE, exact, quo_round, round_to

logger = logging.getLogger(__name__)


def current_to_target_utilization_ratio(usage: Decimal, requests: Decimal, target_utilization: Decimal) -> Decimal:
    """
    Calculates ``utilization = usage / requests`` and returns
    ``utilization / target_utilization``.
    """
    if requests == 0:
        raise InvalidInputError("requests cannot be zero")

    if target_utilization == 0:
        raise InvalidInputError("target utilization cannot be zero")

    utilization = quo_round(usage, requests, RATIO_SCALE, ROUND_HALF_UP)
    return quo_round(utilization, target_utilization, RATIO_SCALE, ROUND_HALF_UP)


def calculate_desired_replicas(state: State) -> Decimal:
    """
    Calculates ``ceil(current * utilization / target)`` for CPU and memory,
    the same formula the HPA uses, and returns the larger of both.
    """
    current_replicas = Decimal(state.replicas)
    if current_replicas == 0:
        raise InvalidInputError("cannot calculate new number of replicas, current replicas is zero")

    metrics = state.pod_metrics
    target = state.target_utilization

    try:
        cpu_ratio = current_to_target_utilization_ratio(metrics.resource_usage.cpu, metrics.requests.cpu, target.cpu)
    except InvalidInputError as e:
        raise InvalidInputError(f"unable to calculate cpu current to target utilization ratio, {e}") from e

    try:
        memory_ratio = current_to_target_utilization_ratio(
            metrics.resource_usage.memory, metrics.requests.memory, target.memory
        )
    except InvalidInputError as e:
        raise InvalidInputError(f"unable to calculate memory current to target utilization ratio, {e}") from e

    with exact():
        desired_cpu = round_to(current_replicas * cpu_ratio, 0, ROUND_CEILING)
        desired_memory = round_to(current_replicas * memory_ratio, 0, ROUND_CEILING)

    logger.debug(
        "Desired replicas: cpu=%s (ratio %s) memory=%s (ratio %s)",
        desired_cpu,
        cpu_ratio,
        desired_memory,
        memory_ratio,
    )
    return max(desired_cpu, desired_memory)
