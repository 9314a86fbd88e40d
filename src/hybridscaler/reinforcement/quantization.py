# src/hybridscaler/reinforcement/quantization.py

import logging
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.config import config
from ..core.exceptions import InvalidInputError
from ..models.learning import RLState
from ..models.resources import State
from ..utils.decimal_utils import HUNDRED, RATIO_SCALE, dec_to_int, exact, quo_round

logger = logging.getLogger(__name__)

MAX_PERCENTAGE = 100


def quantize_percentage(value: Decimal, quantum: Decimal) -> int:
    """
    Snaps a percentage down to the nearest multiple of ``quantum``, limited to 100.

    >>> quantize_percentage(Decimal(29), Decimal(20))
    20
    """
    quantity = quo_round(value, quantum, 0, ROUND_DOWN)
    with exact():
        quantized = dec_to_int(quantity * quantum)
    return min(quantized, MAX_PERCENTAGE)


def _require_nonzero(value: Decimal, what: str) -> Decimal:
    if value == 0:
        raise InvalidInputError(f"{what} cannot be zero")
    return value


def convert_state(state: State, quantum: Optional[Decimal] = None) -> RLState:
    """
    Reduces a workload state to the Q-table key and the values the cost model needs.

    Limits are expressed relative to the maximum allowed resources and usage
    relative to the target utilization; all four ratios are quantized.

    Raises:
        InvalidInputError: If requests, maximum resources or target utilization are zero.
    """
    if quantum is None:
        quantum = Decimal(config.PERCENTAGE_QUANTUM)

    metrics = state.pod_metrics
    cpu_requests = _require_nonzero(metrics.requests.cpu, "cpu requests")
    memory_requests = _require_nonzero(metrics.requests.memory, "memory requests")
    max_cpu = _require_nonzero(state.constraints.max_resources.cpu, "max cpu")
    max_memory = _require_nonzero(state.constraints.max_resources.memory, "max memory")
    cpu_target = _require_nonzero(state.target_utilization.cpu, "cpu target utilization")
    memory_target = _require_nonzero(state.target_utilization.memory, "memory target utilization")

    cpu_utilization = quo_round(metrics.resource_usage.cpu, cpu_requests, RATIO_SCALE, ROUND_HALF_UP)
    memory_utilization = quo_round(metrics.resource_usage.memory, memory_requests, RATIO_SCALE, ROUND_HALF_UP)
    cpu_utilization_ratio = quo_round(cpu_utilization, cpu_target, RATIO_SCALE, ROUND_HALF_UP)
    memory_utilization_ratio = quo_round(memory_utilization, memory_target, RATIO_SCALE, ROUND_HALF_UP)
    cpu_limits_of_max = quo_round(metrics.limits.cpu, max_cpu, RATIO_SCALE, ROUND_HALF_UP)
    memory_limits_of_max = quo_round(metrics.limits.memory, max_memory, RATIO_SCALE, ROUND_HALF_UP)

    with exact():
        buckets = [
            quantize_percentage(ratio * HUNDRED, quantum)
            for ratio in (cpu_limits_of_max, memory_limits_of_max, cpu_utilization_ratio, memory_utilization_ratio)
        ]

    name = "_".join(str(part) for part in [state.replicas, *buckets])
    logger.debug("Quantized state %s", name)

    return RLState(
        name=name,
        replicas=state.replicas,
        cpu_requests=cpu_requests,
        memory_requests=memory_requests,
        cpu_utilization=cpu_utilization,
        memory_utilization=memory_utilization,
        cpu_target_utilization=cpu_target,
        memory_target_utilization=memory_target,
    )
