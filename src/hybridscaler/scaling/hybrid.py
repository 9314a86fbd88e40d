# src/hybridscaler/scaling/hybrid.py

import logging
from decimal import ROUND_DOWN, ROUND_HALF_UP, ROUND_UP, Decimal
from typing import Optional

from ..core.exceptions import BoundaryExhaustionError
from ..models.resources import ScalingDecision, State
from ..utils.decimal_utils import RATIO_SCALE, TWO, dec_to_int, exact, limit_value, quo_round
from .common import calculate_desired_replicas
from .vertical import vertical

logger = logging.getLogger(__name__)


def _half_step_vertical(
    state: State,
    rounding: str,
    inverse: bool,
    cpu_limits_to_requests_ratio: Optional[Decimal],
    memory_limits_to_requests_ratio: Optional[Decimal],
) -> ScalingDecision:
    """
    Moves the replicas half of the way the horizontal recommendation asks for
    (or the opposite way if ``inverse``) and lets vertical scaling absorb the
    rest on a hypothetical state with the new replica count.
    """
    recommendation = calculate_desired_replicas(state)
    current_replicas = Decimal(state.replicas)

    with exact():
        step = quo_round(recommendation - current_replicas, TWO, 0, rounding)
        if inverse:
            step = -step
        desired_replicas = current_replicas + step

    constraints = state.constraints
    limited_replicas = limit_value(
        desired_replicas, Decimal(constraints.min_replicas), Decimal(constraints.max_replicas)
    )

    if limited_replicas == 0:
        raise BoundaryExhaustionError(
            "attempting to scale to zero replicas, please provide min and max values for replicas to prevent this"
        )

    # usage spreads over however many pods will exist
    replicas_ratio = quo_round(current_replicas, limited_replicas, RATIO_SCALE, ROUND_HALF_UP)
    usage = state.pod_metrics.resource_usage
    with exact():
        hypothetical_usage = usage.model_copy(
            update={"cpu": usage.cpu * replicas_ratio, "memory": usage.memory * replicas_ratio}
        )

    hypothetical_state = state.model_copy(
        update={
            "replicas": dec_to_int(limited_replicas),
            "pod_metrics": state.pod_metrics.model_copy(update={"resource_usage": hypothetical_usage}),
        }
    )

    logger.debug(
        "Hybrid step (inverse=%s): horizontal recommendation %s, moving from %s to %s replicas",
        inverse,
        recommendation,
        state.replicas,
        hypothetical_state.replicas,
    )
    return vertical(hypothetical_state, cpu_limits_to_requests_ratio, memory_limits_to_requests_ratio)


def hybrid(
    state: State,
    cpu_limits_to_requests_ratio: Optional[Decimal],
    memory_limits_to_requests_ratio: Optional[Decimal],
) -> ScalingDecision:
    """
    Recommends vertical and horizontal scaling: half of the horizontal
    recommendation (rounded away from zero) is applied to the replicas and
    vertical scaling compensates for the remainder.

    Raises:
        InvalidInputError: Propagated from the horizontal and vertical steps.
        BoundaryExhaustionError: If the workload would end up with zero replicas.
    """
    return _half_step_vertical(
        state, ROUND_UP, False, cpu_limits_to_requests_ratio, memory_limits_to_requests_ratio
    )


def hybrid_inverse(
    state: State,
    cpu_limits_to_requests_ratio: Optional[Decimal],
    memory_limits_to_requests_ratio: Optional[Decimal],
) -> ScalingDecision:
    """
    Like :func:`hybrid`, but the half step is rounded toward zero and then
    negated: a horizontal scale up turns into fewer replicas with larger pods
    and vice versa.

    Because of the different rounding, a recommendation one replica away from
    the current count moves ``hybrid`` by one and leaves ``hybrid_inverse``
    where it is.
    """
    return _half_step_vertical(
        state, ROUND_DOWN, True, cpu_limits_to_requests_ratio, memory_limits_to_requests_ratio
    )
