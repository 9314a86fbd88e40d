# src/hybridscaler/scaling/horizontal.py

import logging
from decimal import Decimal

from ..models.resources import ScalingDecision, State
from ..utils.decimal_utils import dec_to_int, limit_value
from .common import calculate_desired_replicas

logger = logging.getLogger(__name__)


def horizontal(state: State) -> ScalingDecision:
    """
    Recommends a new number of replicas, leaving container resources untouched.

    For CPU and memory the desired replicas are
    ``ceil(current * currentUtilization / targetUtilization)``; the larger one
    is limited to ``[min_replicas, max_replicas]``.

    Raises:
        InvalidInputError: If replicas, requests or target utilization are zero.
    """
    desired_replicas = calculate_desired_replicas(state)

    constraints = state.constraints
    limited_replicas = limit_value(
        desired_replicas, Decimal(constraints.min_replicas), Decimal(constraints.max_replicas)
    )
    replicas = dec_to_int(limited_replicas)

    logger.debug("Horizontal scaling from %s to %s replicas", state.replicas, replicas)
    return ScalingDecision(
        replicas=replicas,
        container_resources={name: r.model_copy(deep=True) for name, r in state.container_resources.items()},
    )
