# src/hybridscaler/strategy/factory.py
"""
Factory functions to instantiate the scaling strategy of a HybridScaler.
"""

import logging
import random
from typing import Dict, Optional

from ..core.config import config
from ..models.scaler import LearningType, QLearningParams
from ..reinforcement.agent import QAgent
from .base import ScalingStrategy
from .noop import NoOpStrategy

logger = logging.getLogger(__name__)

# Last agent built per "<namespace>/<name>"; its limits-to-requests ratios seed the next one.
_AGENTS: Dict[str, QAgent] = {}


def get_scaling_strategy(
    learning_type: Optional[LearningType],
    params: Optional[QLearningParams],
    cache_key: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> ScalingStrategy:
    """
    Returns the strategy for ``learning_type``, falling back to
    ``config.LEARNING_TYPE`` when the resource does not name one.

    Q-learning without parameters degrades to the no-op strategy. A new
    agent is built from ``params`` on every call; with a ``cache_key`` it
    inherits the limits-to-requests ratios of the previous agent for that key.
    """
    if learning_type is None:
        learning_type = LearningType(config.LEARNING_TYPE)

    if learning_type != LearningType.QLEARNING:
        return NoOpStrategy()

    if params is None:
        logger.warning("Q-learning requested without parameters, keeping the workload unchanged.")
        return NoOpStrategy()

    agent = QAgent(
        cpu_cost=params.cpu_cost,
        memory_cost=params.memory_cost,
        underprovisioning_penalty=params.underprovisioning_penalty,
        alpha=params.learning_rate,
        gamma=params.discount_factor,
        epsilon=params.epsilon,
        rng=rng,
    )
    if cache_key is not None:
        # parameters may change between reconciliations, the cached ratios stay
        previous = _AGENTS.get(cache_key)
        if previous is not None:
            agent.limits_to_requests_ratio = previous.limits_to_requests_ratio
        else:
            logger.debug("Created Q-learning agent for %s", cache_key)
        _AGENTS[cache_key] = agent
    return agent


def clear_strategy_cache() -> None:
    """Forgets every cached agent."""
    _AGENTS.clear()
