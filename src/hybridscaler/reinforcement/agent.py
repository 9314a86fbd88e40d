# src/hybridscaler/reinforcement/agent.py

import logging
import random
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence, Tuple

from typing_extensions import assert_never

from ..core.config import config
from ..core.exceptions import InvalidInputError
from ..models.learning import ALL_ACTIONS, Action
from ..models.resources import ResourcesList, ScalingDecision, State
from ..scaling import horizontal, hybrid, hybrid_inverse, vertical
from ..strategy.base import ScalingStrategy
from ..strategy.noop import no_change
from ..utils.decimal_utils import RATIO_SCALE, quo_round
from .codec import decode_learning_state, encode_learning_state
from .q_learning import QLearning
from .quantization import convert_state

logger = logging.getLogger(__name__)


def get_limits_to_requests_ratio(state: State) -> ResourcesList:
    """Returns the pod's limits divided by its requests for CPU and memory."""
    requests = state.pod_metrics.requests
    limits = state.pod_metrics.limits

    if requests.cpu == 0:
        raise InvalidInputError("cpu requests cannot be zero")
    if requests.memory == 0:
        raise InvalidInputError("memory requests cannot be zero")

    return ResourcesList(
        cpu=quo_round(limits.cpu, requests.cpu, RATIO_SCALE, ROUND_HALF_UP),
        memory=quo_round(limits.memory, requests.memory, RATIO_SCALE, ROUND_HALF_UP),
    )


class QAgent(ScalingStrategy):
    """
    Chooses one of the scaling actions with an epsilon-greedy policy over a
    Q-table of expected costs and runs the matching scaling algorithm.

    The Q-table and the previous state-action pair travel in the learning
    state blob, so one agent may serve any workload. The limits-to-requests
    ratios are the exception: they are taken from the first state the agent
    sees (or from the constraints, if pinned there) and reused for the rest of
    the agent's lifetime, even if the workload's ratio changes later on.
    """

    def __init__(
        self,
        cpu_cost: Decimal,
        memory_cost: Decimal,
        underprovisioning_penalty: Decimal,
        alpha: Decimal,
        gamma: Decimal,
        epsilon: Optional[float] = None,
        possible_actions: Sequence[Action] = ALL_ACTIONS,
        rng: Optional[random.Random] = None,
    ):
        self.learning = QLearning(cpu_cost, memory_cost, underprovisioning_penalty, alpha, gamma, possible_actions)
        self.epsilon = config.QLEARNING_EPSILON if epsilon is None else epsilon
        self.possible_actions = list(possible_actions)
        self.rng = rng or random.SystemRandom()
        self.limits_to_requests_ratio: Optional[ResourcesList] = None

    def _cached_limits_to_requests_ratio(self, state: State) -> ResourcesList:
        if self.limits_to_requests_ratio is None:
            pinned = state.constraints.limits_to_requests_ratio
            self.limits_to_requests_ratio = pinned or get_limits_to_requests_ratio(state)
            logger.info(
                "Caching limits to requests ratios: cpu=%s memory=%s",
                self.limits_to_requests_ratio.cpu,
                self.limits_to_requests_ratio.memory,
            )
        return self.limits_to_requests_ratio

    def make_decision(
        self, state: State, learning_state: Optional[bytes]
    ) -> Tuple[ScalingDecision, Optional[bytes]]:
        """
        Makes one scaling decision.

        Raises:
            InvalidInputError: If the state cannot be quantized or scaled.
            SerializationError: If ``learning_state`` cannot be decoded.
            BoundaryExhaustionError: If a hybrid action would scale to zero replicas.
        """
        ratios = self._cached_limits_to_requests_ratio(state)

        current = convert_state(state)
        memory = self.learning.update(decode_learning_state(learning_state), current)

        greedy = self.rng.random() >= self.epsilon
        candidates = self.possible_actions
        if greedy:
            candidates = self.learning.get_greedy_actions(current.name, memory)
        action = self.rng.choice(candidates)

        decision = self.convert_action(action, state, ratios)

        memory.previous_state = current
        memory.previous_action = action

        logger.info(
            "scaling decision: action=%s state=%s greedy=%s replicas=%s",
            action.value,
            current.name,
            greedy,
            decision.replicas,
        )
        return decision, encode_learning_state(memory)

    @staticmethod
    def convert_action(action: Action, state: State, ratios: ResourcesList) -> ScalingDecision:
        """Runs the scaling algorithm belonging to ``action``."""
        if action is Action.NONE:
            decision = no_change(state)
        elif action is Action.HORIZONTAL:
            decision = horizontal(state)
        elif action is Action.VERTICAL:
            decision = vertical(state, ratios.cpu, ratios.memory)
        elif action is Action.HYBRID:
            decision = hybrid(state, ratios.cpu, ratios.memory)
        elif action is Action.HYBRID_INVERSE:
            decision = hybrid_inverse(state, ratios.cpu, ratios.memory)
        else:
            assert_never(action)

        decision.description = action.value
        return decision
