# src/hybridscaler/reinforcement/q_learning.py
"""
Tabular Q-learning in cost-minimization form.

The Q-table stores expected costs, so the best action in a state is the one
with the lowest value. Unseen state-action pairs start at ``INITIAL_VALUE``;
as every real cost is positive, actions that were never tried look cheapest
and get picked by the greedy policy until they have been evaluated.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from ..core.config import config
from ..core.exceptions import InvalidInputError
from ..models.learning import ALL_ACTIONS, Action, LearningState, QTable, RLState
from ..utils.decimal_utils import RATIO_SCALE, exact, quo_round, round_to

logger = logging.getLogger(__name__)

INITIAL_VALUE = Decimal(0)


def best_action_value_in_state(state_name: str, table: QTable) -> Decimal:
    """Returns the lowest recorded cost of ``state_name``, or the initial value if there is none."""
    row = table.get(state_name)
    if not row:
        return INITIAL_VALUE
    return min(row.values())


class QLearning:
    """
    Cost model and update rule of the agent.

    :param cpu_cost: Cost of one CPU core per replica.
    :param memory_cost: Cost of one byte of memory per replica.
    :param underprovisioning_penalty: Factor applied to the cost of the
                                      resources missing to reach the target utilization.
    :param alpha: Learning rate.
    :param gamma: Discount factor.
    """

    def __init__(
        self,
        cpu_cost: Decimal,
        memory_cost: Decimal,
        underprovisioning_penalty: Decimal,
        alpha: Decimal,
        gamma: Decimal,
        all_actions: Sequence[Action] = ALL_ACTIONS,
        q_value_scale: Optional[int] = None,
    ):
        self.cpu_cost = cpu_cost
        self.memory_cost = memory_cost
        self.underprovisioning_penalty = underprovisioning_penalty
        self.alpha = alpha
        self.gamma = gamma
        self.all_actions = list(all_actions)
        self.q_value_scale = config.Q_VALUE_SCALE if q_value_scale is None else q_value_scale
        logger.debug(
            "QLearning initialized: cpuCost=%s memoryCost=%s penalty=%s alpha=%s gamma=%s",
            cpu_cost,
            memory_cost,
            underprovisioning_penalty,
            alpha,
            gamma,
        )

    def initialize_row(self, state_name: str, table: QTable) -> None:
        """Adds every action with the initial value to ``state_name`` if the state is new."""
        if state_name in table:
            return
        table[state_name] = {action: INITIAL_VALUE for action in self.all_actions}

    def _underprovisioning_cost(
        self, requests: Decimal, utilization: Decimal, target_utilization: Decimal, unit_cost: Decimal
    ) -> Decimal:
        # cost of the requests that would bring utilization back down to the target
        if utilization <= target_utilization:
            return Decimal(0)
        factor = quo_round(utilization, target_utilization, RATIO_SCALE, ROUND_HALF_UP)
        with exact():
            return (requests * factor - requests) * unit_cost * self.underprovisioning_penalty

    def evaluate_cost(self, state: RLState) -> Decimal:
        """
        Cost of running ``state``: the price of the requested resources of all
        replicas plus a penalty for every resource used above its target.

        Raises:
            InvalidInputError: If a target utilization is zero.
        """
        if state.cpu_target_utilization == 0:
            raise InvalidInputError("cpu target utilization cannot be zero")
        if state.memory_target_utilization == 0:
            raise InvalidInputError("memory target utilization cannot be zero")

        cpu_penalty = self._underprovisioning_cost(
            state.cpu_requests, state.cpu_utilization, state.cpu_target_utilization, self.cpu_cost
        )
        memory_penalty = self._underprovisioning_cost(
            state.memory_requests, state.memory_utilization, state.memory_target_utilization, self.memory_cost
        )

        with exact():
            pod_cost = self.cpu_cost * state.cpu_requests + self.memory_cost * state.memory_requests
            return (pod_cost + cpu_penalty + memory_penalty) * state.replicas

    def update(self, learning_state: LearningState, current_state: RLState) -> LearningState:
        """
        Applies one Q-learning step to the previous state-action pair of
        ``learning_state`` using the cost observed in ``current_state``::

            Q(s, a) += alpha * (cost(s') + gamma * min_a' Q(s', a') - Q(s, a))

        Returns a new learning state; the given one is not modified. Without
        a previous state-action pair the table is returned unchanged apart
        from the initialized row of ``current_state``.
        """
        new_state = learning_state.model_copy(deep=True)
        table = new_state.table
        self.initialize_row(current_state.name, table)

        previous_state, previous_action = new_state.previous_state, new_state.previous_action
        if previous_state is None or previous_action is None:
            logger.debug("No previous state-action pair recorded, skipping update.")
            return new_state

        self.initialize_row(previous_state.name, table)

        cost = self.evaluate_cost(current_state)
        best_next = best_action_value_in_state(current_state.name, table)
        old_value = table[previous_state.name].get(previous_action, INITIAL_VALUE)

        with exact():
            new_value = old_value + self.alpha * (cost + self.gamma * best_next - old_value)
        table[previous_state.name][previous_action] = round_to(new_value, self.q_value_scale, ROUND_HALF_UP)

        logger.debug(
            "Updated Q(%s, %s): %s -> %s (cost %s)",
            previous_state.name,
            previous_action.value,
            old_value,
            table[previous_state.name][previous_action],
            cost,
        )
        return new_state

    def get_greedy_actions(self, state_name: str, learning_state: LearningState) -> List[Action]:
        """
        Returns every recorded action of ``state_name`` whose cost equals the
        lowest cost of the state. An unvisited state yields all actions.
        """
        row = learning_state.table.get(state_name)
        if not row:
            return list(self.all_actions)

        best = best_action_value_in_state(state_name, learning_state.table)
        return [action for action in self.all_actions if action in row and row[action] <= best]
