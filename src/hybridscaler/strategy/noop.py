from typing import Optional, Tuple

from ..models.resources import ScalingDecision, State
from .base import ScalingStrategy


def no_change(state: State) -> ScalingDecision:
    """A decision that mirrors the current allocation."""
    return ScalingDecision(
        replicas=state.replicas,
        container_resources={name: r.model_copy(deep=True) for name, r in state.container_resources.items()},
    )


class NoOpStrategy(ScalingStrategy):
    """Keeps the workload as it is and hands the learning state back untouched."""

    def make_decision(
        self, state: State, learning_state: Optional[bytes]
    ) -> Tuple[ScalingDecision, Optional[bytes]]:
        return no_change(state), learning_state
