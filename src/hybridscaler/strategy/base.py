from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..models.resources import ScalingDecision, State


class ScalingStrategy(ABC):
    """Abstract base class for scaling strategies.

    A strategy receives the state of one workload and the learning state it
    returned for that workload last time, and returns the next decision along
    with the learning state to persist.
    """

    @abstractmethod
    def make_decision(
        self, state: State, learning_state: Optional[bytes]
    ) -> Tuple[ScalingDecision, Optional[bytes]]:
        raise NotImplementedError()
