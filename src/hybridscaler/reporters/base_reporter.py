# src/hybridscaler/reporters/base_reporter.py
"""
Defines the abstract base class for all reporters.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.learning import LearningState
from ..models.resources import ScalingDecision, State


class BaseReporter(ABC):
    """
    Abstract Base Class for all reporters.
    """

    @abstractmethod
    def report(self, decision: ScalingDecision, state: Optional[State] = None):
        """
        Presents a scaling decision, next to the state it was made for if given.
        """
        pass

    @abstractmethod
    def report_learning_state(self, learning_state: LearningState):
        """
        Presents the agent's Q-table and its last state-action pair.
        """
        pass
