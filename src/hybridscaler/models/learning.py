# src/hybridscaler/models/learning.py

from decimal import Decimal
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Action(str, Enum):
    """The scaling actions the agent chooses from."""

    NONE = "NONE"
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"
    HYBRID = "HYBRID"
    HYBRID_INVERSE = "HYBRID_INVERSE"


ALL_ACTIONS = (Action.NONE, Action.HORIZONTAL, Action.VERTICAL, Action.HYBRID, Action.HYBRID_INVERSE)


class RLState(BaseModel):
    """
    Quantized projection of a :class:`~hybridscaler.models.resources.State`.

    ``name`` has the form
    ``<replicas>_<cpu-limits>_<memory-limits>_<cpu-utilization>_<memory-utilization>``
    where every part but the replicas is a percentage bucket. It is the only
    field used as a Q-table key; the remaining fields feed the cost model.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    replicas: int
    cpu_requests: Decimal
    memory_requests: Decimal
    cpu_utilization: Decimal = Field(..., description="CPU usage as a fraction of requests.")
    memory_utilization: Decimal = Field(..., description="Memory usage as a fraction of requests.")
    cpu_target_utilization: Decimal
    memory_target_utilization: Decimal


# state name -> action -> expected cost (lower is better)
QTable = Dict[str, Dict[Action, Decimal]]


class LearningState(BaseModel):
    """Everything the agent remembers between two decisions for one workload."""

    model_config = ConfigDict(extra="forbid")

    table: QTable = Field(default_factory=dict)
    previous_state: Optional[RLState] = None
    previous_action: Optional[Action] = None
