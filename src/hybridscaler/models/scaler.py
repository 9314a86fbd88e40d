# src/hybridscaler/models/scaler.py
"""
Pydantic models of the HybridScaler custom resource.

Field names are snake_case in Python and camelCase on the wire, matching the
resource's JSON representation. Resource amounts stay Kubernetes quantity
strings ("250m", "128Mi") here; the state builder parses them.
"""

from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..utils.k8s_utils import parse_quantity

QuantityValue = Union[str, int, float]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LearningType(str, Enum):
    """Enumeration of the available scaling strategies."""

    NONE = "NONE"
    QLEARNING = "QLEARNING"


class CrossVersionObjectReference(_CamelModel):
    api_version: Optional[str] = None
    kind: str = "Deployment"
    name: str


class QLearningParams(_CamelModel):
    """Cost model and learning parameters, given as Kubernetes quantities."""

    cpu_cost: Decimal = Field(..., description="Cost of one CPU core per replica.")
    memory_cost: Decimal = Field(..., description="Cost of one byte of memory per replica.")
    underprovisioning_penalty: Decimal = Field(..., description="Factor applied to missing resources.")
    learning_rate: Decimal = Field(..., description="Alpha of the update rule.")
    discount_factor: Decimal = Field(..., description="Gamma of the update rule.")
    epsilon: Optional[float] = Field(None, ge=0.0, le=1.0, description="Exploration probability.")

    @field_validator(
        "cpu_cost", "memory_cost", "underprovisioning_penalty", "learning_rate", "discount_factor", mode="before"
    )
    @classmethod
    def _parse_quantity(cls, value):
        return parse_quantity(value)


class ResourcePolicy(_CamelModel):
    """Pod level resource bounds and targets."""

    min_allowed: Dict[str, QuantityValue] = Field(default_factory=dict)
    max_allowed: Dict[str, QuantityValue] = Field(default_factory=dict)
    target_utilization: Dict[str, int] = Field(default_factory=dict, description="Percent per resource.")
    limits_to_requests_ratio_cpu: Optional[QuantityValue] = None
    limits_to_requests_ratio_memory: Optional[QuantityValue] = None


class HybridScalerSpec(_CamelModel):
    scale_target_ref: CrossVersionObjectReference
    min_replicas: Optional[int] = None
    max_replicas: Optional[int] = None
    interval: Optional[int] = Field(None, description="Seconds between two reconciliations.")
    learning_type: Optional[LearningType] = None
    q_learning_params: Optional[QLearningParams] = None
    resource_policy: ResourcePolicy = Field(default_factory=ResourcePolicy)


class ContainerResourceSpec(_CamelModel):
    requests: Dict[str, QuantityValue] = Field(default_factory=dict)
    limits: Dict[str, QuantityValue] = Field(default_factory=dict)


class PodMetricsStatus(_CamelModel):
    resource_usage: Dict[str, QuantityValue] = Field(default_factory=dict)
    latency_threshold_exceeded: bool = False


class HybridScalerStatus(_CamelModel):
    replicas: int = 0
    container_resources: Dict[str, ContainerResourceSpec] = Field(default_factory=dict)
    pod_metrics: PodMetricsStatus = Field(default_factory=PodMetricsStatus)
    learning_state: Optional[str] = Field(None, description="Base64 encoded learning state blob.")


class ObjectMeta(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str
    namespace: str = "default"


class HybridScaler(_CamelModel):
    api_version: str = "scaling.autoscaling.custom/v1"
    kind: str = "HybridScaler"
    metadata: ObjectMeta
    spec: HybridScalerSpec
    status: HybridScalerStatus = Field(default_factory=HybridScalerStatus)

    @property
    def key(self) -> str:
        return f"{self.metadata.namespace}/{self.metadata.name}"
