# src/hybridscaler/models/resources.py
"""
This module defines the Pydantic data models shared by the scaling algorithms,
the reinforcement learning agent and the custom resource glue. Every resource
amount is an exact ``Decimal`` in base units: cores for CPU, bytes for memory.
"""

from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResourcesList(BaseModel):
    """A CPU and memory pair."""

    model_config = ConfigDict(extra="forbid")

    cpu: Decimal = Field(default=Decimal(0), description="CPU in cores.")
    memory: Decimal = Field(default=Decimal(0), description="Memory in bytes.")


class Resources(BaseModel):
    """Resource requests and limits of a single container or of a whole pod."""

    model_config = ConfigDict(extra="forbid")

    requests: ResourcesList = Field(default_factory=ResourcesList)
    limits: ResourcesList = Field(default_factory=ResourcesList)


# Maps a container's name to its allocated resources
ContainerResources = Dict[str, Resources]


class Constraints(BaseModel):
    """Scaling bounds. Resource bounds apply to the pod as a whole."""

    model_config = ConfigDict(extra="forbid")

    min_replicas: int = Field(default=0, ge=0)
    max_replicas: int = Field(default=0, ge=0)
    min_resources: ResourcesList = Field(default_factory=ResourcesList)
    max_resources: ResourcesList = Field(default_factory=ResourcesList)
    limits_to_requests_ratio: Optional[ResourcesList] = Field(
        None, description="Pinned limits-to-requests ratio; derived from the first state when unset."
    )


class PodMetrics(BaseModel):
    """Average usage of a pod together with the pod's summed requests and limits."""

    model_config = ConfigDict(extra="forbid")

    resource_usage: ResourcesList = Field(default_factory=ResourcesList)
    requests: ResourcesList = Field(default_factory=ResourcesList)
    limits: ResourcesList = Field(default_factory=ResourcesList)
    latency_threshold_exceeded: bool = False


class State(BaseModel):
    """
    Snapshot of a scaled workload, built fresh by the controller for every
    reconciliation and treated as read-only by the decision engine.

    Target utilization is a fraction per resource, e.g. ``0.5`` for 50%.
    """

    model_config = ConfigDict(extra="forbid")

    replicas: int = Field(default=0, ge=0)
    container_resources: ContainerResources = Field(default_factory=dict)
    constraints: Constraints = Field(default_factory=Constraints)
    pod_metrics: PodMetrics = Field(default_factory=PodMetrics)
    target_utilization: ResourcesList = Field(default_factory=ResourcesList)


class ScalingDecision(BaseModel):
    """The next desired allocation of a workload."""

    model_config = ConfigDict(extra="forbid")

    replicas: int
    container_resources: ContainerResources = Field(default_factory=dict)
    description: Optional[str] = Field(None, description="Name of the action that produced the decision.")
