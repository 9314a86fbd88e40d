"""Scaling strategies. Use :func:`hybridscaler.strategy.factory.get_scaling_strategy` to pick one."""

from .base import ScalingStrategy
from .noop import NoOpStrategy, no_change

__all__ = ["ScalingStrategy", "NoOpStrategy", "no_change"]
