"""Deterministic resource allocation algorithms dispatched by the agent."""

from .horizontal import horizontal
from .hybrid import hybrid, hybrid_inverse
from .vertical import vertical

__all__ = ["horizontal", "vertical", "hybrid", "hybrid_inverse"]
