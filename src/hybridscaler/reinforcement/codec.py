# src/hybridscaler/reinforcement/codec.py
"""
Encoding of the agent's learning state.

The blob is opaque to the controller, which only stores it in the custom
resource's status. Internally it is the JSON form of
:class:`~hybridscaler.models.learning.LearningState`, with every cost written
as a decimal string so values survive a round trip unchanged.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from ..core.exceptions import SerializationError
from ..models.learning import LearningState

logger = logging.getLogger(__name__)


def encode_learning_state(learning_state: LearningState) -> bytes:
    """Serializes ``learning_state`` to bytes."""
    try:
        return learning_state.model_dump_json().encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"unable to encode learning state, {e}") from e


def decode_learning_state(data: Optional[bytes]) -> LearningState:
    """
    Deserializes a blob written by :func:`encode_learning_state`.

    An absent or empty blob is a workload seen for the first time and yields
    an empty learning state.

    Raises:
        SerializationError: If the blob is not a valid learning state.
    """
    if not data:
        return LearningState()

    try:
        return LearningState.model_validate_json(data)
    except (ValidationError, UnicodeDecodeError) as e:
        logger.error("Persisted learning state cannot be decoded (%d bytes).", len(data))
        raise SerializationError(f"unable to decode learning state, {e}") from e
