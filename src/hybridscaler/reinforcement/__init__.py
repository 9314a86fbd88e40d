"""Q-learning agent choosing between the scaling algorithms."""

from .agent import QAgent
from .codec import decode_learning_state, encode_learning_state
from .q_learning import INITIAL_VALUE, QLearning, best_action_value_in_state
from .quantization import convert_state, quantize_percentage

__all__ = [
    "QAgent",
    "QLearning",
    "INITIAL_VALUE",
    "best_action_value_in_state",
    "convert_state",
    "quantize_percentage",
    "encode_learning_state",
    "decode_learning_state",
]
