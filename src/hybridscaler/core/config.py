# src/hybridscaler/core/config.py

import logging
import os

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

LEARNING_TYPES = ("NONE", "QLEARNING")


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- Reinforcement learning variables ---
    # Usage and limits ratios are discretized into buckets of this many percentage points.
    PERCENTAGE_QUANTUM = int(os.getenv("HYBRIDSCALER_PERCENTAGE_QUANTUM", "25"))
    # Fractional digits kept for every Q-value after an update.
    Q_VALUE_SCALE = int(os.getenv("HYBRIDSCALER_Q_VALUE_SCALE", "8"))

    # EPSILON and LEARNING_TYPE are properties so tests and callers can change
    # the environment after import and still see the new value.
    @property
    def QLEARNING_EPSILON(self) -> float:
        return float(os.getenv("HYBRIDSCALER_QLEARNING_EPSILON", "0.1"))

    @property
    def LEARNING_TYPE(self) -> str:
        return os.getenv("HYBRIDSCALER_LEARNING_TYPE", "QLEARNING").upper()

    def validate_instance(self):
        if self.PERCENTAGE_QUANTUM <= 0:
            raise ValueError("HYBRIDSCALER_PERCENTAGE_QUANTUM must be a positive integer.")
        if self.Q_VALUE_SCALE < 0:
            raise ValueError("HYBRIDSCALER_Q_VALUE_SCALE must not be negative.")
        if not 0.0 <= self.QLEARNING_EPSILON <= 1.0:
            raise ValueError("HYBRIDSCALER_QLEARNING_EPSILON must be between 0 and 1.")
        if self.LEARNING_TYPE not in LEARNING_TYPES:
            raise ValueError(f"HYBRIDSCALER_LEARNING_TYPE must be one of {', '.join(LEARNING_TYPES)}.")
        if self.QLEARNING_EPSILON == 0.0:
            logging.getLogger(__name__).debug("Exploration disabled, the agent only exploits its Q-table.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
