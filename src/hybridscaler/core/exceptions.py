class HybridScalerError(Exception):
    """Base exception for the hybrid scaler."""

    pass


class InvalidInputError(HybridScalerError, ValueError):
    """Raised when a required denominator or input value is missing or zero."""

    pass


class SerializationError(HybridScalerError):
    """Raised when a persisted learning state cannot be encoded or decoded."""

    pass


class BoundaryExhaustionError(HybridScalerError):
    """Raised when a hybrid step would leave the workload with zero replicas."""

    pass
