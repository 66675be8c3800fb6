"""Infrastructure exceptions for compute-access."""

from .base import ComputeAccessError


class ConfigurationError(ComputeAccessError):
    """Raised when there's a configuration issue."""
    pass


class StoreFailureError(ComputeAccessError):
    """Raised when a backing store or directory lookup fails.

    Always raised with the original backend error chained as __cause__.
    """

    def __init__(self, operation: str, reason: str = ""):
        self.operation = operation
        self.reason = reason
        message = f"Store operation '{operation}' failed"
        if reason:
            message += f": {reason}"
        super().__init__(message, details={"operation": operation})
