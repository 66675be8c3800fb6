"""HTTP status code mapping for exceptions.

Lookups walk the exception's MRO so subclasses inherit the status of the
closest mapped ancestor.
"""

from typing import Dict, Type

from .domain import (
    InvalidInputError,
    InvalidKindError,
    ScopeViolationError,
    OwnerGrantError,
    OrganizationIndependentNodeError,
    NotFoundError,
    NodeNotFoundError,
    PermissionDeniedError,
)
from .infrastructure import ConfigurationError, StoreFailureError


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    InvalidInputError: 400,
    InvalidKindError: 400,
    ScopeViolationError: 400,
    OwnerGrantError: 400,
    OrganizationIndependentNodeError: 400,

    # 403 Forbidden
    PermissionDeniedError: 403,

    # 404 Not Found
    NotFoundError: 404,
    NodeNotFoundError: 404,

    # 500 Internal Server Error
    ConfigurationError: 500,

    # 503 Service Unavailable (retryable)
    StoreFailureError: 503,
}

DEFAULT_STATUS_CODE = 500


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for an exception instance."""
    for exception_type in type(exception).__mro__:
        if exception_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exception_type]
    return DEFAULT_STATUS_CODE


def is_retryable(exception: Exception) -> bool:
    """Check if the caller may retry the failed operation."""
    return get_http_status_code(exception) == 503
