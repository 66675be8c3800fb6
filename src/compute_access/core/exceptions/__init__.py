"""Exceptions module for compute-access.

Provides the exception hierarchy, organized by domain concerns and
infrastructure concerns.
"""

from .base import (
    ComputeAccessError,
    get_http_status_code,
    create_error_response,
)

from .domain import (
    # Input Errors
    InvalidInputError,
    InvalidKindError,

    # Scope Errors
    ScopeViolationError,
    OwnerGrantError,
    OrganizationIndependentNodeError,

    # Lookup Errors
    NotFoundError,
    NodeNotFoundError,

    # Authorization Errors
    PermissionDeniedError,
)

from .infrastructure import (
    ConfigurationError,
    StoreFailureError,
)

from .http_mapping import is_retryable

__all__ = [
    "ComputeAccessError",
    "get_http_status_code",
    "create_error_response",
    "is_retryable",
    "InvalidInputError",
    "InvalidKindError",
    "ScopeViolationError",
    "OwnerGrantError",
    "OrganizationIndependentNodeError",
    "NotFoundError",
    "NodeNotFoundError",
    "PermissionDeniedError",
    "ConfigurationError",
    "StoreFailureError",
]
