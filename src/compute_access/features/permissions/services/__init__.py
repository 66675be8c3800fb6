"""Permission services."""

from .scope_controller import AccessScopeController
from .permission_resolver import PermissionResolver, ResolverStep
from .permission_service import PermissionService

__all__ = [
    "AccessScopeController",
    "PermissionResolver",
    "ResolverStep",
    "PermissionService",
]
