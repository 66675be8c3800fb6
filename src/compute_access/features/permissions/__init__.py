"""Permissions feature.

Scope control, access resolution and the permission management API.
"""

from .entities import AccessDecision, NodePermissions, ResolutionRequest
from .services import AccessScopeController, PermissionResolver, PermissionService

__all__ = [
    "AccessDecision",
    "NodePermissions",
    "ResolutionRequest",
    "AccessScopeController",
    "PermissionResolver",
    "PermissionService",
]
