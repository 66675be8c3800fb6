"""Permission entities."""

from .decision import ResolutionRequest, AccessDecision, NodePermissions

__all__ = [
    "ResolutionRequest",
    "AccessDecision",
    "NodePermissions",
]
