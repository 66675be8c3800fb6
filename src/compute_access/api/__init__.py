"""HTTP application for compute-access."""

from .app import create_app, build_permission_service, user_id_from_header

__all__ = [
    "create_app",
    "build_permission_service",
    "user_id_from_header",
]
