"""Permission routers."""

from .permission_router import router, to_http_exception
from .dependencies import get_permission_service, get_current_user_id

__all__ = [
    "router",
    "to_http_exception",
    "get_permission_service",
    "get_current_user_id",
]
