"""FastAPI application factory for the compute node permission API."""

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse

from ..__version__ import __version__
from ..config.settings import get_settings
from ..core.exceptions import ComputeAccessError, ConfigurationError, create_error_response, get_http_status_code
from ..database.connection import DatabaseManager, close_database, get_database, init_database
from ..features.node_access import AsyncPGNodeAccessStore, AsyncPGNodeScopeStore
from ..features.permissions.routers import get_current_user_id, get_permission_service, router
from ..features.permissions.services import PermissionService
from ..features.teams import create_team_directory

logger = logging.getLogger(__name__)


async def user_id_from_header(x_user_id: Optional[str] = Header(None)) -> str:
    """Read the caller's external user id from the X-User-Id header."""
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id


async def build_permission_service() -> PermissionService:
    """Wire a PermissionService against the configured database."""
    settings = get_settings()
    if not settings.is_database_configured:
        raise ConfigurationError("DATABASE_URL is required to build the permission service")

    database = await init_database()
    return PermissionService(
        access_store=AsyncPGNodeAccessStore(database),
        scope_store=AsyncPGNodeScopeStore(database),
        directory=create_team_directory(database),
    )


def create_app(
    service: Optional[PermissionService] = None,
    user_id_dependency: Optional[Callable] = None,
    database: Optional[DatabaseManager] = None,
) -> FastAPI:
    """Create the compute node permission API.

    Args:
        service: Pre-built service; when omitted one is wired against the
            configured database at startup.
        user_id_dependency: Dependency returning the caller's user id
            (defaults to the X-User-Id header).
        database: Database checked by /health; set at startup when the
            service is wired against the configured database.
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.permission_service is None:
            app.state.permission_service = await build_permission_service()
            app.state.database = get_database()
            logger.info("Permission service connected to database")
        yield
        if service is None:
            await close_database()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.permission_service = service
    app.state.database = database

    @app.exception_handler(ComputeAccessError)
    async def compute_access_error_handler(request: Request, exc: ComputeAccessError):
        return JSONResponse(
            status_code=get_http_status_code(exc),
            content=create_error_response(exc),
        )

    def _service(request: Request) -> PermissionService:
        return request.app.state.permission_service

    app.dependency_overrides[get_permission_service] = _service
    app.dependency_overrides[get_current_user_id] = user_id_dependency or user_id_from_header
    app.include_router(router)

    @app.get("/health", tags=["Health"])
    async def health(request: Request):
        database = request.app.state.database
        if database is None:
            return {"status": "ok", "version": __version__, "database": "not configured"}

        if not await database.health_check():
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "version": __version__, "database": "unreachable"},
            )
        return {"status": "ok", "version": __version__, "database": "ok"}

    return app
