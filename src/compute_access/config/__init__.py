"""Configuration for compute-access."""

from .constants import (
    AccessScope,
    AccessSource,
    AccessType,
    DatabaseTables,
    EntityType,
    IdentifierFormat,
)
from .logging_config import LoggingConfig, get_logger, setup_logging
from .settings import ComputeAccessSettings, get_settings

__all__ = [
    "AccessScope",
    "AccessSource",
    "AccessType",
    "DatabaseTables",
    "EntityType",
    "IdentifierFormat",
    "LoggingConfig",
    "get_logger",
    "setup_logging",
    "ComputeAccessSettings",
    "get_settings",
]
