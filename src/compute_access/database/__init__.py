"""Database utilities for compute-access."""

from .connection import (
    DatabaseManager,
    get_database,
    init_database,
    close_database,
)
from .error_handling import store_operation

__all__ = [
    "DatabaseManager",
    "get_database",
    "init_database",
    "close_database",
    "store_operation",
]
