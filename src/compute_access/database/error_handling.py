"""Error handling for database-backed stores and lookups.

Backend errors surface as StoreFailureError with the original error chained.
Domain errors raised inside the wrapped call pass through untouched.
"""

import functools
import logging
from typing import Callable, Any

from ..core.exceptions import ComputeAccessError, StoreFailureError

logger = logging.getLogger(__name__)


def store_operation(operation_name: str) -> Callable:
    """Decorator translating backend errors into StoreFailureError.

    Usage:
        @store_operation("grant")
        async def grant(self, grant):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                return await func(*args, **kwargs)
            except ComputeAccessError:
                raise
            except Exception as e:
                logger.error(f"Store operation '{operation_name}' failed: {e}")
                raise StoreFailureError(operation_name, str(e)) from e
        return wrapper
    return decorator
