"""
Error handling decorators for backend operations.

- Translate platform IO errors into tetherio exceptions (wrap_io_error)
- Report the path involved in every translated error
"""

import functools
import logging

from ..exceptions import (
    StreamIOError,
    PathNotFoundError,
    OperationFailedError,
)
logger = logging.getLogger(__name__)


def _path_arg(args, kwargs) -> str | None:
    # bound methods receive (self, path, ...)
    path = kwargs.get("path", args[1] if len(args) > 1 else None)
    return None if path is None else str(path)


def wrap_io_error(func):
    """
    Decorator to wrap IO errors into tetherio exceptions.

    FileNotFoundError becomes PathNotFoundError, any other OSError becomes
    OperationFailedError carrying the platform error code. Errors that are
    already StreamIOError pass through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except StreamIOError:
            raise
        except FileNotFoundError as e:
            path = _path_arg(args, kwargs)
            raise PathNotFoundError(f"Path not found '{path}': {e.strerror or e}", path) from e
        except OSError as e:
            path = _path_arg(args, kwargs)
            logger.debug(f"{func.__name__} failed for '{path}' with errno {e.errno}")
            raise OperationFailedError(
                f"Operation '{func.__name__}' failed for '{path}' ({e.errno}): {e.strerror or e}",
                path,
                code=e.errno,
            ) from e

    return wrapper
