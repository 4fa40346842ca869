# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                  CALENDAR DIGEST ERROR HANDLING UTILITIES                   ║
# ║ Fatal error types for the digest run and a decorator for best-effort       ║
# ║ operations that must never abort it.                                       ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Standard library imports
import functools
import logging
from typing import Callable, TypeVar, Any

# Logger for this module
logger = logging.getLogger("gcaldigest")

# Type variable for generic function return types
T = TypeVar('T')

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ FATAL ERRORS                                                               ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class DigestError(Exception):
    """Base class for errors that abort a digest run with a non-zero exit."""


class ConfigError(DigestError):
    """The configuration file is missing, unreadable, or incomplete."""


class AuthError(DigestError):
    """The authenticated calendar transport could not be set up."""

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ SYNCHRONOUS ERROR HANDLING DECORATOR                                       ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- with_error_handling ---
# Decorator factory for standardized error handling in synchronous functions.
# Catches exceptions, logs them, and returns a default value.
# Args:
#     default_value: The value to return if an exception occurs.
#     error_message: A prefix for the log message when an error occurs.
# Returns: A decorator function.
def with_error_handling(
    default_value: Any = None,
    error_message: str = "An error occurred",
) -> Callable:
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.warning(f"{error_message} in {func.__name__}: {e}")
                logger.debug("Traceback:", exc_info=True)
                return default_value
        return wrapper
    return decorator
