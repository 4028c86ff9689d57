import functools
import inspect
import logging

logger = logging.getLogger(__name__)


def safe_call(default=None):
    """Log and swallow any exception raised by the wrapped callable.

    Used for fire-and-forget work such as notification delivery, where a
    failure must never reach the caller. Works for plain and async functions.
    """
    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception:
                    logger.exception("Error in %s", func.__name__)
                    return default
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception("Error in %s", func.__name__)
                return default
        return wrapper
    return decorator
