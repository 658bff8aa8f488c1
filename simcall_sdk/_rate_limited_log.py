"""
Thread-safe rate-limited logging utilities.

Simulated calls are served at high rates, so notices that depend only on the
request shape (e.g. an allowance too large to cap the gas limit) are logged at
most once per TTL window instead of once per call.
"""
import logging
import threading
from typing import Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

# At most 100 distinct messages, each suppressed for one hour once logged
_log_cache: TTLCache = TTLCache(maxsize=100, ttl=3600)
_log_cache_lock = threading.RLock()


def rate_limited_log(
    message: str,
    level: str = "warning",
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message unless the same message was logged recently.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was emitted, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)

    key = f"{level}:{message}"
    with _log_cache_lock:
        if key in _log_cache:
            return False
        log_method(message)
        _log_cache[key] = True
    return True


def reset_rate_limits() -> None:
    """Forget every logged message."""
    with _log_cache_lock:
        _log_cache.clear()
