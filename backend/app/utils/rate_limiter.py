"""
In-memory fixed-window rate limiter used to throttle login attempts per client IP.
State lives in this process only; run a single worker or front it with a shared limiter.
"""
import logging
import time
from typing import Dict, Tuple

from fastapi import Request

from app.errors import RateLimited

logger = logging.getLogger(__name__)

# {(ip, path): (window_start, count)}
_rate_limit_store: Dict[Tuple[str, str], Tuple[float, int]] = {}


def reset_rate_limits() -> None:
    _rate_limit_store.clear()


def rate_limit(requests: int, window: int):
    """
    Dependency factory for rate limiting.
    Example: Depends(rate_limit(requests=10, window=60))
    """
    def limiter(request: Request):
        ip = request.client.host if request.client else "unknown"
        key = (ip, request.url.path)
        now = time.time()

        window_start, count = _rate_limit_store.get(key, (now, 0))

        # Reset window if expired
        if now - window_start > window:
            window_start, count = now, 0

        if count >= requests:
            retry_after = max(1, int(window - (now - window_start)))
            logger.warning("Rate limit hit for %s on %s", ip, request.url.path)
            raise RateLimited(retry_after)

        _rate_limit_store[key] = (window_start, count + 1)
        return True

    return limiter
