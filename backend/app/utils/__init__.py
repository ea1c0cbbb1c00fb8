from app.utils.rate_limiter import rate_limit, reset_rate_limits

__all__ = ["rate_limit", "reset_rate_limits"]
