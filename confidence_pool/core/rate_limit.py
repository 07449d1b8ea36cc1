"""
Request rate limiting (slowapi).

Clients are keyed by the first ``X-Forwarded-For`` address when the API
sits behind a proxy, otherwise by the peer address. Counters live in
memory unless ``RATE_LIMIT_STORAGE=redis``.
"""
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from confidence_pool.core.config import settings

DEFAULT_LIMIT = "60/minute"
HEALTH_LIMIT = "120/minute"


def client_key(request: Request) -> str:
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded_for.split(",")[0].strip()
    return first_hop or get_remote_address(request)


limiter = Limiter(
    key_func=client_key,
    default_limits=[DEFAULT_LIMIT],
    storage_uri=settings.REDIS_URL if settings.RATE_LIMIT_STORAGE == "redis" else "memory://",
    enabled=settings.RATE_LIMIT_ENABLED,
)
