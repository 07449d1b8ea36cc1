"""
Admin API key check.

Recording actual picks, changing a draft's live/completed flags and
importing mock drafts are "Oracle" actions. Their router depends on
``require_admin_key``, which compares the ``X-API-Key`` header with the
configured ``API_KEY``.

With no key configured, development and test environments let admin
requests through; production rejects them.
"""
import hmac
from typing import Optional

from fastapi import HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

from confidence_pool.core.config import settings
from confidence_pool.core.logging import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "X-API-Key"
UNCONFIGURED_KEY = "unconfigured"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def require_admin_key(request: Request, api_key: Optional[str] = Security(api_key_header)) -> str:
    """
    Raises:
        HTTPException: 401 when the key is missing (or not configured in
            production), 403 when it does not match
    """
    if not settings.API_KEY:
        if settings.is_production():
            logger.error("Admin request rejected: API_KEY is not configured")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Admin API key is not configured."
            )
        return UNCONFIGURED_KEY

    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {API_KEY_HEADER} header."
        )

    if not hmac.compare_digest(api_key.encode(), settings.API_KEY.encode()):
        client = request.client.host if request.client else "unknown"
        logger.warning(f"Invalid admin API key from {client} on {request.url.path}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid API key.")

    return api_key
