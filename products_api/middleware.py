# products_api/middleware.py
import logging
from datetime import datetime, timezone

from fastapi import Request

from .config import Config
from .errors import AuthenticationError

logger = logging.getLogger("products_api.requests")

# Every path under this prefix needs the API key header, matched or not
PROTECTED_PREFIX = "/api/products"


async def log_requests(request: Request, call_next):
    """Log method and url of every request; never alters the response."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    url = request.url.path
    if request.url.query:
        url += f"?{request.url.query}"
    logger.info("[%s] %s %s", stamp, request.method, url)
    return await call_next(request)


def is_protected(path: str) -> bool:
    return path == PROTECTED_PREFIX or path.startswith(PROTECTED_PREFIX + "/")


def check_api_key(request: Request) -> None:
    # Presence check only, the key's value is never verified
    if is_protected(request.url.path) and not request.headers.get(Config.API_KEY_HEADER):
        raise AuthenticationError("API key required. Please provide x-api-key in headers")
