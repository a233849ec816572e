# =============================================================================
# app/secure.py - HTTP -> HTTPS Redirect Hook
# =============================================================================
# Request hook for the redirect listener: every plain HTTP request is
# answered with a permanent redirect to the same path on the HTTPS host.
#
# Usage:
#   hook = ssl_redirect_hook("example.com:443")
#   engine.add_middleware(BaseHTTPMiddleware, dispatch=hook)
# =============================================================================

import logging
from typing import Awaitable, Callable, Iterable

from fastapi import Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from app.exceptions import WebcoatException

logger = logging.getLogger(__name__)

REDIRECT_STATUS = 301


class BadHostError(WebcoatException):
    """Raised when a request's Host header isn't one of the allowed hosts."""

    def __init__(self, host: str):
        super().__init__(
            message=f"Bad host name: {host or '<empty>'}",
            code="BAD_HOST",
            status_code=400,
            suggestion="Send the request to one of the configured host names",
            details={"host": host},
        )


def build_redirect_url(
    request: Request,
    ssl_host: str,
    allowed_hosts: Iterable[str] | None = None,
) -> str | None:
    """
    Work out where ``request`` should be redirected.

    Args:
        request: Incoming request
        ssl_host: HTTPS host and port to redirect to, e.g. "example.com:443"
        allowed_hosts: If given, Host headers (without port) that are accepted

    Returns:
        The https:// URL to redirect to, or None if the request is already secure

    Raises:
        BadHostError: If allowed_hosts is set and the Host header isn't in it
    """
    if allowed_hosts is not None:
        host = request.headers.get("host", "").split(":", 1)[0]
        if host not in set(allowed_hosts):
            raise BadHostError(host)

    if request.url.scheme == "https":
        return None

    location = f"https://{ssl_host}{request.url.path}"
    if request.url.query:
        location += f"?{request.url.query}"
    return location


def ssl_redirect_hook(
    ssl_host: str,
    allowed_hosts: Iterable[str] | None = None,
    status_code: int = REDIRECT_STATUS,
) -> Callable[[Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]]:
    """Create a request hook that redirects plain HTTP traffic to ``ssl_host``."""
    allowed = list(allowed_hosts) if allowed_hosts is not None else None

    async def redirect_to_https(request: Request, call_next):
        try:
            location = build_redirect_url(request, ssl_host, allowed)
        except BadHostError as e:
            logger.warning(
                f"HTTPS redirect refused: code={e.code} host={e.details['host']!r} "
                f"path={request.url.path}"
            )
            return JSONResponse(status_code=e.status_code, content=e.to_dict())

        if location is None:
            return await call_next(request)
        return RedirectResponse(location, status_code=status_code)

    return redirect_to_https
