"""
Double-submit CSRF protection.

The token lives only in a cookie; a request is trusted when it echoes the same
value in a header. There is no server-side registry of issued tokens, so anyone
holding the cookie value and able to set the header passes the check.
"""
import hmac
import logging
import secrets
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from weeklydiary.core.config import settings
from weeklydiary.core.errors import CsrfFailed
from weeklydiary.core.utils import format_error

logger = logging.getLogger(__name__)

MUTATING_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


def issue_token() -> str:
    """Generate a fresh token: 32 random bytes, hex encoded."""
    return secrets.token_hex(32)


def set_csrf_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.CSRF_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_SECONDS,
        path="/",
        domain=settings.COOKIE_DOMAIN,
        secure=settings.COOKIE_SECURE,
        httponly=settings.CSRF_COOKIE_HTTPONLY,
        samesite="strict",
    )


def _header_token(request: Request) -> str:
    for name in settings.CSRF_HEADER_NAMES:
        value = request.headers.get(name)
        if value:
            return value
    return ""


def validate(request: Request) -> bool:
    """True iff both the cookie and the header token are present and equal."""
    cookie_token = request.cookies.get(settings.CSRF_COOKIE_NAME, "")
    header_token = _header_token(request)
    if not cookie_token or not header_token:
        return False
    return hmac.compare_digest(cookie_token.encode("utf-8"), header_token.encode("utf-8"))


def requires_csrf(request: Request) -> bool:
    return request.method.upper() in MUTATING_METHODS and request.url.path.startswith("/api/")


async def csrf_protect(request: Request, call_next):
    """HTTP middleware rejecting state-changing API requests without a matching token."""
    if requires_csrf(request) and not validate(request):
        logger.warning(f"CSRF validation failed for {request.method} {request.url.path}")
        error = CsrfFailed()
        return JSONResponse(status_code=error.status_code, content=format_error(error.code, error.message))
    return await call_next(request)
