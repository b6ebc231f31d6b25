# app/core/route_gate.py
import logging

from fastapi import Request
from fastapi.responses import RedirectResponse
from jose import JWTError

from app.core.security import bearer_token, decode_access_token, sign_in_url

logger = logging.getLogger(__name__)

GATED_PREFIXES = ("/my-masterclasses",)


def _has_session(request: Request) -> bool:
    token = bearer_token(request.headers.get("Authorization"))
    if token is None:
        return False
    try:
        decode_access_token(token)
    except (JWTError, ValueError):
        return False
    return True


async def route_gate_middleware(request: Request, call_next):
    """
    Sends anonymous requests for gated pages to the sign-in page, with the
    requested path as the return URL.
    """
    path = request.url.path
    if path.startswith(GATED_PREFIXES) and not _has_session(request):
        return_path = f"{path}?{request.url.query}" if request.url.query else path
        logger.info(f"Redirecting anonymous request for {path} to sign-in")
        return RedirectResponse(sign_in_url(return_path), status_code=307)
    return await call_next(request)
