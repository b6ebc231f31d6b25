# app/core/security.py
"""
Token decoding and sign-in redirect helpers.

Tokens are issued by the hosted auth service (HS256, shared secret); this
service only verifies them.
"""

from typing import Optional
from urllib.parse import quote, urlparse

from jose import jwt

from app.core.config import settings
from app.schemas.token import TokenPayload


def decode_access_token(token: str) -> TokenPayload:
    """
    Raises jose.JWTError for a bad signature/expiry and pydantic's
    ValidationError (a ValueError) for a malformed payload.
    """
    options = {"verify_aud": settings.JWT_AUDIENCE is not None}
    payload = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=["HS256"],
        audience=settings.JWT_AUDIENCE,
        options=options,
    )
    return TokenPayload(**payload)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def safe_return_path(path: str) -> str:
    """Only same-site absolute paths survive; anything else becomes '/'."""
    parsed = urlparse(path)
    if parsed.scheme or parsed.netloc or not path.startswith("/") or path.startswith("//"):
        return "/"
    return path


def sign_in_url(return_path: str) -> str:
    return f"{settings.AUTH_PAGE_PATH}?returnUrl={quote(safe_return_path(return_path), safe='/')}"
