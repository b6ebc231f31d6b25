# app/api/deps.py
from datetime import datetime
from typing import Callable, Generator

from fastapi import Depends, Security
from fastapi.security import OAuth2PasswordBearer, APIKeyHeader
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import UnauthenticatedError
from app.core.security import decode_access_token
from app.db.session import SessionLocal
from app.schemas.token import TokenPayload
from app.services.availability import utcnow
from app.services.profile_lookup import SessionContext, current_role


def get_db() -> Generator:
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_clock() -> Callable[[], datetime]:
    """Wall clock; overridden in tests."""
    return utcnow


def get_now(clock: Callable[[], datetime] = Depends(get_clock)) -> datetime:
    return clock()


# The tokenUrl is only for the OpenAPI docs; tokens come from the auth service.
# auto_error is off so a missing token goes through the AppError envelope too.
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def get_current_user(
    token: str | None = Depends(oauth2_scheme_optional),
) -> TokenPayload:
    if token is None:
        raise UnauthenticatedError()
    try:
        return decode_access_token(token)
    except (JWTError, ValueError):
        # Catches any error from jose or Pydantic validation
        raise UnauthenticatedError("Could not validate credentials")


def get_current_user_optional(
    token: str | None = Depends(oauth2_scheme_optional),
) -> TokenPayload | None:
    if token is None:
        return None
    try:
        return decode_access_token(token)
    except (JWTError, ValueError):
        # An invalid token is treated like no session at all.
        return None


def get_session_context(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(get_current_user),
) -> SessionContext:
    return SessionContext(
        user_id=current_user.sub,
        role=current_role(db, current_user.sub),
        email=current_user.email,
    )


def get_session_context_optional(
    db: Session = Depends(get_db),
    current_user: TokenPayload | None = Depends(get_current_user_optional),
) -> SessionContext | None:
    if current_user is None:
        return None
    return SessionContext(
        user_id=current_user.sub,
        role=current_role(db, current_user.sub),
        email=current_user.email,
    )


# Define the header we expect the key to be in
api_key_header = APIKeyHeader(name="X-Internal-Api-Key", auto_error=False)


def get_internal_api_key(api_key: str = Security(api_key_header)) -> str:
    """
    Checks for and validates the internal API key from the request header.
    """
    if api_key == settings.INTERNAL_API_KEY:
        return api_key
    raise UnauthenticatedError("Invalid or missing Internal API Key")
