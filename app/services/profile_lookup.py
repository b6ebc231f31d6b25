# app/services/profile_lookup.py
"""
Caller identity and role resolution.

Handlers never read an ambient session: the API layer builds a
SessionContext from the bearer token and passes it down explicitly.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app import crud
from app.core.errors import ConflictError, NotFoundError, TransportError
from app.models.profile import Profile
from app.schemas.profile import CallerRole, ProfileCreate, ProfileUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    user_id: str
    role: CallerRole
    email: Optional[str] = None

    @property
    def is_mentor(self) -> bool:
        return self.role == CallerRole.mentor


def current_role(db: Session, user_id: Optional[str]) -> CallerRole:
    """
    A missing profile row (or no session at all) is 'anonymous', not an
    error. Store failures are raised as TransportError.
    """
    if not user_id:
        return CallerRole.anonymous
    try:
        role = crud.profile.get_role(db, user_id=user_id)
    except SQLAlchemyError as e:
        logger.error(
            f"Failed to look up role for user {user_id}: {e}",
            exc_info=True,
            extra={"user_id": user_id},
        )
        raise TransportError("Failed to load profile") from e
    if role is None:
        return CallerRole.anonymous
    return CallerRole(role)


def get_profile(db: Session, ctx: SessionContext) -> Profile:
    db_obj = crud.profile.get(db, id=ctx.user_id)
    if not db_obj:
        raise NotFoundError("Profile not found")
    return db_obj


def create_profile(db: Session, ctx: SessionContext, profile_in: ProfileCreate) -> Profile:
    if crud.profile.get(db, id=ctx.user_id):
        raise ConflictError("Profile already exists")
    try:
        db_obj = crud.profile.create_for_user(db, obj_in=profile_in, user_id=ctx.user_id)
    except IntegrityError:
        db.rollback()
        raise ConflictError("Profile already exists")
    logger.info(f"Profile created for user {ctx.user_id} with role {profile_in.role.value}")
    return db_obj


def update_profile(db: Session, ctx: SessionContext, profile_in: ProfileUpdate) -> Profile:
    db_obj = get_profile(db, ctx)
    return crud.profile.update(db, db_obj=db_obj, obj_in=profile_in)
