# app/services/mentor_authoring.py
import logging
from datetime import datetime
from typing import List

from sqlalchemy.orm import Session

from app import crud
from app.core.errors import (
    AppError,
    ConflictError,
    ErrorCategory,
    ForbiddenError,
    NotFoundError,
)
from app.models.mentor_masterclass import MentorMasterclass
from app.schemas.masterclass import MentorMasterclassCreate
from app.services.availability import as_utc
from app.services.profile_lookup import SessionContext

logger = logging.getLogger(__name__)


def _require_mentor(ctx: SessionContext) -> None:
    if not ctx.is_mentor:
        raise ForbiddenError("Only mentors can manage masterclasses")


def create_mentor_masterclass(
    db: Session, ctx: SessionContext, obj_in: MentorMasterclassCreate, now: datetime
) -> MentorMasterclass:
    """New masterclasses start as drafts until moderation publishes them."""
    _require_mentor(ctx)
    if as_utc(obj_in.start_time) < as_utc(now):
        raise AppError(
            "Start time must be in the future",
            category=ErrorCategory.VALIDATION,
            status_code=400,
            details={"field": "start_time"},
        )
    db_obj = crud.mentor_masterclass.create_for_mentor(
        db, obj_in=obj_in, mentor_id=ctx.user_id
    )
    logger.info(f"Mentor {ctx.user_id} created masterclass {db_obj.id} (draft)")
    return db_obj


def list_own_masterclasses(db: Session, ctx: SessionContext) -> List[MentorMasterclass]:
    _require_mentor(ctx)
    return crud.mentor_masterclass.get_multi_by_mentor(db, mentor_id=ctx.user_id)


def publish(db: Session, masterclass_id: str) -> MentorMasterclass:
    db_obj = crud.mentor_masterclass.get(db, id=masterclass_id)
    if not db_obj:
        raise NotFoundError("Masterclass not found")
    if db_obj.status == "published":
        raise ConflictError("Masterclass is already published")
    db_obj = crud.mentor_masterclass.publish(db, db_obj=db_obj)
    logger.info(f"Mentor masterclass {masterclass_id} published")
    return db_obj
