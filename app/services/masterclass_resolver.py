# app/services/masterclass_resolver.py
"""
Resolves a masterclass id against the two physical sources.

Lookup order is fixed: the catalog table first, then the mentor-authored
table. Both rows are mapped into one of the MasterclassDetails variants so
callers never have to know which table a record came from.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import crud
from app.core.config import settings
from app.core.errors import NotFoundError, TransportError
from app.models.masterclass import Masterclass
from app.models.mentor_masterclass import MentorMasterclass
from app.schemas.masterclass import (
    CatalogMasterclassDetails,
    MasterclassListItem,
    MentorMasterclassDetails,
)
from app.services.availability import as_utc

logger = logging.getLogger(__name__)

UNKNOWN_MENTOR = "Unknown Mentor"

Details = Union[CatalogMasterclassDetails, MentorMasterclassDetails]


def catalog_start(row: Masterclass) -> datetime:
    return datetime.combine(row.scheduled_date, row.scheduled_time, tzinfo=timezone.utc)


def catalog_end(row: Masterclass) -> Optional[datetime]:
    if not row.duration_minutes:
        return None
    return catalog_start(row) + timedelta(minutes=row.duration_minutes)


def from_catalog(row: Masterclass) -> CatalogMasterclassDetails:
    return CatalogMasterclassDetails(
        id=row.id,
        title=row.title,
        description=row.description,
        mentor_name=row.mentor_name or UNKNOWN_MENTOR,
        category=row.category,
        image_url=row.image_url or settings.PLACEHOLDER_IMAGE_URL,
        tags=row.tags,
        prerequisites=row.prerequisites,
        price=float(row.fee or 0),
        starts_at=catalog_start(row),
        ends_at=catalog_end(row),
        meeting_link=row.meeting_link,
        scheduled_date=row.scheduled_date,
        scheduled_time=row.scheduled_time,
        duration_minutes=row.duration_minutes or 0,
    )


def from_mentor(row: MentorMasterclass) -> MentorMasterclassDetails:
    mentor_name = row.mentor.full_name if row.mentor is not None else None
    return MentorMasterclassDetails(
        id=row.id,
        title=row.title,
        description=row.description,
        mentor_name=mentor_name or UNKNOWN_MENTOR,
        category=row.category,
        image_url=row.image_url or settings.PLACEHOLDER_IMAGE_URL,
        tags=row.tags,
        prerequisites=row.prerequisites,
        price=float(row.price or 0),
        starts_at=as_utc(row.start_time),
        ends_at=as_utc(row.end_time),
        meeting_link=row.meeting_link,
        mentor_id=row.mentor_id,
        max_participants=row.max_participants,
        current_participants=row.current_participants or 0,
        status=row.status,
    )


def find(db: Session, masterclass_id: str) -> Optional[Details]:
    """Like resolve(), but returns None instead of raising NotFoundError."""
    try:
        catalog_row = crud.masterclass.get(db, id=masterclass_id)
        if catalog_row is not None:
            return from_catalog(catalog_row)

        mentor_row = crud.mentor_masterclass.get(db, id=masterclass_id)
        if mentor_row is not None:
            return from_mentor(mentor_row)
    except SQLAlchemyError as e:
        logger.error(
            f"Failed to load masterclass {masterclass_id}: {e}",
            exc_info=True,
            extra={"masterclass_id": masterclass_id},
        )
        raise TransportError("Failed to load masterclass details") from e
    return None


def resolve(db: Session, masterclass_id: str) -> Details:
    details = find(db, masterclass_id)
    if details is None:
        raise NotFoundError(
            f"Masterclass not found with ID: {masterclass_id}",
            details={"masterclass_id": masterclass_id},
        )
    return details


def list_masterclasses(db: Session, now: datetime) -> List[MasterclassListItem]:
    """
    All catalog masterclasses in schedule order, followed by published
    mentor-authored ones in start order.
    """
    now = as_utc(now)
    try:
        catalog_rows = crud.masterclass.get_multi_ordered(db, limit=500)
        mentor_rows = crud.mentor_masterclass.get_published(db, limit=500)
    except SQLAlchemyError as e:
        logger.error(f"Failed to list masterclasses: {e}", exc_info=True)
        raise TransportError("Failed to load masterclasses") from e

    details: List[Details] = [from_catalog(r) for r in catalog_rows]
    details += [from_mentor(r) for r in mentor_rows]
    return [
        MasterclassListItem(
            details=d,
            timing="upcoming" if d.starts_at > now else "past",
        )
        for d in details
    ]
