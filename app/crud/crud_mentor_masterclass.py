# app/crud/crud_mentor_masterclass.py
"""
CRUD operations for mentor-authored masterclasses, including the
denormalized participant counter.

The counter is only ever changed with a single conditional UPDATE so two
concurrent registrations or withdrawals cannot lose an update. The counter
methods do not commit: they run inside the caller's transaction.
"""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.mentor_masterclass import MentorMasterclass
from app.schemas.masterclass import MentorMasterclassCreate


class CRUDMentorMasterclass(
    CRUDBase[MentorMasterclass, MentorMasterclassCreate, MentorMasterclassCreate]
):
    def get_published(
        self, db: Session, *, skip: int = 0, limit: int = 100
    ) -> List[MentorMasterclass]:
        return (
            db.query(self.model)
            .filter(self.model.status == "published")
            .order_by(self.model.start_time.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_multi_by_mentor(
        self, db: Session, *, mentor_id: str
    ) -> List[MentorMasterclass]:
        return (
            db.query(self.model)
            .filter(self.model.mentor_id == mentor_id)
            .order_by(self.model.start_time.asc())
            .all()
        )

    def create_for_mentor(
        self, db: Session, *, obj_in: MentorMasterclassCreate, mentor_id: str
    ) -> MentorMasterclass:
        db_obj = self.model(
            **obj_in.model_dump(),
            mentor_id=mentor_id,
            status="draft",
            current_participants=0,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def publish(self, db: Session, *, db_obj: MentorMasterclass) -> MentorMasterclass:
        db_obj.status = "published"
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def increment_participants(self, db: Session, *, masterclass_id: str) -> bool:
        """
        Adds one participant unless the masterclass is at max_participants.
        Returns False when the row is full (or missing).
        """
        updated = (
            db.query(self.model)
            .filter(
                self.model.id == masterclass_id,
                or_(
                    self.model.max_participants.is_(None),
                    self.model.current_participants < self.model.max_participants,
                ),
            )
            .update(
                {self.model.current_participants: self.model.current_participants + 1},
                synchronize_session=False,
            )
        )
        return updated == 1

    def decrement_participants(self, db: Session, *, masterclass_id: str) -> bool:
        """
        Removes one participant, never going below zero.
        Returns False when the count was already 0.
        """
        updated = (
            db.query(self.model)
            .filter(
                self.model.id == masterclass_id,
                self.model.current_participants > 0,
            )
            .update(
                {self.model.current_participants: self.model.current_participants - 1},
                synchronize_session=False,
            )
        )
        return updated == 1

    def get_participant_count(self, db: Session, *, masterclass_id: str) -> Optional[int]:
        row = (
            db.query(self.model.current_participants)
            .filter(self.model.id == masterclass_id)
            .first()
        )
        return row[0] if row else None


mentor_masterclass = CRUDMentorMasterclass(MentorMasterclass)
