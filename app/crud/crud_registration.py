# app/crud/crud_registration.py
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from app.models.registration import MasterclassRegistration


class CRUDRegistration:
    """
    Registration rows for both masterclass sources.

    add() and delete_for_user() only flush; the ledger owns the commit so the
    participant counter changes in the same transaction.
    """

    model = MasterclassRegistration

    def get(self, db: Session, id: str) -> Optional[MasterclassRegistration]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_by_user_and_masterclass(
        self, db: Session, *, user_id: str, masterclass_id: str
    ) -> Optional[MasterclassRegistration]:
        return (
            db.query(self.model)
            .filter(
                and_(
                    self.model.user_id == user_id,
                    self.model.masterclass_id == masterclass_id,
                )
            )
            .first()
        )

    def get_multi_by_user(
        self, db: Session, *, user_id: str
    ) -> List[MasterclassRegistration]:
        return (
            db.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(self.model.created_at.asc())
            .all()
        )

    def count_registered(self, db: Session, *, masterclass_id: str) -> int:
        """Counts registrations still in the 'registered' state."""
        return (
            db.query(self.model)
            .filter(
                self.model.masterclass_id == masterclass_id,
                self.model.status == "registered",
            )
            .count()
        )

    def add(self, db: Session, *, db_obj: MasterclassRegistration) -> MasterclassRegistration:
        """Stages the row and flushes so the unique constraint fires here."""
        db.add(db_obj)
        db.flush()
        return db_obj

    def delete_for_user(self, db: Session, *, user_id: str, masterclass_id: str) -> int:
        """Hard delete; returns the number of rows removed (0 or 1)."""
        return (
            db.query(self.model)
            .filter(
                self.model.user_id == user_id,
                self.model.masterclass_id == masterclass_id,
            )
            .delete(synchronize_session=False)
        )


registration = CRUDRegistration()
