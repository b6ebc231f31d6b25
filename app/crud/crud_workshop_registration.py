# app/crud/crud_workshop_registration.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.workshop_registration import WorkshopRegistration

logger = logging.getLogger(__name__)


class CRUDWorkshopRegistration:
    model = WorkshopRegistration

    def create(self, db: Session, *, user_id: str, workshop_id: str):
        """
        Insert a workshop registration.
        Returns None if the user is already registered (unique constraint).
        """
        try:
            db_obj = self.model(user_id=user_id, workshop_id=workshop_id)
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
            return db_obj
        except IntegrityError:
            db.rollback()
            logger.info(
                f"Duplicate workshop registration: user={user_id}, workshop={workshop_id}"
            )
            return None


workshop_registration = CRUDWorkshopRegistration()
