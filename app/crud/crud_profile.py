# app/crud/crud_profile.py
from typing import Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.profile import Profile
from app.schemas.profile import ProfileCreate, ProfileUpdate


class CRUDProfile(CRUDBase[Profile, ProfileCreate, ProfileUpdate]):
    def create_for_user(
        self, db: Session, *, obj_in: ProfileCreate, user_id: str
    ) -> Profile:
        """
        Creates the profile for an auth subject. The primary key is the
        subject id, so a second submission raises IntegrityError.
        """
        obj_data = obj_in.model_dump()
        obj_data["role"] = obj_in.role.value
        db_obj = self.model(**obj_data, id=user_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_role(self, db: Session, *, user_id: str) -> Optional[str]:
        """Returns the stored role, or None when the profile row is missing."""
        row = db.query(self.model.role).filter(self.model.id == user_id).first()
        return row[0] if row else None


profile = CRUDProfile(Profile)
