# app/crud/crud_masterclass.py
from typing import List

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.masterclass import Masterclass
from app.schemas.masterclass import CatalogMasterclassCreate


class CRUDMasterclass(CRUDBase[Masterclass, CatalogMasterclassCreate, CatalogMasterclassCreate]):
    def get_multi_ordered(
        self, db: Session, *, skip: int = 0, limit: int = 100
    ) -> List[Masterclass]:
        """Catalog masterclasses in schedule order."""
        return (
            db.query(self.model)
            .order_by(self.model.scheduled_date.asc(), self.model.scheduled_time.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def create_many(
        self, db: Session, *, objs_in: List[CatalogMasterclassCreate]
    ) -> List[Masterclass]:
        """Bulk insert in a single commit; used by the seed endpoint."""
        db_objs = [self.model(**obj_in.model_dump()) for obj_in in objs_in]
        db.add_all(db_objs)
        db.commit()
        for db_obj in db_objs:
            db.refresh(db_obj)
        return db_objs


masterclass = CRUDMasterclass(Masterclass)
