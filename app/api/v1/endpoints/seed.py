# app/api/v1/endpoints/seed.py
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api import deps
from app.core.errors import TransportError
from app.db.seed import seed_masterclasses
from app.schemas.masterclass import CatalogMasterclass

router = APIRouter(tags=["Seed"])
logger = logging.getLogger(__name__)


@router.get("/seed", response_model=List[CatalogMasterclass])
def seed_database(db: Session = Depends(deps.get_db)):
    """Bulk-inserts the sample catalog masterclasses."""
    try:
        return seed_masterclasses(db)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error seeding data: {e}", exc_info=True)
        raise TransportError("Failed to seed data") from e
