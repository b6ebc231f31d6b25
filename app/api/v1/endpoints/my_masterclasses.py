# app/api/v1/endpoints/my_masterclasses.py
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.schemas.registration import MyMasterclass
from app.services import registration_ledger
from app.services.profile_lookup import SessionContext

# Mounted outside /api; the route gate in main.py redirects anonymous callers.
router = APIRouter(tags=["My Masterclasses"])


@router.get("/my-masterclasses", response_model=List[MyMasterclass])
def read_my_masterclasses(
    db: Session = Depends(deps.get_db),
    ctx: SessionContext = Depends(deps.get_session_context),
    now: datetime = Depends(deps.get_now),
):
    return registration_ledger.my_masterclasses(db, user_id=ctx.user_id, now=now)
