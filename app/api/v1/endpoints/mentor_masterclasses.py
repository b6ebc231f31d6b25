# app/api/v1/endpoints/mentor_masterclasses.py
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api import deps
from app.schemas.masterclass import MentorMasterclass, MentorMasterclassCreate
from app.services import mentor_authoring
from app.services.profile_lookup import SessionContext

router = APIRouter(prefix="/mentor/masterclasses", tags=["Mentor Masterclasses"])


@router.get("", response_model=List[MentorMasterclass])
def list_my_masterclasses(
    db: Session = Depends(deps.get_db),
    ctx: SessionContext = Depends(deps.get_session_context),
):
    return mentor_authoring.list_own_masterclasses(db, ctx)


@router.post("", response_model=MentorMasterclass, status_code=status.HTTP_201_CREATED)
def create_masterclass(
    masterclass_in: MentorMasterclassCreate,
    db: Session = Depends(deps.get_db),
    ctx: SessionContext = Depends(deps.get_session_context),
    now: datetime = Depends(deps.get_now),
):
    """
    Create a masterclass as the signed-in mentor.

    It is saved as a draft and only shows up in the public list once it
    has been published.
    """
    return mentor_authoring.create_mentor_masterclass(db, ctx, masterclass_in, now)
