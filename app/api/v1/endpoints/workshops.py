# app/api/v1/endpoints/workshops.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.core.config import settings
from app.core.errors import AlreadyRegisteredError, UnauthenticatedError
from app.core.limiter import limiter
from app.core.security import sign_in_url
from app.schemas.workshop import WorkshopRegistrationRequest
from app.services.profile_lookup import SessionContext

router = APIRouter(tags=["Workshops"])
logger = logging.getLogger(__name__)


@router.post("/workshops/register")
@limiter.limit(settings.REGISTRATION_RATE_LIMIT)
def register_for_workshop(
    request: Request,
    registration_in: WorkshopRegistrationRequest,
    db: Session = Depends(deps.get_db),
    ctx: Optional[SessionContext] = Depends(deps.get_session_context_optional),
):
    if ctx is None:
        raise UnauthenticatedError(
            redirect_to=sign_in_url(f"/workshop/{registration_in.workshop_id}")
        )

    db_obj = crud.workshop_registration.create(
        db, user_id=ctx.user_id, workshop_id=registration_in.workshop_id
    )
    if db_obj is None:
        raise AlreadyRegisteredError("Already registered for this workshop")

    logger.info(f"User {ctx.user_id} registered for workshop {registration_in.workshop_id}")
    return {"message": "Successfully registered for workshop"}
