# app/api/v1/endpoints/masterclasses.py
import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.core.config import settings
from app.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    TransportError,
    UnauthenticatedError,
)
from app.core.limiter import limiter
from app.core.security import sign_in_url
from app.schemas.availability import Availability
from app.schemas.masterclass import (
    CatalogMasterclass,
    MasterclassDetails,
    MasterclassListItem,
    MasterclassSource,
    MentorMasterclassStatus,
    RegistrationCount,
)
from app.schemas.registration import (
    MasterclassRegistrationRequest,
    PaymentResubmission,
    Registration,
    RegistrationConfirmation,
)
from app.services import masterclass_resolver, registration_ledger
from app.services.availability import WindowState, evaluate_window, watch_window
from app.services.profile_lookup import SessionContext

router = APIRouter(prefix="/masterclasses", tags=["Masterclasses"])
logger = logging.getLogger(__name__)


def _join_lead() -> timedelta:
    return timedelta(minutes=settings.JOIN_WINDOW_LEAD_MINUTES)


def _visible_meeting_link(
    db: Session, details, ctx: Optional[SessionContext]
) -> Optional[str]:
    """The link goes to registered callers and to the authoring mentor."""
    if ctx is None or not details.meeting_link:
        return None
    if getattr(details, "mentor_id", None) == ctx.user_id:
        return details.meeting_link
    registration = crud.registration.get_by_user_and_masterclass(
        db, user_id=ctx.user_id, masterclass_id=details.id
    )
    return details.meeting_link if registration else None


@router.get("", response_model=List[MasterclassListItem])
def list_masterclasses(
    db: Session = Depends(deps.get_db),
    now: datetime = Depends(deps.get_now),
):
    """
    Catalog masterclasses plus published mentor-authored masterclasses,
    each tagged as upcoming or past.
    """
    return masterclass_resolver.list_masterclasses(db, now)


@router.post("/register", response_model=RegistrationConfirmation)
@limiter.limit(settings.REGISTRATION_RATE_LIMIT)
def register_for_masterclass(
    request: Request,
    registration_in: MasterclassRegistrationRequest,
    db: Session = Depends(deps.get_db),
    ctx: Optional[SessionContext] = Depends(deps.get_session_context_optional),
    now: datetime = Depends(deps.get_now),
):
    """
    Register the caller for a masterclass.

    Free masterclasses are confirmed immediately. Paid ones need a
    `transactionId` and stay 'Payment Verification Pending' until the
    payment is verified out of band.
    """
    masterclass_id = registration_in.masterclass_id
    if ctx is None:
        raise UnauthenticatedError(
            redirect_to=sign_in_url(f"/masterclass/{masterclass_id}")
        )
    if ctx.is_mentor:
        raise ForbiddenError("Mentors cannot register for masterclasses")

    details = masterclass_resolver.resolve(db, masterclass_id)
    if details.kind == "mentor" and details.status != MentorMasterclassStatus.published:
        raise ConflictError("This masterclass is not open for registration")
    window = evaluate_window(now, details.starts_at, details.ends_at, _join_lead())
    if window.state == WindowState.ENDED:
        raise ConflictError("Registrations are closed for this masterclass")

    registration = registration_ledger.register(
        db,
        user_id=ctx.user_id,
        masterclass_id=masterclass_id,
        amount=details.price,
        transaction_id=registration_in.transaction_id,
        source=MasterclassSource(details.kind),
        now=now,
    )
    return RegistrationConfirmation(
        message="Successfully registered for masterclass",
        registration=Registration.model_validate(registration),
    )


@router.get("/{masterclass_id}", response_model=CatalogMasterclass)
def get_catalog_masterclass(masterclass_id: str, db: Session = Depends(deps.get_db)):
    """Raw catalog row; mentor-authored masterclasses are served by /details."""
    try:
        db_obj = crud.masterclass.get(db, id=masterclass_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load masterclass {masterclass_id}: {e}", exc_info=True)
        raise TransportError("Internal Server Error") from e
    if not db_obj:
        raise NotFoundError("Not found")
    return db_obj


@router.get("/{masterclass_id}/details", response_model=MasterclassDetails)
def get_masterclass_details(masterclass_id: str, db: Session = Depends(deps.get_db)):
    return masterclass_resolver.resolve(db, masterclass_id)


@router.get("/{masterclass_id}/availability", response_model=Availability)
def get_availability(
    masterclass_id: str,
    db: Session = Depends(deps.get_db),
    ctx: Optional[SessionContext] = Depends(deps.get_session_context_optional),
    now: datetime = Depends(deps.get_now),
):
    details = masterclass_resolver.resolve(db, masterclass_id)
    window = evaluate_window(now, details.starts_at, details.ends_at, _join_lead())
    link = _visible_meeting_link(db, details, ctx) if window.is_joinable else None
    return Availability.from_window(masterclass_id, window, link)


def _stream_target(
    masterclass_id: str,
    db: Session = Depends(deps.get_db),
    ctx: Optional[SessionContext] = Depends(deps.get_session_context_optional),
) -> Tuple[object, Optional[str]]:
    details = masterclass_resolver.resolve(db, masterclass_id)
    return details, _visible_meeting_link(db, details, ctx)


@router.get("/{masterclass_id}/availability/stream")
async def stream_availability(
    masterclass_id: str,
    request: Request,
    target: Tuple[object, Optional[str]] = Depends(_stream_target),
    clock: Callable[[], datetime] = Depends(deps.get_clock),
):
    """
    Server-sent events: one `availability` event per tick until the
    masterclass has ended. Closing the connection stops the ticker.
    """
    details, link = target

    async def event_stream():
        async for window in watch_window(
            details.starts_at,
            details.ends_at,
            clock=clock,
            interval=settings.COUNTDOWN_INTERVAL_SECONDS,
            lead=_join_lead(),
        ):
            if await request.is_disconnected():
                logger.debug(f"Availability stream for {masterclass_id} closed by client")
                break
            payload = Availability.from_window(masterclass_id, window, link)
            yield f"event: availability\ndata: {payload.model_dump_json()}\n\n"

    return StreamingResponse(event_stream(), media_type="text/event-stream")


@router.get("/{masterclass_id}/registrations/count", response_model=RegistrationCount)
def get_registration_count(masterclass_id: str, db: Session = Depends(deps.get_db)):
    count = crud.registration.count_registered(db, masterclass_id=masterclass_id)
    return RegistrationCount(masterclass_id=masterclass_id, count=count)


@router.get("/{masterclass_id}/registration", response_model=Registration)
def get_my_registration(
    masterclass_id: str,
    db: Session = Depends(deps.get_db),
    ctx: SessionContext = Depends(deps.get_session_context),
):
    return registration_ledger.get_registration(
        db, user_id=ctx.user_id, masterclass_id=masterclass_id
    )


@router.delete("/{masterclass_id}/registration", status_code=status.HTTP_200_OK)
@limiter.limit(settings.REGISTRATION_RATE_LIMIT)
def withdraw_from_masterclass(
    request: Request,
    masterclass_id: str,
    db: Session = Depends(deps.get_db),
    ctx: SessionContext = Depends(deps.get_session_context),
):
    details = masterclass_resolver.find(db, masterclass_id)
    # A registration can outlive its masterclass; still let the user withdraw.
    source = MasterclassSource(details.kind) if details else MasterclassSource.catalog
    registration_ledger.withdraw(
        db, user_id=ctx.user_id, masterclass_id=masterclass_id, source=source
    )
    return {"message": "Successfully withdrawn from masterclass"}


@router.post("/{masterclass_id}/registration/payment", response_model=Registration)
def resubmit_payment(
    masterclass_id: str,
    payment_in: PaymentResubmission,
    db: Session = Depends(deps.get_db),
    ctx: SessionContext = Depends(deps.get_session_context),
    now: datetime = Depends(deps.get_now),
):
    """Send a new transaction id after a payment was marked failed."""
    return registration_ledger.resubmit_payment(
        db,
        user_id=ctx.user_id,
        masterclass_id=masterclass_id,
        transaction_id=payment_in.transaction_id,
        now=now,
    )
