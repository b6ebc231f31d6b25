# app/api/v1/endpoints/internals.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.schemas.masterclass import MentorMasterclass
from app.schemas.registration import AttendanceUpdate, PaymentStatusUpdate, Registration
from app.services import mentor_authoring, registration_ledger

router = APIRouter(prefix="/internal", tags=["Internal"])


@router.post(
    "/registrations/{registrationId}/payment-status", response_model=Registration
)
def update_payment_status(
    registrationId: str,
    update_in: PaymentStatusUpdate,
    db: Session = Depends(deps.get_db),
    api_key: str = Depends(deps.get_internal_api_key),
):
    """
    Called by back-office tooling once a manual payment has been checked.
    """
    return registration_ledger.set_payment_status(
        db, registration_id=registrationId, payment_status=update_in.payment_status
    )


@router.post("/registrations/{registrationId}/attendance", response_model=Registration)
def update_attendance(
    registrationId: str,
    update_in: AttendanceUpdate,
    db: Session = Depends(deps.get_db),
    api_key: str = Depends(deps.get_internal_api_key),
):
    return registration_ledger.set_attendance(
        db, registration_id=registrationId, status=update_in.status
    )


@router.post(
    "/mentor-masterclasses/{masterclassId}/publish", response_model=MentorMasterclass
)
def publish_mentor_masterclass(
    masterclassId: str,
    db: Session = Depends(deps.get_db),
    api_key: str = Depends(deps.get_internal_api_key),
):
    """Moderation approves a draft; it then appears in the public list."""
    return mentor_authoring.publish(db, masterclassId)
