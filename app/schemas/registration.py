# app/schemas/registration.py
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from app.schemas.masterclass import MasterclassDetails


class RegistrationStatus(str, Enum):
    registered = "registered"
    attended = "attended"
    missed = "missed"


class PaymentStatus(str, Enum):
    not_required = "not_required"
    pending = "pending"
    completed = "completed"
    failed = "failed"
    verified = "verified"


class MasterclassRegistrationRequest(BaseModel):
    masterclass_id: str = Field(..., alias="masterclassId", min_length=1)
    transaction_id: Optional[str] = Field(
        None,
        alias="transactionId",
        json_schema_extra={"example": "UPI-4821-XYZ"},
    )

    model_config = {"populate_by_name": True}


class PaymentResubmission(BaseModel):
    transaction_id: str = Field(..., alias="transactionId", min_length=1)

    model_config = {"populate_by_name": True}


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus


class AttendanceUpdate(BaseModel):
    status: RegistrationStatus


class Registration(BaseModel):
    id: str
    user_id: str
    masterclass_id: str
    status: RegistrationStatus
    payment_status: PaymentStatus
    transaction_id: Optional[str] = None
    payment_amount: float = 0
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def display_status(self) -> str:
        if self.payment_status == PaymentStatus.pending:
            return "Payment Verification Pending"
        if self.payment_status == PaymentStatus.failed:
            return "Payment Failed"
        return self.status.value.capitalize()


class RegistrationConfirmation(BaseModel):
    message: str
    registration: Registration


class MyMasterclass(BaseModel):
    registration: Registration
    # None when the masterclass no longer resolves in either source
    masterclass: Optional[MasterclassDetails] = None
