import uuid
from sqlalchemy import Column, String, Numeric, DateTime, Enum, UniqueConstraint
from sqlalchemy.sql import func

from app.db.base_class import Base


class MasterclassRegistration(Base):
    __tablename__ = "masterclass_registrations"

    id = Column(
        String, primary_key=True, default=lambda: f"mreg_{uuid.uuid4().hex[:12]}"
    )
    user_id = Column(String, nullable=False, index=True)

    # Points at either masterclasses.id or mentor_masterclasses.id, so no FK.
    masterclass_id = Column(String, nullable=False, index=True)

    status = Column(
        Enum("registered", "attended", "missed", name="registration_status_enum"),
        nullable=False,
        default="registered",
        server_default="registered",
    )
    payment_status = Column(
        Enum(
            "not_required",
            "pending",
            "completed",
            "failed",
            "verified",
            name="payment_status_enum",
        ),
        nullable=False,
        default="pending",
        server_default="pending",
    )

    # Free text entered by the user; verified out of band.
    transaction_id = Column(String, nullable=True)
    payment_amount = Column(Numeric(10, 2), nullable=False, default=0, server_default="0")
    payment_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "masterclass_id", name="unique_masterclass_registration_user"),
    )
