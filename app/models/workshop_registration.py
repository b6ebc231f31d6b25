import uuid
from sqlalchemy import Column, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func

from app.db.base_class import Base


class WorkshopRegistration(Base):
    __tablename__ = "workshop_registrations"

    id = Column(
        String, primary_key=True, default=lambda: f"wreg_{uuid.uuid4().hex[:12]}"
    )
    user_id = Column(String, nullable=False, index=True)
    workshop_id = Column(String, nullable=False, index=True)
    registered_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("user_id", "workshop_id", name="unique_workshop_registration_user"),
    )
