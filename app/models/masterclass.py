import uuid
from sqlalchemy import Column, String, Text, Integer, Numeric, Date, Time, DateTime, JSON, Index
from sqlalchemy.sql import func

from app.db.base_class import Base


class Masterclass(Base):
    """Catalog masterclass: admin-curated, fixed date/time/duration."""

    __tablename__ = "masterclasses"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    mentor_name = Column(String, nullable=True)
    type = Column(String, nullable=True)
    category = Column(String, nullable=True, index=True)

    # NULL means free
    fee = Column(Numeric(10, 2), nullable=True)

    # {"required": [...], "recommended": [...]}
    prerequisites = Column(JSON, nullable=True)
    tags = Column(JSON, nullable=True)

    scheduled_date = Column(Date, nullable=False)
    scheduled_time = Column(Time, nullable=False)
    duration_minutes = Column(Integer, nullable=False, server_default="0")

    image_url = Column(String, nullable=True)
    meeting_link = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        Index("idx_masterclasses_schedule", "scheduled_date", "scheduled_time"),
    )
