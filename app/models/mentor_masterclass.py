import uuid
from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    Numeric,
    DateTime,
    Enum,
    ForeignKey,
    JSON,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base_class import Base


class MentorMasterclass(Base):
    """Masterclass authored by a mentor; moderated through draft -> published."""

    __tablename__ = "mentor_masterclasses"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    mentor_id = Column(String, ForeignKey("profiles.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=True, index=True)
    image_url = Column(String, nullable=True)
    tags = Column(JSON, nullable=True)
    prerequisites = Column(JSON, nullable=True)

    price = Column(Numeric(10, 2), nullable=False, server_default="0")

    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    meeting_link = Column(String, nullable=True)

    # NULL max_participants means uncapped
    max_participants = Column(Integer, nullable=True)
    current_participants = Column(Integer, nullable=False, default=0, server_default="0")

    status = Column(
        Enum("draft", "published", name="mentor_masterclass_status_enum"),
        nullable=False,
        default="draft",
        server_default="draft",
        index=True,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    mentor = relationship("Profile", lazy="joined")

    __table_args__ = (
        CheckConstraint("current_participants >= 0", name="ck_mentor_masterclass_participants_non_negative"),
    )
