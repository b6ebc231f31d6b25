from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.sql import func

from app.db.base_class import Base


class Profile(Base):
    __tablename__ = "profiles"

    # Same id as the auth subject ("sub" claim); owned by the auth service.
    id = Column(String, primary_key=True)
    full_name = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    email = Column(String, nullable=True, index=True)
    role = Column(
        Enum("student", "mentor", name="profile_role_enum"),
        nullable=True,
    )

    # Student-only fields
    student_type = Column(String, nullable=True)
    institution_name = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
