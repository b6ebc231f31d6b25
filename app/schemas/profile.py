# app/schemas/profile.py
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class ProfileRole(str, Enum):
    student = "student"
    mentor = "mentor"


class CallerRole(str, Enum):
    """Role as seen by the session lookup; includes callers without a profile."""

    student = "student"
    mentor = "mentor"
    anonymous = "anonymous"


class ProfileBase(BaseModel):
    full_name: Optional[str] = Field(None, json_schema_extra={"example": "Ada Lovelace"})
    phone_number: Optional[str] = None
    email: Optional[str] = Field(None, json_schema_extra={"example": "ada@example.com"})
    student_type: Optional[str] = Field(None, json_schema_extra={"example": "college"})
    institution_name: Optional[str] = None


class ProfileCreate(ProfileBase):
    full_name: str
    role: ProfileRole

    @model_validator(mode="after")
    def check_student_fields(self):
        if self.role == ProfileRole.student and not self.student_type:
            raise ValueError("Please select your student type")
        return self


class ProfileUpdate(ProfileBase):
    """Role is deliberately absent: it is fixed once the profile exists."""


class Profile(ProfileBase):
    id: str
    role: Optional[ProfileRole] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RoleResponse(BaseModel):
    role: CallerRole
