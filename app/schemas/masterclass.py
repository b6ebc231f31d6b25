# app/schemas/masterclass.py
from datetime import date, datetime, time
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator


class MasterclassSource(str, Enum):
    catalog = "catalog"
    mentor = "mentor"


class MentorMasterclassStatus(str, Enum):
    draft = "draft"
    published = "published"


class Prerequisites(BaseModel):
    required: List[str] = []
    recommended: List[str] = []


# --- Raw catalog row (GET /api/masterclasses/{id}) ---


class CatalogMasterclass(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    mentor_name: Optional[str] = None
    type: Optional[str] = None
    category: Optional[str] = None
    fee: Optional[float] = None
    prerequisites: Optional[dict] = None
    scheduled_date: date
    scheduled_time: time
    duration_minutes: int
    image_url: Optional[str] = None
    # Never serialized; the link is handed out by the availability check.
    meeting_link: Optional[str] = Field(None, exclude=True)
    tags: Optional[List[str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CatalogMasterclassCreate(BaseModel):
    title: str
    description: Optional[str] = None
    mentor_name: Optional[str] = None
    type: Optional[str] = "live"
    category: Optional[str] = None
    fee: Optional[float] = Field(None, ge=0)
    prerequisites: Optional[Prerequisites] = None
    scheduled_date: date
    scheduled_time: time
    duration_minutes: int = Field(..., ge=0)
    image_url: Optional[str] = None
    meeting_link: Optional[str] = None
    tags: List[str] = []


# --- Mentor-authored rows ---


class MentorMasterclassCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    tags: List[str] = []
    prerequisites: Optional[Prerequisites] = None
    price: float = Field(0, ge=0)
    start_time: datetime
    end_time: datetime
    meeting_link: Optional[str] = None
    max_participants: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def check_time_order(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class MentorMasterclass(BaseModel):
    id: str
    mentor_id: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    tags: Optional[List[str]] = None
    price: float
    start_time: datetime
    end_time: datetime
    meeting_link: Optional[str] = None
    max_participants: Optional[int] = None
    current_participants: int
    status: MentorMasterclassStatus
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# --- Normalized shape produced by the resolver ---


class _MasterclassDetailsBase(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    mentor_name: str
    category: Optional[str] = None
    image_url: str
    tags: List[str] = []
    prerequisites: Prerequisites = Prerequisites()
    price: float = 0
    starts_at: datetime
    ends_at: Optional[datetime] = None
    # Only handed out through the availability check.
    meeting_link: Optional[str] = Field(None, exclude=True)

    @field_validator("tags", mode="before")
    @classmethod
    def tags_default(cls, v):
        return v if isinstance(v, list) else []

    @field_validator("prerequisites", mode="before")
    @classmethod
    def prerequisites_default(cls, v):
        return v or Prerequisites()

    @computed_field
    @property
    def is_free(self) -> bool:
        return self.price == 0


class CatalogMasterclassDetails(_MasterclassDetailsBase):
    kind: Literal["catalog"] = "catalog"
    scheduled_date: date
    scheduled_time: time
    duration_minutes: int


class MentorMasterclassDetails(_MasterclassDetailsBase):
    kind: Literal["mentor"] = "mentor"
    mentor_id: str
    max_participants: Optional[int] = None
    current_participants: int = 0
    status: MentorMasterclassStatus


MasterclassDetails = Annotated[
    Union[CatalogMasterclassDetails, MentorMasterclassDetails],
    Field(discriminator="kind"),
]


class MasterclassListItem(BaseModel):
    details: MasterclassDetails
    timing: Literal["upcoming", "past"]


class RegistrationCount(BaseModel):
    masterclass_id: str
    count: int
