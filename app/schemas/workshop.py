# app/schemas/workshop.py
from pydantic import BaseModel, Field


class WorkshopRegistrationRequest(BaseModel):
    workshop_id: str = Field(..., alias="workshopId", min_length=1)

    model_config = {"populate_by_name": True}
