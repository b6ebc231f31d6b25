# app/schemas/availability.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.services.availability import AvailabilityWindow, WindowState


class Countdown(BaseModel):
    days: int
    hours: int
    minutes: int
    seconds: int


class Availability(BaseModel):
    masterclass_id: str
    state: WindowState
    countdown: Optional[Countdown] = None
    opens_at: datetime
    ends_at: datetime
    # Present only while joinable, and only for registered callers or the author
    meeting_link: Optional[str] = None

    @classmethod
    def from_window(
        cls,
        masterclass_id: str,
        window: AvailabilityWindow,
        meeting_link: Optional[str] = None,
    ) -> "Availability":
        countdown = None
        if window.countdown is not None:
            c = window.countdown
            countdown = Countdown(
                days=c.days, hours=c.hours, minutes=c.minutes, seconds=c.seconds
            )
        return cls(
            masterclass_id=masterclass_id,
            state=window.state,
            countdown=countdown,
            opens_at=window.opens_at,
            ends_at=window.ends_at,
            meeting_link=meeting_link if window.state == WindowState.JOINABLE else None,
        )
