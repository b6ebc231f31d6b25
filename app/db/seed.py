# app/db/seed.py
import logging
from datetime import date, time
from typing import List

from sqlalchemy.orm import Session

from app import crud
from app.models.masterclass import Masterclass
from app.schemas.masterclass import CatalogMasterclassCreate, Prerequisites

logger = logging.getLogger(__name__)


def get_seed_data() -> List[CatalogMasterclassCreate]:
    """Sample catalog rows for bootstrapping a fresh environment."""
    return [
        CatalogMasterclassCreate(
            title="Introduction to Web Development",
            description="Learn the basics of HTML, CSS, and JavaScript in this comprehensive masterclass.",
            mentor_name="John Doe",
            type="live",
            fee=999,
            prerequisites=Prerequisites(
                required=["Basic computer knowledge"],
                recommended=["Basic HTML understanding"],
            ),
            scheduled_date=date(2025, 2, 1),
            scheduled_time=time(10, 0),
            duration_minutes=120,
            image_url="https://images.unsplash.com/photo-1461749280684-dccba630e2f6",
            meeting_link="https://meet.google.com/example",
            category="technology",
            tags=["web development", "programming", "frontend"],
        ),
        CatalogMasterclassCreate(
            title="Digital Marketing Essentials",
            description="Master the fundamentals of digital marketing and grow your online presence.",
            mentor_name="Jane Smith",
            type="live",
            fee=799,
            prerequisites=Prerequisites(
                required=["None"],
                recommended=["Social media experience"],
            ),
            scheduled_date=date(2025, 2, 5),
            scheduled_time=time(14, 0),
            duration_minutes=90,
            image_url="https://images.unsplash.com/photo-1432888622747-4eb9a8f2c293",
            meeting_link="https://meet.google.com/example2",
            category="marketing",
            tags=["digital marketing", "social media", "SEO"],
        ),
        CatalogMasterclassCreate(
            title="UI/UX Design Workshop",
            description="Create beautiful and user-friendly interfaces with modern design principles.",
            mentor_name="Alex Johnson",
            type="live",
            fee=1299,
            prerequisites=Prerequisites(
                required=["Basic design knowledge"],
                recommended=["Figma or Sketch experience"],
            ),
            scheduled_date=date(2025, 2, 10),
            scheduled_time=time(11, 0),
            duration_minutes=150,
            image_url="https://images.unsplash.com/photo-1561070791-2526d30994b5",
            meeting_link="https://meet.google.com/example3",
            category="design",
            tags=["UI design", "UX design", "web design"],
        ),
    ]


def seed_masterclasses(db: Session) -> List[Masterclass]:
    logger.info("Inserting sample masterclass data...")
    rows = crud.masterclass.create_many(db, objs_in=get_seed_data())
    logger.info(f"Seeded {len(rows)} catalog masterclasses")
    return rows
