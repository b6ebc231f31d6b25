# app/models/__init__.py
# Import all models so Base.metadata (and alembic autogenerate) sees every
# table. Profile first: mentor_masterclasses references it.

from app.db.base_class import Base
from app.models.profile import Profile
from app.models.masterclass import Masterclass
from app.models.mentor_masterclass import MentorMasterclass
from app.models.registration import MasterclassRegistration
from app.models.workshop_registration import WorkshopRegistration

__all__ = [
    "Base",
    "Profile",
    "Masterclass",
    "MentorMasterclass",
    "MasterclassRegistration",
    "WorkshopRegistration",
]
