# app/crud/__init__.py

from .crud_masterclass import masterclass
from .crud_mentor_masterclass import mentor_masterclass
from .crud_profile import profile
from .crud_registration import registration
from .crud_workshop_registration import workshop_registration
