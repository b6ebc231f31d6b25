# app/api/v1/api.py

from fastapi import APIRouter
from app.api.v1.endpoints import (
    masterclasses,
    workshops,
    profiles,
    mentor_masterclasses,
    internals,
    seed,
    my_masterclasses,
)

# Everything served under /api.
api_router = APIRouter()

api_router.include_router(masterclasses.router)
api_router.include_router(workshops.router)
api_router.include_router(profiles.router)
api_router.include_router(mentor_masterclasses.router)
api_router.include_router(internals.router)
api_router.include_router(seed.router)

# Page-level routes, mounted at the application root.
pages_router = APIRouter()
pages_router.include_router(my_masterclasses.router)
