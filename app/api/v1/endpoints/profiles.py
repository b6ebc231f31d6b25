# app/api/v1/endpoints/profiles.py
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api import deps
from app.schemas.profile import (
    CallerRole,
    Profile,
    ProfileCreate,
    ProfileUpdate,
    RoleResponse,
)
from app.services import profile_lookup
from app.services.profile_lookup import SessionContext

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=Profile)
def read_my_profile(
    db: Session = Depends(deps.get_db),
    ctx: SessionContext = Depends(deps.get_session_context),
):
    return profile_lookup.get_profile(db, ctx)


@router.post("", response_model=Profile, status_code=status.HTTP_201_CREATED)
def complete_profile(
    profile_in: ProfileCreate,
    db: Session = Depends(deps.get_db),
    ctx: SessionContext = Depends(deps.get_session_context),
):
    """
    First profile-completion submission for the signed-in user.
    Students must also say what kind of student they are.
    """
    return profile_lookup.create_profile(db, ctx, profile_in)


@router.patch("", response_model=Profile)
def update_my_profile(
    profile_in: ProfileUpdate,
    db: Session = Depends(deps.get_db),
    ctx: SessionContext = Depends(deps.get_session_context),
):
    return profile_lookup.update_profile(db, ctx, profile_in)


@router.get("/role", response_model=RoleResponse)
def read_my_role(
    ctx: Optional[SessionContext] = Depends(deps.get_session_context_optional),
):
    """'anonymous' when there is no session or no profile row yet."""
    return RoleResponse(role=ctx.role if ctx else CallerRole.anonymous)
