# tests/services/test_profile_lookup.py

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, TransportError
from app.schemas.profile import CallerRole, ProfileCreate
from app.services import profile_lookup
from app.services.profile_lookup import SessionContext
from tests.utils.masterclass import create_profile


def test_role_for_existing_profile(db: Session):
    create_profile(db, user_id="m1", role="mentor")
    assert profile_lookup.current_role(db, "m1") == CallerRole.mentor


def test_missing_profile_is_anonymous(db: Session):
    assert profile_lookup.current_role(db, "nobody") == CallerRole.anonymous
    assert profile_lookup.current_role(db, None) == CallerRole.anonymous


def test_query_error_is_not_anonymous():
    db_session = MagicMock()
    db_session.query.side_effect = OperationalError("SELECT", {}, Exception("down"))

    with pytest.raises(TransportError):
        profile_lookup.current_role(db_session, "u1")


def test_create_profile_twice_conflicts(db: Session):
    ctx = SessionContext(user_id="s1", role=CallerRole.anonymous)
    profile_in = ProfileCreate(full_name="Ada", role="student", student_type="college")

    created = profile_lookup.create_profile(db, ctx, profile_in)
    assert created.role == "student"

    with pytest.raises(ConflictError):
        profile_lookup.create_profile(db, ctx, profile_in)


def test_student_profile_requires_student_type():
    with pytest.raises(ValueError):
        ProfileCreate(full_name="Ada", role="student")
