# tests/crud/test_mentor_masterclass.py

from sqlalchemy.orm import Session

from app import crud
from tests.utils.masterclass import create_mentor_masterclass


def test_increment_respects_cap(db: Session):
    mc = create_mentor_masterclass(db, max_participants=2, current_participants=1)

    assert crud.mentor_masterclass.increment_participants(db, masterclass_id=mc.id)
    assert not crud.mentor_masterclass.increment_participants(db, masterclass_id=mc.id)
    db.commit()

    assert crud.mentor_masterclass.get_participant_count(db, masterclass_id=mc.id) == 2


def test_increment_uncapped(db: Session):
    mc = create_mentor_masterclass(db, max_participants=None, current_participants=40)

    for _ in range(3):
        assert crud.mentor_masterclass.increment_participants(db, masterclass_id=mc.id)
    db.commit()

    assert crud.mentor_masterclass.get_participant_count(db, masterclass_id=mc.id) == 43


def test_decrement_floors_at_zero(db: Session):
    mc = create_mentor_masterclass(db, current_participants=1)

    assert crud.mentor_masterclass.decrement_participants(db, masterclass_id=mc.id)
    assert not crud.mentor_masterclass.decrement_participants(db, masterclass_id=mc.id)
    db.commit()

    assert crud.mentor_masterclass.get_participant_count(db, masterclass_id=mc.id) == 0


def test_counter_on_unknown_id(db: Session):
    assert not crud.mentor_masterclass.increment_participants(db, masterclass_id="nope")
    assert crud.mentor_masterclass.get_participant_count(db, masterclass_id="nope") is None


def test_get_published_skips_drafts(db: Session):
    published = create_mentor_masterclass(db, status="published")
    create_mentor_masterclass(db, status="draft")

    rows = crud.mentor_masterclass.get_published(db)

    assert [r.id for r in rows] == [published.id]
