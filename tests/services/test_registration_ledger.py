# tests/services/test_registration_ledger.py

from datetime import date, datetime, timezone

import pytest
from sqlalchemy.orm import Session

from app import crud
from app.core.errors import (
    AlreadyRegisteredError,
    InvalidTransitionError,
    MasterclassFullError,
    NotRegisteredError,
    PaymentRequiredError,
)
from app.models.registration import MasterclassRegistration
from app.schemas.masterclass import MasterclassSource
from app.schemas.registration import PaymentStatus, RegistrationStatus
from app.services import registration_ledger
from tests.utils.masterclass import create_catalog_masterclass, create_mentor_masterclass

NOW = datetime(2025, 1, 20, 12, 0, tzinfo=timezone.utc)


def _rows(db: Session, user_id: str, masterclass_id: str) -> int:
    return (
        db.query(MasterclassRegistration)
        .filter_by(user_id=user_id, masterclass_id=masterclass_id)
        .count()
    )


def test_free_registration_is_completed_without_transaction(db: Session):
    mc = create_catalog_masterclass(db, fee=0)

    reg = registration_ledger.register(
        db, user_id="u1", masterclass_id=mc.id, amount=0, now=NOW
    )

    assert reg.payment_status == PaymentStatus.completed.value
    assert reg.status == RegistrationStatus.registered.value
    assert reg.transaction_id is None


def test_paid_registration_is_pending_with_transaction(db: Session):
    mc = create_catalog_masterclass(db, fee=500)

    reg = registration_ledger.register(
        db, user_id="u1", masterclass_id=mc.id, amount=500, transaction_id=" TXN-1 "
    )

    assert reg.payment_status == PaymentStatus.pending.value
    assert reg.transaction_id == "TXN-1"
    assert float(reg.payment_amount) == 500


@pytest.mark.parametrize("transaction_id", [None, "", "   "])
def test_paid_registration_without_transaction_is_rejected_before_insert(
    db: Session, transaction_id
):
    mc = create_catalog_masterclass(db, fee=500)

    with pytest.raises(PaymentRequiredError):
        registration_ledger.register(
            db, user_id="u1", masterclass_id=mc.id, amount=500, transaction_id=transaction_id
        )

    assert _rows(db, "u1", mc.id) == 0


def test_second_registration_is_rejected(db: Session):
    mc = create_catalog_masterclass(db)
    registration_ledger.register(db, user_id="u1", masterclass_id=mc.id, amount=0)

    with pytest.raises(AlreadyRegisteredError) as exc_info:
        registration_ledger.register(db, user_id="u1", masterclass_id=mc.id, amount=0)

    assert exc_info.value.status_code == 400
    assert _rows(db, "u1", mc.id) == 1


def test_mentor_registration_increments_count(db: Session):
    mc = create_mentor_masterclass(db, current_participants=1, max_participants=5)

    registration_ledger.register(
        db, user_id="u1", masterclass_id=mc.id, amount=0, source=MasterclassSource.mentor
    )

    assert crud.mentor_masterclass.get_participant_count(db, masterclass_id=mc.id) == 2


def test_duplicate_mentor_registration_leaves_count_alone(db: Session):
    mc = create_mentor_masterclass(db)
    registration_ledger.register(
        db, user_id="u1", masterclass_id=mc.id, amount=0, source=MasterclassSource.mentor
    )

    with pytest.raises(AlreadyRegisteredError):
        registration_ledger.register(
            db, user_id="u1", masterclass_id=mc.id, amount=0, source=MasterclassSource.mentor
        )

    assert crud.mentor_masterclass.get_participant_count(db, masterclass_id=mc.id) == 1


def test_full_mentor_masterclass_rejects_and_writes_nothing(db: Session):
    mc = create_mentor_masterclass(db, current_participants=2, max_participants=2)

    with pytest.raises(MasterclassFullError) as exc_info:
        registration_ledger.register(
            db, user_id="u1", masterclass_id=mc.id, amount=0, source=MasterclassSource.mentor
        )

    assert exc_info.value.status_code == 409
    assert _rows(db, "u1", mc.id) == 0
    assert crud.mentor_masterclass.get_participant_count(db, masterclass_id=mc.id) == 2


def test_withdraw_deletes_row_and_decrements(db: Session):
    mc = create_mentor_masterclass(db, current_participants=3)
    db.add(
        MasterclassRegistration(
            user_id="u1", masterclass_id=mc.id, payment_status="completed"
        )
    )
    db.commit()

    registration_ledger.withdraw(
        db, user_id="u1", masterclass_id=mc.id, source=MasterclassSource.mentor
    )

    assert _rows(db, "u1", mc.id) == 0
    assert crud.mentor_masterclass.get_participant_count(db, masterclass_id=mc.id) == 2


def test_withdraw_floors_count_at_zero(db: Session):
    mc = create_mentor_masterclass(db, current_participants=0)
    db.add(MasterclassRegistration(user_id="u1", masterclass_id=mc.id))
    db.commit()

    registration_ledger.withdraw(
        db, user_id="u1", masterclass_id=mc.id, source=MasterclassSource.mentor
    )

    assert _rows(db, "u1", mc.id) == 0
    assert crud.mentor_masterclass.get_participant_count(db, masterclass_id=mc.id) == 0


def test_withdraw_without_registration_fails(db: Session):
    mc = create_mentor_masterclass(db, current_participants=3)

    with pytest.raises(NotRegisteredError):
        registration_ledger.withdraw(
            db, user_id="u1", masterclass_id=mc.id, source=MasterclassSource.mentor
        )

    assert crud.mentor_masterclass.get_participant_count(db, masterclass_id=mc.id) == 3


def test_register_then_withdraw_round_trip_on_catalog(db: Session):
    mc = create_catalog_masterclass(db)
    registration_ledger.register(db, user_id="u1", masterclass_id=mc.id, amount=0)

    registration_ledger.withdraw(db, user_id="u1", masterclass_id=mc.id)

    with pytest.raises(NotRegisteredError):
        registration_ledger.get_registration(db, user_id="u1", masterclass_id=mc.id)


def test_payment_verification_transitions(db: Session):
    mc = create_catalog_masterclass(db, fee=500)
    reg = registration_ledger.register(
        db, user_id="u1", masterclass_id=mc.id, amount=500, transaction_id="TXN-1"
    )

    failed = registration_ledger.set_payment_status(
        db, registration_id=reg.id, payment_status=PaymentStatus.failed
    )
    assert failed.payment_status == "failed"

    resubmitted = registration_ledger.resubmit_payment(
        db, user_id="u1", masterclass_id=mc.id, transaction_id="TXN-2"
    )
    assert resubmitted.payment_status == "pending"
    assert resubmitted.transaction_id == "TXN-2"

    verified = registration_ledger.set_payment_status(
        db, registration_id=reg.id, payment_status=PaymentStatus.verified
    )
    assert verified.payment_status == "verified"

    with pytest.raises(InvalidTransitionError):
        registration_ledger.set_payment_status(
            db, registration_id=reg.id, payment_status=PaymentStatus.failed
        )


def test_completed_free_registration_cannot_resubmit(db: Session):
    mc = create_catalog_masterclass(db)
    registration_ledger.register(db, user_id="u1", masterclass_id=mc.id, amount=0)

    with pytest.raises(InvalidTransitionError):
        registration_ledger.resubmit_payment(
            db, user_id="u1", masterclass_id=mc.id, transaction_id="TXN-9"
        )


def test_attendance_is_recorded_once(db: Session):
    mc = create_catalog_masterclass(db)
    reg = registration_ledger.register(db, user_id="u1", masterclass_id=mc.id, amount=0)

    attended = registration_ledger.set_attendance(
        db, registration_id=reg.id, status=RegistrationStatus.attended
    )
    assert attended.status == "attended"

    with pytest.raises(InvalidTransitionError):
        registration_ledger.set_attendance(
            db, registration_id=reg.id, status=RegistrationStatus.missed
        )


def test_my_masterclasses_orders_upcoming_then_past(db: Session):
    past = create_catalog_masterclass(db, title="Past", scheduled_date=date(2024, 12, 1))
    later = create_catalog_masterclass(db, title="Later", scheduled_date=date(2025, 3, 1))
    sooner = create_catalog_masterclass(db, title="Sooner", scheduled_date=date(2025, 2, 1))
    for mc in (past, later, sooner):
        registration_ledger.register(db, user_id="u1", masterclass_id=mc.id, amount=0)
    db.add(MasterclassRegistration(user_id="u1", masterclass_id="deleted-class"))
    db.commit()

    entries = registration_ledger.my_masterclasses(db, user_id="u1", now=NOW)

    titles = [e.masterclass.title if e.masterclass else None for e in entries]
    assert titles == ["Sooner", "Later", "Past", None]
    assert entries[0].registration.display_status == "Registered"


def test_pending_registration_display_status(db: Session):
    mc = create_catalog_masterclass(db, fee=500)
    registration_ledger.register(
        db, user_id="u1", masterclass_id=mc.id, amount=500, transaction_id="TXN-1"
    )

    [entry] = registration_ledger.my_masterclasses(db, user_id="u1", now=NOW)

    assert entry.registration.display_status == "Payment Verification Pending"


@pytest.mark.parametrize("transaction_id", ["", "   "])
def test_resubmit_requires_non_blank_transaction(db: Session, transaction_id):
    mc = create_catalog_masterclass(db, fee=500)
    reg = registration_ledger.register(
        db, user_id="u1", masterclass_id=mc.id, amount=500, transaction_id="TXN-1"
    )
    registration_ledger.set_payment_status(
        db, registration_id=reg.id, payment_status=PaymentStatus.failed
    )

    with pytest.raises(PaymentRequiredError):
        registration_ledger.resubmit_payment(
            db, user_id="u1", masterclass_id=mc.id, transaction_id=transaction_id
        )

    current = registration_ledger.get_registration(db, user_id="u1", masterclass_id=mc.id)
    assert current.payment_status == "failed"
    assert current.transaction_id == "TXN-1"


def test_resubmit_stamps_given_time(db: Session):
    mc = create_catalog_masterclass(db, fee=500)
    reg = registration_ledger.register(
        db, user_id="u1", masterclass_id=mc.id, amount=500, transaction_id="TXN-1"
    )
    registration_ledger.set_payment_status(
        db, registration_id=reg.id, payment_status=PaymentStatus.failed
    )

    resubmitted = registration_ledger.resubmit_payment(
        db, user_id="u1", masterclass_id=mc.id, transaction_id="TXN-2", now=NOW
    )

    assert resubmitted.payment_date.replace(tzinfo=timezone.utc) == NOW
