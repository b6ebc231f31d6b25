# app/services/registration_ledger.py
"""
Registration ledger: records and removes a user's registration against a
masterclass and tracks payment status.

- At most one registration per (user_id, masterclass_id). The unique
  constraint is the only check; an IntegrityError on insert becomes
  AlreadyRegisteredError.
- Free masterclasses (amount == 0) are 'completed' straight away. Paid ones
  need a transaction id and start 'pending' until verified out of band.
- For mentor-authored masterclasses the participant counter moves in the
  same transaction as the insert/delete, using conditional UPDATEs.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app import crud
from app.core.errors import (
    AlreadyRegisteredError,
    InvalidTransitionError,
    MasterclassFullError,
    NotFoundError,
    NotRegisteredError,
    PaymentRequiredError,
)
from app.models.registration import MasterclassRegistration
from app.schemas.masterclass import MasterclassSource
from app.schemas.registration import (
    MyMasterclass,
    PaymentStatus,
    Registration,
    RegistrationStatus,
)
from app.services import masterclass_resolver
from app.services.availability import as_utc

logger = logging.getLogger(__name__)

# Out-of-band verification moves a registration along these edges only.
PAYMENT_TRANSITIONS: Dict[PaymentStatus, FrozenSet[PaymentStatus]] = {
    PaymentStatus.not_required: frozenset(),
    PaymentStatus.pending: frozenset(
        {PaymentStatus.completed, PaymentStatus.verified, PaymentStatus.failed}
    ),
    PaymentStatus.failed: frozenset({PaymentStatus.pending}),
    PaymentStatus.completed: frozenset(),
    PaymentStatus.verified: frozenset(),
}

ATTENDANCE_TRANSITIONS: Dict[RegistrationStatus, FrozenSet[RegistrationStatus]] = {
    RegistrationStatus.registered: frozenset(
        {RegistrationStatus.attended, RegistrationStatus.missed}
    ),
    RegistrationStatus.attended: frozenset(),
    RegistrationStatus.missed: frozenset(),
}


def initial_payment_status(amount: float) -> PaymentStatus:
    return PaymentStatus.completed if amount == 0 else PaymentStatus.pending


def register(
    db: Session,
    *,
    user_id: str,
    masterclass_id: str,
    amount: float,
    transaction_id: Optional[str] = None,
    source: MasterclassSource = MasterclassSource.catalog,
    now: Optional[datetime] = None,
) -> MasterclassRegistration:
    transaction_id = (transaction_id or "").strip() or None
    if amount < 0:
        raise ValueError("amount must not be negative")
    if amount > 0 and transaction_id is None:
        raise PaymentRequiredError()

    payment_status = initial_payment_status(amount)
    db_obj = MasterclassRegistration(
        user_id=user_id,
        masterclass_id=masterclass_id,
        status=RegistrationStatus.registered.value,
        payment_status=payment_status.value,
        transaction_id=transaction_id if amount > 0 else None,
        payment_amount=amount,
        payment_date=now or datetime.now(timezone.utc),
    )

    try:
        crud.registration.add(db, db_obj=db_obj)

        if source == MasterclassSource.mentor:
            if not crud.mentor_masterclass.increment_participants(
                db, masterclass_id=masterclass_id
            ):
                db.rollback()
                logger.info(
                    f"Registration rejected for user {user_id} - masterclass {masterclass_id} is full"
                )
                raise MasterclassFullError(masterclass_id)

        # Insert + counter commit together
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(
            f"Duplicate registration rejected for user {user_id}, masterclass {masterclass_id}"
        )
        raise AlreadyRegisteredError()
    except MasterclassFullError:
        raise
    except Exception as e:
        logger.error(
            f"Failed to register user {user_id} for masterclass {masterclass_id}: {str(e)}",
            exc_info=True,
            extra={"user_id": user_id, "masterclass_id": masterclass_id},
        )
        db.rollback()
        raise

    db.refresh(db_obj)
    logger.info(
        f"User {user_id} registered for masterclass {masterclass_id} "
        f"(payment_status={payment_status.value})"
    )
    return db_obj


def withdraw(
    db: Session,
    *,
    user_id: str,
    masterclass_id: str,
    source: MasterclassSource = MasterclassSource.catalog,
) -> None:
    """
    Deletes the registration row. For mentor-authored masterclasses the
    participant count drops by one in the same transaction, floored at 0.
    """
    try:
        deleted = crud.registration.delete_for_user(
            db, user_id=user_id, masterclass_id=masterclass_id
        )
        if not deleted:
            db.rollback()
            raise NotRegisteredError()

        if source == MasterclassSource.mentor:
            if not crud.mentor_masterclass.decrement_participants(
                db, masterclass_id=masterclass_id
            ):
                logger.warning(
                    f"Participant count for masterclass {masterclass_id} already at 0 on withdrawal"
                )

        db.commit()
    except NotRegisteredError:
        raise
    except Exception as e:
        logger.error(
            f"Failed to withdraw user {user_id} from masterclass {masterclass_id}: {str(e)}",
            exc_info=True,
            extra={"user_id": user_id, "masterclass_id": masterclass_id},
        )
        db.rollback()
        raise

    logger.info(f"User {user_id} withdrew from masterclass {masterclass_id}")


def get_registration(
    db: Session, *, user_id: str, masterclass_id: str
) -> MasterclassRegistration:
    db_obj = crud.registration.get_by_user_and_masterclass(
        db, user_id=user_id, masterclass_id=masterclass_id
    )
    if not db_obj:
        raise NotRegisteredError()
    return db_obj


def resubmit_payment(
    db: Session,
    *,
    user_id: str,
    masterclass_id: str,
    transaction_id: str,
    now: Optional[datetime] = None,
) -> MasterclassRegistration:
    """A failed payment goes back to pending with a fresh transaction id."""
    transaction_id = (transaction_id or "").strip()
    if not transaction_id:
        raise PaymentRequiredError()

    db_obj = get_registration(db, user_id=user_id, masterclass_id=masterclass_id)
    _check_transition(
        "payment_status",
        PAYMENT_TRANSITIONS,
        PaymentStatus(db_obj.payment_status),
        PaymentStatus.pending,
    )
    db_obj.payment_status = PaymentStatus.pending.value
    db_obj.transaction_id = transaction_id
    db_obj.payment_date = now or datetime.now(timezone.utc)
    db.commit()
    db.refresh(db_obj)
    logger.info(f"Payment resubmitted for registration {db_obj.id}")
    return db_obj


def set_payment_status(
    db: Session, *, registration_id: str, payment_status: PaymentStatus
) -> MasterclassRegistration:
    db_obj = crud.registration.get(db, id=registration_id)
    if not db_obj:
        raise NotFoundError("Registration not found")
    _check_transition(
        "payment_status",
        PAYMENT_TRANSITIONS,
        PaymentStatus(db_obj.payment_status),
        payment_status,
    )
    db_obj.payment_status = payment_status.value
    db.commit()
    db.refresh(db_obj)
    logger.info(f"Registration {registration_id} payment_status -> {payment_status.value}")
    return db_obj


def set_attendance(
    db: Session, *, registration_id: str, status: RegistrationStatus
) -> MasterclassRegistration:
    db_obj = crud.registration.get(db, id=registration_id)
    if not db_obj:
        raise NotFoundError("Registration not found")
    _check_transition(
        "status",
        ATTENDANCE_TRANSITIONS,
        RegistrationStatus(db_obj.status),
        status,
    )
    db_obj.status = status.value
    db.commit()
    db.refresh(db_obj)
    logger.info(f"Registration {registration_id} status -> {status.value}")
    return db_obj


def my_masterclasses(db: Session, *, user_id: str, now: datetime) -> List[MyMasterclass]:
    """
    The user's registrations with resolved details: upcoming first, then
    past, each group in ascending start order. Registrations whose
    masterclass no longer resolves go last, without details.
    """
    now = as_utc(now)
    entries = [
        MyMasterclass(
            registration=Registration.model_validate(reg),
            masterclass=masterclass_resolver.find(db, reg.masterclass_id),
        )
        for reg in crud.registration.get_multi_by_user(db, user_id=user_id)
    ]

    def sort_key(entry: MyMasterclass):
        if entry.masterclass is None:
            return (2, datetime.max.replace(tzinfo=timezone.utc))
        starts_at = entry.masterclass.starts_at
        return (1 if starts_at < now else 0, starts_at)

    return sorted(entries, key=sort_key)


def _check_transition(field, transitions, current, requested) -> None:
    if requested not in transitions[current]:
        raise InvalidTransitionError(field, current.value, requested.value)
