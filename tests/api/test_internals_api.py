# tests/api/test_internals_api.py

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tests.utils.auth import get_internal_headers, get_user_authentication_headers
from tests.utils.masterclass import create_catalog_masterclass


def _register_paid(client: TestClient, db: Session) -> str:
    mc = create_catalog_masterclass(db, fee=250)
    response = client.post(
        "/api/masterclasses/register",
        headers=get_user_authentication_headers(user_id="s1"),
        json={"masterclassId": mc.id, "transactionId": "TXN-1"},
    )
    return response.json()["registration"]["id"]


def test_internal_endpoints_need_api_key(client: TestClient, db: Session) -> None:
    registration_id = _register_paid(client, db)

    response = client.post(
        f"/api/internal/registrations/{registration_id}/payment-status",
        json={"payment_status": "verified"},
        headers={"X-Internal-Api-Key": "wrong"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid or missing Internal API Key"


def test_verify_payment(client: TestClient, db: Session) -> None:
    registration_id = _register_paid(client, db)

    response = client.post(
        f"/api/internal/registrations/{registration_id}/payment-status",
        json={"payment_status": "verified"},
        headers=get_internal_headers(),
    )

    assert response.status_code == 200
    assert response.json()["payment_status"] == "verified"
    assert response.json()["display_status"] == "Registered"


def test_failed_payment_display(client: TestClient, db: Session) -> None:
    registration_id = _register_paid(client, db)

    response = client.post(
        f"/api/internal/registrations/{registration_id}/payment-status",
        json={"payment_status": "failed"},
        headers=get_internal_headers(),
    )

    assert response.json()["display_status"] == "Payment Failed"


def test_mark_attendance(client: TestClient, db: Session) -> None:
    registration_id = _register_paid(client, db)

    response = client.post(
        f"/api/internal/registrations/{registration_id}/attendance",
        json={"status": "attended"},
        headers=get_internal_headers(),
    )

    assert response.status_code == 200
    assert response.json()["status"] == "attended"


def test_unknown_registration(client: TestClient, db: Session) -> None:
    response = client.post(
        "/api/internal/registrations/mreg_missing/attendance",
        json={"status": "missed"},
        headers=get_internal_headers(),
    )

    assert response.status_code == 404
