"""
Tests for appointment booking and admin review.

Coverage:
- Public booking validation per source catalogue
- Approval slot conflicts (exact date+time, self excluded)
- Reject clears the assigned slot
- Role checks on the agenda endpoints
"""

from datetime import date, time

import pytest

from asme.db.enums import AppointmentStatus, Role
from asme.db.models import Appointment


def _booking(**overrides) -> dict:
    payload = {
        "source": "asme",
        "service_label": "Protección Civil",
        "customer_name": "María López",
        "customer_email": "maria@example.com",
        "customer_phone": "6641234567",
        "requested_date": "2026-11-03",
        "requested_time": "10:00",
    }
    payload.update(overrides)
    return payload


def _appointment(db, **overrides) -> Appointment:
    values = {
        "source": "asme",
        "service_label": "Capacitación",
        "customer_name": "Cliente",
        "status": AppointmentStatus.PENDING.value,
    }
    values.update(overrides)
    appointment = Appointment(**values)
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    return appointment


# =============================================================================
# Public booking
# =============================================================================

@pytest.mark.asyncio
async def test_create_appointment_is_always_pending(client, db):
    response = await client.post("/api/appointments", json=_booking(status="approved"))

    assert response.status_code == 200
    assert response.json() == {"success": True}
    row = db.query(Appointment).one()
    assert row.status == AppointmentStatus.PENDING.value
    assert row.requested_time == time(10, 0)


@pytest.mark.asyncio
async def test_create_appointment_rejects_service_from_other_brand(client, db):
    response = await client.post(
        "/api/appointments",
        json=_booking(source="asme_abogados", service_label="Protección Civil"),
    )

    assert response.status_code == 400
    assert "ASME Abogados" in response.json()["detail"]
    assert db.query(Appointment).count() == 0


@pytest.mark.asyncio
async def test_create_appointment_requires_source_and_label(client):
    response = await client.post("/api/appointments", json=_booking(source=None))
    assert response.status_code == 400


# =============================================================================
# Admin review
# =============================================================================

@pytest.mark.asyncio
async def test_approve_conflicting_slot_returns_409(authed_client, db):
    _appointment(
        db,
        status=AppointmentStatus.APPROVED.value,
        assigned_date=date(2026, 11, 3),
        assigned_time=time(10, 0),
    )
    pending = _appointment(db)

    response = await authed_client.post(
        "/api/appointments/admin",
        json={
            "id": str(pending.id),
            "action": "approve",
            "assigned_date": "2026-11-03",
            "assigned_time": "10:00",
        },
    )

    assert response.status_code == 409
    db.refresh(pending)
    assert pending.status == AppointmentStatus.PENDING.value


@pytest.mark.asyncio
async def test_reapproving_same_slot_does_not_conflict_with_itself(authed_client, db):
    approved = _appointment(
        db,
        status=AppointmentStatus.APPROVED.value,
        assigned_date=date(2026, 11, 3),
        assigned_time=time(10, 0),
    )

    response = await authed_client.post(
        "/api/appointments/admin",
        json={
            "id": str(approved.id),
            "action": "approve",
            "assigned_date": "2026-11-03",
            "assigned_time": "10:00",
            "admin_notes": "Confirmado por teléfono",
        },
    )

    assert response.status_code == 200
    db.refresh(approved)
    assert approved.admin_notes == "Confirmado por teléfono"


@pytest.mark.asyncio
async def test_approve_without_slot_returns_400(authed_client, db):
    pending = _appointment(db)

    response = await authed_client.post(
        "/api/appointments/admin",
        json={"id": str(pending.id), "action": "approve", "assigned_date": "2026-11-03"},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_admin_action_validation(authed_client, db):
    pending = _appointment(db)

    missing = await authed_client.post("/api/appointments/admin", json={"action": "approve"})
    invalid = await authed_client.post(
        "/api/appointments/admin", json={"id": str(pending.id), "action": "cancel"}
    )

    assert missing.status_code == 400
    assert invalid.status_code == 400
    assert invalid.json()["detail"] == "Invalid action"


@pytest.mark.asyncio
async def test_reject_clears_assigned_slot(authed_client, db):
    approved = _appointment(
        db,
        status=AppointmentStatus.APPROVED.value,
        assigned_date=date(2026, 11, 3),
        assigned_time=time(10, 0),
    )

    response = await authed_client.post(
        "/api/appointments/admin",
        json={"id": str(approved.id), "action": "reject", "admin_notes": "Sin cupo"},
    )

    assert response.status_code == 200
    db.refresh(approved)
    assert approved.status == AppointmentStatus.REJECTED.value
    assert approved.assigned_date is None
    assert approved.assigned_time is None


@pytest.mark.asyncio
async def test_list_appointments_paginates(authed_client, db):
    for _ in range(3):
        _appointment(db)

    response = await authed_client.get("/api/appointments?page=2&limit=2")

    assert response.status_code == 200
    body = response.json()
    assert body["page"] == 2
    assert body["totalPages"] == 2
    assert len(body["data"]) == 1


@pytest.mark.asyncio
async def test_delete_appointment(authed_client, db):
    appointment = _appointment(db)

    response = await authed_client.delete(f"/api/appointments/{appointment.id}")

    assert response.status_code == 200
    assert db.query(Appointment).count() == 0


# =============================================================================
# RBAC
# =============================================================================

@pytest.mark.asyncio
async def test_viewer_cannot_review_appointments(client_for, db):
    pending = _appointment(db)

    async with client_for(Role.VIEWER) as c:
        response = await c.post(
            "/api/appointments/admin",
            json={"id": str(pending.id), "action": "reject"},
        )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_review_requires_csrf_header(client_for, db):
    pending = _appointment(db)

    async with client_for(Role.ADMIN, csrf=False) as c:
        response = await c.post(
            "/api/appointments/admin",
            json={"id": str(pending.id), "action": "reject"},
        )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_agenda_requires_authentication(client):
    response = await client.get("/api/appointments")
    assert response.status_code == 401
