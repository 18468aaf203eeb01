"""Tests for CRM clients, contacts and the client history."""

import pytest

from asme.db.enums import ClientHistoryEvent, ClientStatus
from asme.db.models import Client, ClientHistory


async def _create(c, **overrides) -> dict:
    payload = {"company_name": "Maquiladora Norte", "sector": "Industrial"}
    payload.update(overrides)
    response = await c.post("/api/clients", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _events(db, client_id) -> list[str]:
    rows = db.query(ClientHistory).filter(ClientHistory.client_id == client_id).all()
    return sorted(row.event_type for row in rows)


@pytest.mark.asyncio
async def test_create_client_defaults_to_prospect_and_logs(authed_client, db):
    body = await _create(authed_client, contact_email="Compras@Norte.MX")

    assert body["status"] == ClientStatus.PROSPECTO.value
    assert body["contact_email"] == "compras@norte.mx"
    assert _events(db, body["id"]) == [ClientHistoryEvent.CREATED.value]


@pytest.mark.asyncio
async def test_status_change_is_recorded_with_metadata(authed_client, db):
    body = await _create(authed_client)

    response = await authed_client.patch(f"/api/clients/{body['id']}", json={"status": "Activo"})
    history = await authed_client.get(f"/api/clients/{body['id']}/history")

    assert response.json()["status"] == "Activo"
    change = next(h for h in history.json() if h["event_type"] == "status_changed")
    assert change["description"] == 'Estado cambió de "Prospecto" a "Activo"'
    assert change["metadata"] == {"old_status": "Prospecto", "new_status": "Activo"}


@pytest.mark.asyncio
async def test_update_without_status_change_adds_no_history(authed_client, db):
    body = await _create(authed_client)

    await authed_client.patch(f"/api/clients/{body['id']}", json={"sector": "Comercio"})

    assert _events(db, body["id"]) == [ClientHistoryEvent.CREATED.value]


@pytest.mark.asyncio
async def test_archive_and_unarchive(authed_client, db):
    body = await _create(authed_client)

    archived = await authed_client.post(f"/api/clients/{body['id']}/archive")
    active_list = await authed_client.get("/api/clients")
    archived_list = await authed_client.get("/api/clients", params={"show_archived": "true"})
    restored = await authed_client.post(f"/api/clients/{body['id']}/unarchive")

    assert archived.json()["status"] == ClientStatus.ARCHIVADO.value
    assert archived.json()["archived_at"] is not None
    assert active_list.json()["total"] == 0
    assert archived_list.json()["total"] == 1
    assert restored.json()["status"] == ClientStatus.ACTIVO.value
    assert restored.json()["archived_at"] is None
    assert _events(db, body["id"]) == ["archived", "created", "unarchived"]


@pytest.mark.asyncio
async def test_list_filters_and_pagination(authed_client):
    await _create(authed_client, company_name="Alfa", sector="Salud", status="Activo")
    await _create(authed_client, company_name="Beta", sector="Salud")
    await _create(authed_client, company_name="Gamma", sector="Educación")

    salud = await authed_client.get("/api/clients", params={"sector": "Salud"})
    activos = await authed_client.get("/api/clients", params={"status": "Activo"})
    todos = await authed_client.get("/api/clients", params={"status": "todos", "limit": 2, "page": 2})
    search = await authed_client.get("/api/clients", params={"search": "amm"})
    desc = await authed_client.get("/api/clients", params={"sort": "name_desc"})

    assert salud.json()["total"] == 2
    assert [c["company_name"] for c in activos.json()["data"]] == ["Alfa"]
    assert todos.json()["totalPages"] == 2
    assert [c["company_name"] for c in todos.json()["data"]] == ["Gamma"]
    assert [c["company_name"] for c in search.json()["data"]] == ["Gamma"]
    assert [c["company_name"] for c in desc.json()["data"]] == ["Gamma", "Beta", "Alfa"]


@pytest.mark.asyncio
async def test_notes_and_contacts(authed_client, db):
    body = await _create(authed_client)

    notes = await authed_client.put(f"/api/clients/{body['id']}/notes", json={"notes": " Llamar el lunes "})
    contact = await authed_client.post(
        f"/api/clients/{body['id']}/contacts",
        json={"name": "Laura", "email": "laura@norte.mx", "position": "Compras"},
    )
    contacts = await authed_client.get(f"/api/clients/{body['id']}/contacts")

    assert notes.json()["notes"] == "Llamar el lunes"
    assert contact.status_code == 201
    assert [c["name"] for c in contacts.json()] == ["Laura"]
    assert ClientHistoryEvent.NOTES_UPDATED.value in _events(db, body["id"])


@pytest.mark.asyncio
async def test_unknown_client_returns_404(authed_client):
    response = await authed_client.get("/api/clients/00000000-0000-0000-0000-000000000000")
    assert response.status_code == 404
    assert response.json()["detail"] == "Cliente no encontrado"


@pytest.mark.asyncio
async def test_invalid_status_is_rejected(authed_client, db):
    response = await authed_client.post("/api/clients", json={"company_name": "X", "status": "Perdido"})
    assert response.status_code == 400
    assert db.query(Client).count() == 0
