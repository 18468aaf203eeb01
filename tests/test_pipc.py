"""Tests for PIPC clients, project sections and PDF generation."""

from datetime import date, timedelta

import pytest

from asme.db.enums import PIPCProjectStatus, Role
from asme.db.models import PIPCClient, PIPCProject, PIPCRisk, PIPCTraining
from asme.schemas.pipc import PIPCClientRead, PIPCProjectFull, PIPCProjectRead, RiskRead
from asme.services import pipc_pdf, pipc_service


async def _new_project(c, razon_social: str = "Maquiladora Norte SA") -> dict:
    response = await c.post("/api/pipc/clients", json={"razon_social": razon_social, "rfc": "MNO010101AB1"})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_client_opens_draft_project(authed_client):
    created = await _new_project(authed_client)
    listed = await authed_client.get("/api/pipc/clients")

    assert created["project"]["status"] == PIPCProjectStatus.DRAFT.value
    assert created["project"]["client_id"] == created["client"]["id"]
    assert [p["id"] for p in listed.json()[0]["projects"]] == [created["project"]["id"]]


@pytest.mark.asyncio
async def test_section_upserts_overwrite(authed_client):
    project_id = (await _new_project(authed_client))["project"]["id"]

    await authed_client.put(
        f"/api/pipc/projects/{project_id}/company-info",
        json={"domicilio": "Av. Revolución 100", "municipio": "Tijuana"},
    )
    second = await authed_client.put(
        f"/api/pipc/projects/{project_id}/company-info",
        json={"municipio": "Ensenada"},
    )
    await authed_client.put(f"/api/pipc/projects/{project_id}/occupancy", json={"poblacion_fija": 40})
    await authed_client.put(
        f"/api/pipc/projects/{project_id}/uipc",
        json={"responsable": "Ing. Soto", "brigadas": {"evacuacion": ["Ana", "Luis"]}},
    )
    full = await authed_client.get(f"/api/pipc/projects/{project_id}")

    assert second.json()["domicilio"] == "Av. Revolución 100"
    assert second.json()["municipio"] == "Ensenada"
    body = full.json()
    assert body["company_info"]["estado"] == "Baja California"
    assert body["occupancy"]["poblacion_fija"] == 40
    assert body["uipc"]["brigadas"] == {"evacuacion": ["Ana", "Luis"]}


@pytest.mark.asyncio
async def test_training_date_must_be_in_the_past(authed_client, db):
    project_id = (await _new_project(authed_client))["project"]["id"]

    today = await authed_client.post(
        f"/api/pipc/projects/{project_id}/training",
        json={"curso": "Primeros auxilios", "fecha": date.today().isoformat()},
    )
    past = await authed_client.post(
        f"/api/pipc/projects/{project_id}/training",
        json={"curso": "Primeros auxilios", "fecha": (date.today() - timedelta(days=3)).isoformat()},
    )

    assert today.status_code == 400
    assert today.json()["detail"] == "La fecha debe ser anterior a hoy"
    assert past.status_code == 201
    assert db.query(PIPCTraining).count() == 1


@pytest.mark.asyncio
async def test_quick_add_helpers(authed_client, db):
    project_id = (await _new_project(authed_client))["project"]["id"]

    legal = await authed_client.post(f"/api/pipc/projects/{project_id}/quick/legal-framework")
    resources = await authed_client.post(f"/api/pipc/projects/{project_id}/quick/resource-inventory")
    signage = await authed_client.post(f"/api/pipc/projects/{project_id}/quick/signage")
    drill = await authed_client.post(f"/api/pipc/projects/{project_id}/quick/drill")

    assert legal.json()["marco_juridico"] == pipc_service.LEGAL_FRAMEWORK_TEXT
    assert len(resources.json()) == len(pipc_service.DEFAULT_RESOURCES)
    assert len(signage.json()) == len(pipc_service.DEFAULT_SIGNAGE)
    assert drill.json()["curso"] == pipc_service.DRILL_COURSE
    assert drill.json()["fecha"] == (date.today() - timedelta(days=1)).isoformat()
    assert db.query(PIPCRisk).count() == 7


@pytest.mark.asyncio
async def test_risk_delete_checks_project(authed_client):
    first = (await _new_project(authed_client, "Uno SA"))["project"]["id"]
    other = (await _new_project(authed_client, "Dos SA"))["project"]["id"]
    risk = await authed_client.post(
        f"/api/pipc/projects/{first}/risks", json={"tipo": "Sismo", "categoria": "externo", "nivel": "Alto"}
    )

    wrong = await authed_client.delete(f"/api/pipc/projects/{other}/risks/{risk.json()['id']}")
    right = await authed_client.delete(f"/api/pipc/projects/{first}/risks/{risk.json()['id']}")

    assert wrong.status_code == 404
    assert right.status_code == 204


@pytest.mark.asyncio
async def test_generate_pdf_uploads_and_marks_generated(authed_client, db, fake_spaces):
    project_id = (await _new_project(authed_client))["project"]["id"]
    await authed_client.post(
        f"/api/pipc/projects/{project_id}/risks", json={"tipo": "Incendio", "categoria": "interno"}
    )

    response = await authed_client.post(f"/api/pipc/projects/{project_id}/pdf")
    full = await authed_client.get(f"/api/pipc/projects/{project_id}")

    assert response.status_code == 200
    url = response.json()["pdfUrl"]
    assert "/pipc-pdfs/pipc_Maquiladora_Norte_SA_" in url
    (key,) = fake_spaces.objects
    assert fake_spaces.objects[key].startswith(b"%PDF")
    assert full.json()["project"]["status"] == PIPCProjectStatus.GENERATED.value
    assert full.json()["file"]["pdf_url"] == url


def test_build_pdf_key():
    assert pipc_service.build_pdf_key(" Grupo  Alfa ", now_ms=7) == "pipc-pdfs/pipc_Grupo_Alfa_7.pdf"


def test_create_pipc_pdf_renders_empty_sections():
    project_id = "6f1c1d7e-0000-4000-8000-000000000001"
    client_id = "6f1c1d7e-0000-4000-8000-000000000002"
    stamp = "2026-01-05T10:00:00"
    data = PIPCProjectFull(
        project=PIPCProjectRead(
            id=project_id, client_id=client_id, status="draft", created_at=stamp, updated_at=stamp
        ),
        client=PIPCClientRead(id=client_id, razon_social="Farmacia Centro", rfc=None, created_at=stamp),
        risks=[RiskRead(id=client_id, project_id=project_id, tipo="Sismo", categoria="externo", nivel=None)],
    )

    pdf = pipc_pdf.create_pipc_pdf(data, generated_on=date(2026, 1, 5))

    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


@pytest.mark.asyncio
async def test_delete_client_cascades(authed_client, db):
    created = await _new_project(authed_client)
    project_id = created["project"]["id"]
    await authed_client.post(f"/api/pipc/projects/{project_id}/quick/signage")

    response = await authed_client.delete(f"/api/pipc/clients/{created['client']['id']}")

    assert response.status_code == 204
    assert db.query(PIPCClient).count() == 0
    assert db.query(PIPCProject).count() == 0
    assert db.query(PIPCRisk).count() == 0


@pytest.mark.asyncio
async def test_viewer_cannot_edit_projects(client_for):
    async with client_for(Role.VIEWER) as c:
        response = await c.post("/api/pipc/clients", json={"razon_social": "X"})
    assert response.status_code == 403
