"""Tests for public image feeds, service cards and the team page."""

import pytest

from asme.db.enums import Role, ServiceCardContentType
from asme.db.models import ServiceCard, TeamMember, TeamMemberImage


def _card(db, content_type: ServiceCardContentType, image_url: str | None, **overrides) -> ServiceCard:
    values = {
        "content_type": content_type.value,
        "page_slug": "main",
        "section": "main",
        "image_url": image_url,
        "order_index": 0,
        "is_active": True,
    }
    values.update(overrides)
    card = ServiceCard(**values)
    db.add(card)
    db.commit()
    return card


# =============================================================================
# Public feeds
# =============================================================================

@pytest.mark.asyncio
async def test_service_images_ordered_and_active_only(client, db):
    service = ServiceCardContentType.SERVICE
    _card(db, service, "https://img/2.png", service_slug="pipc", section="services", order_index=2)
    _card(db, service, "https://img/1.png", service_slug="pipc", section="services", order_index=1)
    _card(db, service, "https://img/off.png", service_slug="pipc", section="services", is_active=False)
    _card(db, service, None, service_slug="pipc", section="services")
    _card(db, service, "https://img/other.png", service_slug="capacitacion", section="services")

    response = await client.get("/api/gallery/service-images", params={"service_slug": "pipc"})

    assert response.status_code == 200
    assert response.json() == ["https://img/1.png", "https://img/2.png"]


@pytest.mark.asyncio
async def test_gallery_and_legal_feeds_use_section_defaults(client, db):
    _card(db, ServiceCardContentType.GALLERY, "https://img/g.png", page_slug="nosotros")
    _card(db, ServiceCardContentType.LEGAL_SERVICE, "https://img/hero.png", page_slug="penal", section="hero")
    _card(db, ServiceCardContentType.LEGAL_SERVICE, "https://img/side.png", page_slug="penal", section="side")

    gallery = await client.get("/api/gallery/images", params={"page_slug": "nosotros"})
    legal = await client.get("/api/gallery/legal-images", params={"page_slug": "penal"})

    assert gallery.json() == ["https://img/g.png"]
    assert legal.json() == ["https://img/hero.png"]


@pytest.mark.asyncio
async def test_service_images_requires_slug(client):
    response = await client.get("/api/gallery/service-images")
    assert response.status_code == 400


# =============================================================================
# Service cards
# =============================================================================

@pytest.mark.asyncio
async def test_service_card_crud(authed_client, db):
    created = await authed_client.post(
        "/api/service-cards",
        json={"content_type": "gallery", "page_slug": "nosotros", "title": "Equipo"},
    )
    card_id = created.json()["id"]

    updated = await authed_client.patch(f"/api/service-cards/{card_id}", json={"is_active": False})
    listed = await authed_client.get("/api/service-cards", params={"content_type": "gallery"})
    deleted = await authed_client.delete(f"/api/service-cards/{card_id}")

    assert created.status_code == 201
    assert updated.json()["is_active"] is False
    assert [c["id"] for c in listed.json()] == [card_id]
    assert deleted.status_code == 204
    assert db.query(ServiceCard).count() == 0


# =============================================================================
# Team
# =============================================================================

@pytest.mark.asyncio
async def test_team_images_append_in_order(authed_client, client, db):
    created = await authed_client.post(
        "/api/team", json={"name": "Ana Ruiz", "position": "Directora", "order": 1}
    )
    member_id = created.json()["id"]

    first = await authed_client.post(f"/api/team/{member_id}/images", json={"image_url": "https://img/a.png"})
    second = await authed_client.post(f"/api/team/{member_id}/images", json={"image_url": "https://img/b.png"})
    await authed_client.patch(f"/api/team/images/{first.json()['id']}", json={"order": 5})

    team = await client.get("/api/team")

    assert first.json()["order"] == 0
    assert second.json()["order"] == 1
    images = team.json()[0]["images"]
    assert [i["image_url"] for i in images] == ["https://img/b.png", "https://img/a.png"]


@pytest.mark.asyncio
async def test_inactive_members_only_in_manage_list(authed_client, client):
    await authed_client.post("/api/team", json={"name": "Activo", "position": "Abogado"})
    await authed_client.post("/api/team", json={"name": "Inactivo", "position": "Abogado", "active": False})

    public = await client.get("/api/team")
    manage = await authed_client.get("/api/team/manage")

    assert [m["name"] for m in public.json()] == ["Activo"]
    assert len(manage.json()) == 2


@pytest.mark.asyncio
async def test_upload_team_image_goes_to_team_folder(authed_client, db, fake_spaces):
    created = await authed_client.post("/api/team", json={"name": "Luis", "position": "Perito"})
    member_id = created.json()["id"]

    response = await authed_client.post(
        f"/api/team/{member_id}/images/upload",
        files={"file": ("retrato.jpg", b"jpg", "image/jpeg")},
    )

    assert response.status_code == 201
    assert "/team-images/" in response.json()["image_url"]
    assert len(fake_spaces.objects) == 1


@pytest.mark.asyncio
async def test_delete_member_removes_image_rows(authed_client, db):
    created = await authed_client.post("/api/team", json={"name": "Eva", "position": "Asistente"})
    member_id = created.json()["id"]
    await authed_client.post(f"/api/team/{member_id}/images", json={"image_url": "https://img/e.png"})

    response = await authed_client.delete(f"/api/team/{member_id}")

    assert response.status_code == 204
    assert db.query(TeamMember).count() == 0
    assert db.query(TeamMemberImage).count() == 0


@pytest.mark.asyncio
async def test_viewer_cannot_edit_team(client_for):
    async with client_for(Role.VIEWER) as c:
        response = await c.post("/api/team", json={"name": "X", "position": "Y"})
    assert response.status_code == 403
