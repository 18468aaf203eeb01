"""
Tests for Spaces uploads, URL-based deletes and service card images.
"""

import pytest

from asme.db.enums import Role, ServiceCardContentType
from asme.db.models import ServiceCard
from asme.services import media_service, storage_url_service

SPACE_BASE = "https://asme-media.nyc3.digitaloceanspaces.com"


def _card(db, **overrides) -> ServiceCard:
    values = {
        "content_type": ServiceCardContentType.SERVICE.value,
        "service_slug": "proteccion-civil",
        "page_slug": "main",
        "section": "services",
        "order_index": 0,
        "is_active": True,
    }
    values.update(overrides)
    card = ServiceCard(**values)
    db.add(card)
    db.commit()
    db.refresh(card)
    return card


# =============================================================================
# Key and URL helpers
# =============================================================================

def test_object_key_sanitizes_and_truncates_name():
    key = media_service.build_object_key("blog-images", "Foto del Evento (1).JPG", now_ms=1700000000000)
    assert key == "blog-images/1700000000000-Foto_del_Evento__1_.jpg"

    long_key = media_service.build_object_key("blog-images", "a" * 80 + ".png", now_ms=1)
    stem = long_key.split("/", 1)[1].split("-", 1)[1].rsplit(".", 1)[0]
    assert len(stem) == media_service.MAX_NAME_LENGTH


def test_extract_storage_key_only_for_spaces_urls():
    assert storage_url_service.extract_storage_key(f"{SPACE_BASE}/blog-images/a%20b.png") == "blog-images/a b.png"
    assert storage_url_service.extract_storage_key("https://cdn.example.com/blog-images/a.png") is None
    assert storage_url_service.extract_storage_key(None) is None


def test_validate_upload_rules():
    with pytest.raises(ValueError, match="Invalid folder"):
        media_service.validate_upload("avatars", "image/png")
    with pytest.raises(ValueError, match="video or audio"):
        media_service.validate_upload("blog-media", "image/png")
    with pytest.raises(ValueError, match="less than 50MB"):
        media_service.validate_upload("blog-images", "image/png", 51 * 1024 * 1024)

    assert media_service.validate_upload("legal-blog-media", "audio/mpeg").value == "legal-blog-media"


# =============================================================================
# Upload endpoints
# =============================================================================

@pytest.mark.asyncio
async def test_upload_image_to_spaces(authed_client, fake_spaces):
    response = await authed_client.post(
        "/api/upload/spaces",
        data={"folder": "blog-images"},
        files={"file": ("portada.png", b"\x89PNG", "image/png")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["key"].startswith("blog-images/")
    assert body["url"] == f"{SPACE_BASE}/{body['key']}"
    assert fake_spaces.objects[body["key"]] == b"\x89PNG"


@pytest.mark.asyncio
async def test_upload_rejects_wrong_type_for_folder(authed_client, fake_spaces):
    response = await authed_client.post(
        "/api/upload/spaces",
        data={"folder": "blog-images"},
        files={"file": ("clip.mp4", b"0000", "video/mp4")},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "File must be an image"
    assert fake_spaces.objects == {}


@pytest.mark.asyncio
async def test_upload_without_file_returns_400(authed_client, fake_spaces):
    response = await authed_client.post("/api/upload/spaces", data={"folder": "blog-images"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_presign_returns_public_url(authed_client, fake_spaces):
    response = await authed_client.post(
        "/api/upload/spaces/presign",
        json={"fileName": "video.mp4", "contentType": "video/mp4", "folder": "blog-media"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["publicUrl"] == f"{SPACE_BASE}/{body['key']}"
    assert body["presignedUrl"].startswith("https://signed.test/blog-media/")


@pytest.mark.asyncio
async def test_delete_by_url_skips_foreign_hosts(authed_client, fake_spaces):
    foreign = await authed_client.post(
        "/api/upload/spaces/delete", json={"url": "https://example.com/blog-images/a.png"}
    )
    owned = await authed_client.post(
        "/api/upload/spaces/delete", json={"url": f"{SPACE_BASE}/blog-images/a.png"}
    )
    missing = await authed_client.post("/api/upload/spaces/delete", json={})

    assert foreign.status_code == 200
    assert foreign.json()["skipped"] is True
    assert owned.json() == {"success": True, "skipped": False, "key": "blog-images/a.png"}
    assert fake_spaces.deleted == ["blog-images/a.png"]
    assert missing.status_code == 400


@pytest.mark.asyncio
async def test_uploads_require_content_role(client_for, fake_spaces):
    async with client_for(Role.VIEWER) as c:
        response = await c.post(
            "/api/upload/spaces",
            data={"folder": "blog-images"},
            files={"file": ("a.png", b"x", "image/png")},
        )
    assert response.status_code == 403


# =============================================================================
# Service card images
# =============================================================================

@pytest.mark.asyncio
async def test_service_card_image_replaces_previous_space_object(authed_client, db, fake_spaces):
    card = _card(db, image_url=f"{SPACE_BASE}/service-cards/old.png")

    response = await authed_client.post(
        "/api/service-cards/upload-image",
        data={"cardId": str(card.id)},
        files={"file": ("nueva.webp", b"webp", "image/webp")},
    )

    assert response.status_code == 200
    url = response.json()["imageUrl"]
    assert url.startswith(f"{SPACE_BASE}/service-cards/{card.id}-")
    assert url.endswith(".webp")
    assert fake_spaces.deleted == ["service-cards/old.png"]
    db.refresh(card)
    assert card.image_url == url


@pytest.mark.asyncio
async def test_service_card_image_keeps_foreign_previous_url(authed_client, db, fake_spaces):
    card = _card(db, image_url="https://images.example.com/old.png")

    response = await authed_client.post(
        "/api/service-cards/upload-image",
        data={"cardId": str(card.id)},
        files={"file": ("nueva.png", b"png", "image/png")},
    )

    assert response.status_code == 200
    assert fake_spaces.deleted == []


@pytest.mark.asyncio
async def test_service_card_image_errors(authed_client, db, fake_spaces):
    card = _card(db)

    missing = await authed_client.post("/api/service-cards/upload-image", data={"cardId": str(card.id)})
    unknown = await authed_client.post(
        "/api/service-cards/upload-image",
        data={"cardId": "00000000-0000-0000-0000-000000000000"},
        files={"file": ("a.png", b"png", "image/png")},
    )
    not_image = await authed_client.post(
        "/api/service-cards/upload-image",
        data={"cardId": str(card.id)},
        files={"file": ("a.pdf", b"pdf", "application/pdf")},
    )

    assert missing.status_code == 400
    assert missing.json()["detail"] == "Missing file or cardId"
    assert unknown.status_code == 404
    assert not_image.status_code == 400
