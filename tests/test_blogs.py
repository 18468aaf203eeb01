"""Tests for the ASME and legal blog collections."""

import pytest

from asme.db.models import BlogPost, LegalBlogPost
from asme.utils.normalization import slugify

SPACE_BASE = "https://asme-media.nyc3.digitaloceanspaces.com"


def test_slugify_strips_accents_and_appends_stamp():
    assert slugify("¿Qué es un Programa Interno?", now_ms=1700000000000) == (
        "que-es-un-programa-interno-1700000000000"
    )
    assert slugify("!!!", now_ms=5) == "post-5"


@pytest.mark.asyncio
async def test_create_post_sanitizes_and_slugs(authed_client, db):
    response = await authed_client.post(
        "/api/blogs",
        json={
            "title": "  Simulacro Nacional  ",
            "content": "<p>Hola</p><script>alert(1)</script>",
            "category": "Protección Civil",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    post = body["data"]
    assert post["title"] == "Simulacro Nacional"
    assert post["slug"].startswith("simulacro-nacional-")
    assert "<script>" not in post["content"]
    assert post["archived"] is False
    assert db.query(BlogPost).count() == 1
    assert db.query(LegalBlogPost).count() == 0


@pytest.mark.asyncio
async def test_create_post_requires_title(authed_client):
    response = await authed_client.post("/api/blogs", json={"content": "<p>Sin título</p>"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Title is required"


@pytest.mark.asyncio
async def test_update_post_rejects_blank_title(authed_client, db):
    created = await authed_client.post("/api/blogs", json={"title": "Original"})
    post = created.json()["data"]

    blank = await authed_client.patch(f"/api/blogs/{post['id']}", json={"title": "   "})
    null = await authed_client.patch(f"/api/blogs/{post['id']}", json={"title": None})

    assert blank.status_code == 400
    assert blank.json()["detail"] == "Title is required"
    assert null.status_code == 400
    db.expire_all()
    assert db.query(BlogPost).one().title == "Original"


@pytest.mark.asyncio
async def test_public_feed_hides_archived_posts(authed_client, client):
    created = await authed_client.post("/api/legal-blogs", json={"title": "Amparo indirecto"})
    post = created.json()["data"]
    await authed_client.post(f"/api/legal-blogs/{post['id']}/archive")

    public = await client.get("/api/legal-blogs")
    by_slug = await client.get(f"/api/legal-blogs/{post['slug']}")
    manage = await authed_client.get("/api/legal-blogs/manage")

    assert public.json() == []
    assert by_slug.status_code == 404
    assert [p["id"] for p in manage.json()] == [post["id"]]


@pytest.mark.asyncio
async def test_public_feed_filters_by_category(authed_client, client):
    await authed_client.post("/api/blogs", json={"title": "Uno", "category": "Capacitación"})
    await authed_client.post("/api/blogs", json={"title": "Dos", "category": "Eventos"})

    response = await client.get("/api/blogs", params={"category": "Eventos"})

    assert [p["title"] for p in response.json()] == ["Dos"]


@pytest.mark.asyncio
async def test_update_post_removes_replaced_media(authed_client, fake_spaces):
    created = await authed_client.post(
        "/api/blogs",
        json={"title": "Con imagen", "featured_image": f"{SPACE_BASE}/blog-images/old.png"},
    )
    post = created.json()["data"]

    response = await authed_client.patch(
        f"/api/blogs/{post['id']}",
        json={"featured_image": f"{SPACE_BASE}/blog-images/new.png"},
    )

    assert response.status_code == 200
    assert response.json()["featured_image"].endswith("new.png")
    assert fake_spaces.deleted == ["blog-images/old.png"]


@pytest.mark.asyncio
async def test_delete_post_removes_space_media_only(authed_client, db, fake_spaces):
    created = await authed_client.post(
        "/api/blogs",
        json={
            "title": "Podcast",
            "featured_image": "https://images.example.com/cover.png",
            "media_url": f"{SPACE_BASE}/blog-media/episodio.mp3",
        },
    )
    post = created.json()["data"]

    response = await authed_client.delete(f"/api/blogs/{post['id']}")

    assert response.status_code == 204
    assert db.query(BlogPost).count() == 0
    assert fake_spaces.deleted == ["blog-media/episodio.mp3"]


@pytest.mark.asyncio
async def test_blog_writes_require_authentication(client):
    response = await client.post(
        "/api/blogs", json={"title": "x"}, headers={"X-Requested-With": "XMLHttpRequest"}
    )
    assert response.status_code == 401
