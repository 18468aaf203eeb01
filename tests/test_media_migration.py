"""Tests for moving blog media off the old storage host."""

import httpx
import pytest

from asme.db.models import BlogPost, LegalBlogPost
from asme.services import media_migration_service
from asme.services.media_migration_service import MigrationStats

OLD = "https://abc.supabase.co/storage/v1/object/public"
SPACE_BASE = "https://asme-media.nyc3.digitaloceanspaces.com"


def _post(db, model, slug: str, **fields):
    post = model(title=slug, slug=slug, **fields)
    db.add(post)
    db.commit()
    return post


def fake_fetch(url: str) -> tuple[bytes, str]:
    if "missing" in url:
        raise httpx.HTTPStatusError(
            "404", request=httpx.Request("GET", url), response=httpx.Response(404)
        )
    return f"data:{url}".encode(), "image/png"


def test_url_helpers():
    url = f"{OLD}/legal-blog-images/foto.png?token=1"

    assert media_migration_service.is_old_storage_url(url)
    assert not media_migration_service.is_old_storage_url(f"{SPACE_BASE}/blog-images/a.png")
    assert not media_migration_service.is_old_storage_url(None)
    assert media_migration_service.folder_for_url(url) == "legal-blog-images"
    assert media_migration_service.folder_for_url(f"{OLD}/otros/a.png") == "misc"
    assert media_migration_service.file_name_from_url(url) == "foto.png"


def test_migrate_rewrites_old_urls(db, fake_spaces):
    post = _post(
        db,
        BlogPost,
        "uno",
        featured_image=f"{OLD}/blog-images/portada.png",
        media_url=f"{SPACE_BASE}/blog-media/ya-migrado.mp3",
    )
    legal = _post(db, LegalBlogPost, "dos", media_url=f"{OLD}/legal-blog-media/audio.mp3")

    stats = media_migration_service.migrate_blog_media(db, fetch=fake_fetch)

    assert stats == MigrationStats(posts=2, migrated=2, skipped=1, failed=0, updated=2)
    db.refresh(post)
    db.refresh(legal)
    assert post.featured_image == f"{SPACE_BASE}/blog-images/portada.png"
    assert legal.media_url == f"{SPACE_BASE}/legal-blog-media/audio.mp3"
    assert sorted(fake_spaces.objects) == ["blog-images/portada.png", "legal-blog-media/audio.mp3"]


def test_failed_download_keeps_original_url(db, fake_spaces):
    original = f"{OLD}/blog-images/missing.png"
    post = _post(db, BlogPost, "tres", featured_image=original)

    stats = media_migration_service.migrate_blog_media(db, fetch=fake_fetch)

    assert stats.failed == 1
    assert stats.updated == 0
    db.refresh(post)
    assert post.featured_image == original
    assert fake_spaces.objects == {}


def test_dry_run_changes_nothing(db, fake_spaces):
    original = f"{OLD}/blog-images/portada.png"
    post = _post(db, BlogPost, "cuatro", featured_image=original)

    def fetch_must_not_run(url):
        pytest.fail("dry run must not download")

    stats = media_migration_service.migrate_blog_media(db, dry_run=True, fetch=fetch_must_not_run)

    assert stats.migrated == 1
    assert stats.updated == 0
    db.refresh(post)
    assert post.featured_image == original
    assert fake_spaces.objects == {}
