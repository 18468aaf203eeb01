"""One-off move of blog media from the old storage host into the Space.

Rows in blogs and legal_blogs whose featured_image/media_url still point at
the old host are downloaded, re-uploaded as public-read objects and
rewritten. A failed file keeps its original URL.
"""

import logging
from dataclasses import dataclass
from typing import Callable

import httpx
from sqlalchemy.orm import Session

from asme.core.errors import ExternalServiceError
from asme.services import media_service
from asme.services.blog_service import BLOG_MODELS, MEDIA_FIELDS

logger = logging.getLogger(__name__)

OLD_STORAGE_MARKER = "supabase.co/storage"
DOWNLOAD_TIMEOUT_SECONDS = 60.0
BUCKET_FOLDERS = ("legal-blog-images", "legal-blog-media", "blog-images", "blog-media")
FALLBACK_FOLDER = "misc"


@dataclass
class MigrationStats:
    posts: int = 0
    migrated: int = 0
    skipped: int = 0
    failed: int = 0
    updated: int = 0


def is_old_storage_url(url: str | None) -> bool:
    return bool(url) and OLD_STORAGE_MARKER in url


def folder_for_url(url: str) -> str:
    """Space folder matching the bucket the file was stored in."""
    for folder in BUCKET_FOLDERS:
        if f"/{folder}/" in url:
            return folder
    return FALLBACK_FOLDER


def file_name_from_url(url: str) -> str:
    return url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]


def download(url: str) -> tuple[bytes, str]:
    """Fetch a file; returns (body, content_type)."""
    with httpx.Client(timeout=DOWNLOAD_TIMEOUT_SECONDS, follow_redirects=True) as client:
        response = client.get(url)
        response.raise_for_status()
    return response.content, response.headers.get("content-type", "application/octet-stream")


def migrate_url(
    url: str,
    stats: MigrationStats,
    *,
    dry_run: bool = False,
    fetch: Callable[[str], tuple[bytes, str]] = download,
) -> str:
    """Copy one file into the Space and return its new URL (or the old one on failure)."""
    key = f"{folder_for_url(url)}/{file_name_from_url(url)}"
    if dry_run:
        logger.info("Would migrate %s -> %s", url, key)
        stats.migrated += 1
        return url

    try:
        body, content_type = fetch(url)
    except httpx.HTTPError as exc:
        logger.error("Download failed for %s: %s", url, exc)
        stats.failed += 1
        return url

    try:
        new_url = media_service.upload_public_object(key, body, content_type)
    except ExternalServiceError as exc:
        logger.error("Upload failed for %s: %s", key, exc.message)
        stats.failed += 1
        return url

    stats.migrated += 1
    logger.info("Migrated %s -> %s", url, new_url)
    return new_url


def migrate_blog_media(
    db: Session,
    *,
    dry_run: bool = False,
    fetch: Callable[[str], tuple[bytes, str]] = download,
) -> MigrationStats:
    """Walk every ASME and legal post, moving old-storage media into the Space."""
    stats = MigrationStats()

    for kind, model in BLOG_MODELS.items():
        posts = db.query(model).all()
        stats.posts += len(posts)
        logger.info("Migrating %s posts (%s)", kind.value, len(posts))

        for post in posts:
            changed = False
            for field in MEDIA_FIELDS:
                current = getattr(post, field)
                if not current:
                    continue
                if not is_old_storage_url(current):
                    stats.skipped += 1
                    continue
                new_url = migrate_url(current, stats, dry_run=dry_run, fetch=fetch)
                if new_url != current:
                    setattr(post, field, new_url)
                    changed = True

            if changed:
                db.commit()
                stats.updated += 1

    return stats
