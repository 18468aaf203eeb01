"""Public media storage on the DigitalOcean Space.

Blog images/media, gallery and service-card images and generated PIPC
PDFs are stored here as public-read objects with long cache lifetimes.
"""

from __future__ import annotations

import logging
import re
import time
from typing import BinaryIO

from botocore.exceptions import BotoCoreError, ClientError

from asme.core.config import settings
from asme.core.errors import ExternalServiceError
from asme.db.enums import UploadFolder
from asme.services import storage_url_service
from asme.services.storage_client import get_spaces_client

logger = logging.getLogger(__name__)

SERVICE_NAME = "spaces"

MAX_IMAGE_SIZE_BYTES = 50 * 1024 * 1024
CACHE_CONTROL = "max-age=31536000"
PUBLIC_ACL = "public-read"
PRESIGNED_UPLOAD_TTL_SECONDS = 15 * 60
MAX_NAME_LENGTH = 50

SERVICE_CARDS_FOLDER = "service-cards"
PIPC_PDFS_FOLDER = "pipc-pdfs"
TEAM_IMAGES_FOLDER = "team-images"

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


# =============================================================================
# Validation and keys
# =============================================================================


def validate_upload(folder: str, content_type: str | None, file_size: int | None = None) -> UploadFolder:
    """
    Check folder/content-type/size rules for blog uploads.

    Image folders accept image/* up to 50 MB; media folders accept
    video/* and audio/* with no size cap.

    Raises:
        ValueError: Invalid folder, type or size
    """
    if not folder or not UploadFolder.has_value(folder):
        allowed = ", ".join(f.value for f in UploadFolder)
        raise ValueError(f"Invalid folder. Allowed: {allowed}")

    upload_folder = UploadFolder(folder)
    content_type = content_type or ""

    if upload_folder.is_media:
        if not (content_type.startswith("video/") or content_type.startswith("audio/")):
            raise ValueError("File must be a video or audio file")
        return upload_folder

    if file_size is not None and file_size > MAX_IMAGE_SIZE_BYTES:
        max_mb = MAX_IMAGE_SIZE_BYTES // (1024 * 1024)
        raise ValueError(f"Image size must be less than {max_mb}MB")
    if not content_type.startswith("image/"):
        raise ValueError("File must be an image")
    return upload_folder


def split_file_name(file_name: str) -> tuple[str, str]:
    """Return (sanitized stem, lowercase extension) for object keys."""
    stem, dot, ext = file_name.rpartition(".")
    if not dot:
        stem, ext = file_name, ""
    ext = ext.lower() or "bin"
    sanitized = _UNSAFE_NAME_CHARS.sub("_", stem)[:MAX_NAME_LENGTH]
    return sanitized, ext


def build_object_key(folder: str, file_name: str, now_ms: int | None = None) -> str:
    """Key format: {folder}/{epoch_ms}-{sanitized_name}.{ext}"""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    stem, ext = split_file_name(file_name)
    return f"{folder}/{stamp}-{stem}.{ext}"


# =============================================================================
# Object operations
# =============================================================================


def upload_public_object(key: str, body: bytes | BinaryIO, content_type: str | None) -> str:
    """Store an object as public-read and return its public URL."""
    client = get_spaces_client()
    try:
        client.put_object(
            Bucket=settings.SPACES_BUCKET,
            Key=key,
            Body=body,
            ContentType=content_type or "application/octet-stream",
            ACL=PUBLIC_ACL,
            CacheControl=CACHE_CONTROL,
        )
    except (ClientError, BotoCoreError) as exc:
        logger.exception("Spaces upload failed for %s", key)
        raise ExternalServiceError(f"Upload failed: {exc}", service=SERVICE_NAME) from exc
    return storage_url_service.build_public_url(key)


def upload_file(folder: str, file_name: str, body: bytes | BinaryIO, content_type: str | None) -> dict:
    """Upload under a generated key; returns url and key."""
    key = build_object_key(folder, file_name)
    url = upload_public_object(key, body, content_type)
    return {"url": url, "key": key}


def create_presigned_upload(folder: str, file_name: str, content_type: str) -> dict:
    """
    Presigned PUT so the browser uploads large media directly to the Space.

    The client must send the same Content-Type and x-amz-acl headers.
    """
    validate_upload(folder, content_type)
    key = build_object_key(folder, file_name)
    client = get_spaces_client()
    try:
        presigned_url = client.generate_presigned_url(
            "put_object",
            Params={
                "Bucket": settings.SPACES_BUCKET,
                "Key": key,
                "ContentType": content_type,
                "ACL": PUBLIC_ACL,
            },
            ExpiresIn=PRESIGNED_UPLOAD_TTL_SECONDS,
        )
    except (ClientError, BotoCoreError) as exc:
        logger.exception("Could not presign upload for %s", key)
        raise ExternalServiceError("Could not create upload URL", service=SERVICE_NAME) from exc

    return {
        "presignedUrl": presigned_url,
        "publicUrl": storage_url_service.build_public_url(key),
        "key": key,
    }


def delete_object(key: str) -> None:
    client = get_spaces_client()
    try:
        client.delete_object(Bucket=settings.SPACES_BUCKET, Key=key)
    except (ClientError, BotoCoreError) as exc:
        logger.exception("Spaces delete failed for %s", key)
        raise ExternalServiceError(f"Delete failed: {exc}", service=SERVICE_NAME) from exc


def delete_by_url(url: str) -> dict:
    """
    Delete the object behind a public URL.

    URLs outside the Space are skipped, not errors; callers clean up
    whatever they reference without checking where it lives.

    Raises:
        ValueError: Spaces URL without a usable key
    """
    if not storage_url_service.is_spaces_url(url):
        return {"skipped": True, "key": None}
    key = storage_url_service.extract_storage_key(url)
    if not key:
        raise ValueError("Could not extract file key from URL")
    delete_object(key)
    return {"skipped": False, "key": key}


def delete_urls_quietly(urls: list[str | None]) -> None:
    """Best-effort cleanup of media after its owning row is gone."""
    for url in urls:
        if not url:
            continue
        try:
            delete_by_url(url)
        except (ExternalServiceError, ValueError):
            logger.warning("Could not delete media object %s", url)
