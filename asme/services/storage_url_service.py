"""Helpers for Spaces URL handling (public URLs + key extraction)."""

from __future__ import annotations

from urllib.parse import unquote, urlparse

from asme.core.config import settings

SPACES_HOST_SUFFIX = "digitaloceanspaces.com"


def build_public_url(key: str) -> str:
    """Public URL of an object in the media Space."""
    return f"{settings.spaces_public_base_url}/{key.lstrip('/')}"


def is_spaces_url(url: str | None) -> bool:
    """True for any DigitalOcean Spaces URL (including CDN hosts)."""
    if not url:
        return False
    host = (urlparse(url).hostname or "").lower()
    return host == SPACES_HOST_SUFFIX or host.endswith(f".{SPACES_HOST_SUFFIX}")


def extract_storage_key(url: str | None) -> str | None:
    """
    Extract the object key from a Spaces URL.

    Returns None for URLs outside Spaces or without a path.
    """
    if not is_spaces_url(url):
        return None
    key = unquote(urlparse(url).path.lstrip("/"))
    return key or None
