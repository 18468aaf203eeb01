"""Text normalization helpers for slugs, e-mails and free-text fields."""

import re
import time
import unicodedata
from typing import Optional

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def normalize_email(email: Optional[str]) -> Optional[str]:
    """
    Normalize email to lowercase.

    Args:
        email: Raw email input

    Returns:
        Lowercased email or None if empty
    """
    if not email:
        return None
    return email.strip().lower() or None


def normalize_text(value: Optional[str]) -> Optional[str]:
    """Strip whitespace; empty strings become None."""
    if value is None:
        return None
    return value.strip() or None


def _strip_accents(value: str) -> str:
    """Remove diacritics for accent-insensitive matching."""
    return "".join(
        ch for ch in unicodedata.normalize("NFKD", value) if not unicodedata.combining(ch)
    )


def slugify(title: str, now_ms: Optional[int] = None) -> str:
    """
    Build a unique blog slug from a title.

    Accents are dropped, runs of other characters become a single dash,
    and the epoch-milliseconds stamp is appended so two posts with the
    same title never collide. An empty result falls back to post-{stamp}.
    """
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    cleaned = _NON_SLUG_CHARS.sub("-", _strip_accents(title or "").lower()).strip("-")
    if not cleaned:
        return f"post-{stamp}"
    return f"{cleaned}-{stamp}"
