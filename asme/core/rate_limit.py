"""Rate limiting configuration for the ASME API."""

import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from asme.core.config import settings

IS_TESTING = os.getenv("TESTING", "").lower() in ("1", "true", "yes")
DEFAULT_LIMITS = (
    []
    if IS_TESTING or settings.RATE_LIMIT_API <= 0
    else [f"{settings.RATE_LIMIT_API}/minute"]
)

# Shared storage (e.g. Redis) only when configured; single-process deployments use memory
STORAGE_URI = settings.RATE_LIMIT_STORAGE_URI or "memory://"

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://" if IS_TESTING else STORAGE_URI,
    default_limits=DEFAULT_LIMITS,
    enabled=not IS_TESTING,
)

PUBLIC_FORM_LIMIT = f"{settings.RATE_LIMIT_PUBLIC}/minute"
AUTH_LIMIT = f"{settings.RATE_LIMIT_AUTH}/minute"
