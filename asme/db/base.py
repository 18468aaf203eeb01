from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    Models map tables that already exist in the hosted database; they are
    never used to create or migrate the production schema.
    """
    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }


def utcnow() -> datetime:
    """Timezone-aware now() used for client-side column defaults."""
    return datetime.now(timezone.utc)
