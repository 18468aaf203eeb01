"""Case timeline - append-only activity log shown on the case page."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from asme.db.enums import TimelineAction
from asme.db.models import CasoTimeline

logger = logging.getLogger(__name__)


def log_timeline(
    db: Session,
    caso_id: UUID,
    action_type: TimelineAction | str,
    message: str,
    user_id: UUID | None = None,
    *,
    commit: bool = True,
) -> CasoTimeline:
    """Append a timeline entry. With commit=False the caller owns the transaction."""
    action = action_type.value if isinstance(action_type, TimelineAction) else action_type
    entry = CasoTimeline(
        caso_id=caso_id,
        action_type=action,
        message=message,
        user_id=user_id,
    )
    db.add(entry)
    if commit:
        db.commit()
        db.refresh(entry)
    else:
        db.flush()
    return entry


def list_timeline(db: Session, caso_id: UUID) -> list[CasoTimeline]:
    """Entries newest first."""
    return (
        db.query(CasoTimeline)
        .filter(CasoTimeline.caso_id == caso_id)
        .order_by(CasoTimeline.created_at.desc())
        .all()
    )
