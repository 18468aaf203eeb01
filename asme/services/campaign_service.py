"""Campaign service for bulk email to CRM client segments."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from asme.core.errors import ExternalServiceError
from asme.db.enums import (
    SEGMENT_LABELS,
    CampaignStatus,
    CampaignTargetStatus,
    ClientStatus,
    Segment,
)
from asme.db.models import Client, EmailCampaign, EmailCampaignTarget
from asme.schemas.campaign import CampaignCreate, CampaignUpdate, SegmentRead
from asme.services import client_history_service, email_service, email_templates
from asme.utils.sanitize import sanitize_html

logger = logging.getLogger(__name__)


# =============================================================================
# Campaign CRUD
# =============================================================================

def list_campaigns(db: Session) -> list[EmailCampaign]:
    return db.query(EmailCampaign).order_by(EmailCampaign.created_at.desc()).all()


def get_campaign(db: Session, campaign_id: UUID) -> EmailCampaign | None:
    return db.query(EmailCampaign).filter(EmailCampaign.id == campaign_id).first()


def create_campaign(db: Session, data: CampaignCreate) -> EmailCampaign:
    """Create a draft campaign with a sanitized body."""
    body = sanitize_html(data.body, rich=True)
    if not body.strip():
        raise ValueError("El contenido de la campaña no puede estar vacío.")
    campaign = EmailCampaign(
        name=data.name.strip(),
        subject=data.subject.strip(),
        body=body,
        segment=data.segment.value,
        status=CampaignStatus.DRAFT.value,
    )
    db.add(campaign)
    db.commit()
    db.refresh(campaign)
    return campaign


def update_campaign(db: Session, campaign: EmailCampaign, data: CampaignUpdate) -> EmailCampaign:
    """
    Edit a draft campaign.

    Raises:
        ValueError: Campaign already sent or body empty after sanitizing
    """
    if campaign.status == CampaignStatus.SENT.value:
        raise ValueError("La campaña ya fue enviada.")

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        if field == "body":
            value = sanitize_html(value, rich=True)
            if not value.strip():
                raise ValueError("El contenido de la campaña no puede estar vacío.")
        elif field == "segment":
            value = value.value
        else:
            value = value.strip()
        setattr(campaign, field, value)
    db.commit()
    db.refresh(campaign)
    return campaign


# =============================================================================
# Segments and targets
# =============================================================================

def _segment_query(db: Session, segment: Segment):
    query = db.query(Client).filter(Client.status != ClientStatus.ARCHIVADO.value)
    if segment == Segment.ACTIVE:
        query = query.filter(Client.status == ClientStatus.ACTIVO.value)
    elif segment == Segment.PROSPECTS:
        query = query.filter(Client.status == ClientStatus.PROSPECTO.value)
    return query


def get_segment_clients(db: Session, segment: Segment) -> list[Client]:
    """Clients in a segment. Archived clients are never included."""
    return _segment_query(db, segment).order_by(Client.company_name.asc()).all()


def list_segments(db: Session) -> list[SegmentRead]:
    return [
        SegmentRead(
            id=segment.value,
            label=label,
            description=description,
            count=_segment_query(db, segment).count(),
        )
        for segment, (label, description) in SEGMENT_LABELS.items()
    ]


def list_targets(db: Session, campaign_id: UUID) -> list[EmailCampaignTarget]:
    return (
        db.query(EmailCampaignTarget)
        .filter(EmailCampaignTarget.campaign_id == campaign_id)
        .order_by(EmailCampaignTarget.created_at.asc())
        .all()
    )


def add_targets(
    db: Session,
    campaign: EmailCampaign,
    client_ids: list[UUID],
    *,
    commit: bool = True,
) -> list[EmailCampaignTarget]:
    """
    Attach clients as recipients.

    Clients without a contact email and clients already targeted are
    skipped.
    """
    if not client_ids:
        return []
    if campaign.status == CampaignStatus.SENT.value:
        raise ValueError("La campaña ya fue enviada.")

    already_targeted = {
        row.client_id
        for row in db.query(EmailCampaignTarget.client_id).filter(
            EmailCampaignTarget.campaign_id == campaign.id
        )
    }
    clients = db.query(Client).filter(Client.id.in_(client_ids)).all()

    targets = []
    for client in clients:
        if not client.contact_email or client.id in already_targeted:
            continue
        target = EmailCampaignTarget(
            campaign_id=campaign.id,
            client_id=client.id,
            email=client.contact_email,
            status=CampaignTargetStatus.PENDING.value,
        )
        db.add(target)
        targets.append(target)

    if commit:
        db.commit()
        for target in targets:
            db.refresh(target)
    else:
        db.flush()
    return targets


# =============================================================================
# Sending
# =============================================================================

async def send_campaign(db: Session, campaign: EmailCampaign) -> dict:
    """
    Send the campaign to every pending target.

    Without explicit targets the campaign's segment is used. Each target
    is marked sent or failed, a campaign_sent event is logged for every
    client reached, and the campaign ends up as sent.

    Raises:
        ValueError: Already sent, or nobody to send to
    """
    if campaign.status == CampaignStatus.SENT.value:
        raise ValueError("La campaña ya fue enviada.")

    targets = list_targets(db, campaign.id)
    if not targets:
        segment_ids = [c.id for c in get_segment_clients(db, Segment(campaign.segment))]
        targets = add_targets(db, campaign, segment_ids, commit=False)
    if not targets:
        raise ValueError("La campaña no tiene destinatarios.")

    html = email_templates.render_campaign_email(subject=campaign.subject, body_html=campaign.body)
    sent = failed = 0
    for target in targets:
        if target.status == CampaignTargetStatus.SENT.value:
            continue
        try:
            await email_service.send_email(
                to=target.email,
                subject=campaign.subject,
                html=html,
                idempotency_key=f"campaign-{campaign.id}-{target.id}",
            )
        except ExternalServiceError as exc:
            target.status = CampaignTargetStatus.FAILED.value
            target.error = exc.message
            failed += 1
            logger.warning("Campaign %s target %s failed", campaign.id, target.id)
            continue

        target.status = CampaignTargetStatus.SENT.value
        target.error = None
        sent += 1
        if target.client_id:
            client_history_service.log_campaign_sent(
                db, target.client_id, campaign.name, campaign.id, commit=False
            )

    campaign.status = CampaignStatus.SENT.value
    db.commit()
    db.refresh(campaign)
    logger.info("Campaign %s sent: %s ok, %s failed", campaign.id, sent, failed)
    return {"campaign_id": campaign.id, "total": len(targets), "sent": sent, "failed": failed}
