"""Campaigns router - email campaigns to client segments."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from asme.core.deps import get_db, require_csrf_header, require_roles
from asme.db.enums import ROLES_CAN_MANAGE_CONTENT, ROLES_CAN_VIEW_DASHBOARD
from asme.schemas.campaign import (
    CampaignCreate,
    CampaignRead,
    CampaignSendResult,
    CampaignTargetRead,
    CampaignTargetsRequest,
    CampaignUpdate,
    SegmentRead,
)
from asme.services import campaign_service

router = APIRouter()

can_view = [Depends(require_roles(ROLES_CAN_VIEW_DASHBOARD))]
staff_write = [Depends(require_csrf_header), Depends(require_roles(ROLES_CAN_MANAGE_CONTENT))]


def _get_campaign_or_404(db: Session, campaign_id: UUID):
    campaign = campaign_service.get_campaign(db, campaign_id)
    if not campaign:
        raise HTTPException(status_code=404, detail="Campaña no encontrada")
    return campaign


@router.get("", response_model=list[CampaignRead], dependencies=can_view)
def list_campaigns(db: Session = Depends(get_db)):
    return campaign_service.list_campaigns(db)


@router.get("/segments", response_model=list[SegmentRead], dependencies=can_view)
def list_segments(db: Session = Depends(get_db)):
    """Available segments with their current recipient counts."""
    return campaign_service.list_segments(db)


@router.get("/{campaign_id}", response_model=CampaignRead, dependencies=can_view)
def get_campaign(campaign_id: UUID, db: Session = Depends(get_db)):
    return _get_campaign_or_404(db, campaign_id)


@router.post("", response_model=CampaignRead, status_code=201, dependencies=staff_write)
def create_campaign(data: CampaignCreate, db: Session = Depends(get_db)):
    try:
        return campaign_service.create_campaign(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{campaign_id}", response_model=CampaignRead, dependencies=staff_write)
def update_campaign(campaign_id: UUID, data: CampaignUpdate, db: Session = Depends(get_db)):
    campaign = _get_campaign_or_404(db, campaign_id)
    try:
        return campaign_service.update_campaign(db, campaign, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get(
    "/{campaign_id}/targets",
    response_model=list[CampaignTargetRead],
    dependencies=can_view,
)
def list_targets(campaign_id: UUID, db: Session = Depends(get_db)):
    _get_campaign_or_404(db, campaign_id)
    return campaign_service.list_targets(db, campaign_id)


@router.post(
    "/{campaign_id}/targets",
    response_model=list[CampaignTargetRead],
    dependencies=staff_write,
)
def add_targets(
    campaign_id: UUID,
    data: CampaignTargetsRequest,
    db: Session = Depends(get_db),
):
    """Attach clients by id; clients without email are skipped."""
    campaign = _get_campaign_or_404(db, campaign_id)
    try:
        return campaign_service.add_targets(db, campaign, data.client_ids)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/{campaign_id}/send",
    response_model=CampaignSendResult,
    dependencies=staff_write,
)
async def send_campaign(campaign_id: UUID, db: Session = Depends(get_db)):
    campaign = _get_campaign_or_404(db, campaign_id)
    try:
        return await campaign_service.send_campaign(db, campaign)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
