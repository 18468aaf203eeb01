"""Contact router - public contact and booking notification emails."""

import logging

from fastapi import APIRouter, HTTPException, Request

from asme.core.errors import ExternalServiceError
from asme.core.rate_limit import PUBLIC_FORM_LIMIT, limiter
from asme.schemas.contact import ContactRequest, ContactResponse
from asme.services import email_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ContactResponse)
@limiter.limit(PUBLIC_FORM_LIMIT)
async def send_contact(request: Request, data: ContactRequest):
    """
    Email the contact/booking form to staff.

    Nothing is persisted; if the provider fails the user resubmits.
    """
    try:
        message_id = await email_service.send_contact_notification(data)
    except ExternalServiceError as e:
        logger.warning("Contact notification failed: %s", e.message)
        raise HTTPException(status_code=502, detail="No se pudo enviar el mensaje. Intenta de nuevo.")
    return ContactResponse(id=message_id)
