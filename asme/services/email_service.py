"""Transactional email through the Resend API."""

from __future__ import annotations

import html as html_module
import logging
import re

import httpx

from asme.core.config import settings
from asme.core.errors import ExternalServiceError
from asme.schemas.contact import ContactRequest
from asme.services import email_templates
from asme.services.http_service import DEFAULT_RETRY_STATUSES, request_with_retries

logger = logging.getLogger(__name__)

SERVICE_NAME = "resend"
RESEND_SEND_URL = "https://api.resend.com/emails"
RESEND_MAX_ATTEMPTS = 3
RESEND_RETRY_BASE_DELAY = 0.5
RESEND_RETRY_MAX_DELAY = 4.0
RESEND_TIMEOUT_SECONDS = 20.0


def html_to_text(content: str) -> str:
    """Plain-text alternative for inbox previews; not a faithful rendering."""
    text = re.sub(r"<(script|style|title)[^>]*>.*?</\1>", "", content, flags=re.DOTALL | re.I)
    text = re.sub(r"<[^>]+>", " ", text)
    text = re.sub(r"\s+", " ", text).strip()
    return html_module.unescape(text)


async def send_email(
    *,
    to: str | list[str],
    subject: str,
    html: str,
    reply_to: str | None = None,
    idempotency_key: str | None = None,
) -> str | None:
    """
    Send one email. Returns the Resend message id.

    Raises:
        ExternalServiceError: Not configured, unreachable or rejected
    """
    if not settings.RESEND_API_KEY:
        raise ExternalServiceError("Email provider not configured", service=SERVICE_NAME)

    payload: dict[str, object] = {
        "from": settings.EMAIL_FROM,
        "to": [to] if isinstance(to, str) else to,
        "subject": subject,
        "html": html,
    }
    text = html_to_text(html)
    if text:
        payload["text"] = text
    if reply_to:
        payload["reply_to"] = reply_to

    headers = {
        "Authorization": f"Bearer {settings.RESEND_API_KEY}",
        "Content-Type": "application/json",
    }
    if idempotency_key:
        headers["Idempotency-Key"] = idempotency_key

    try:
        async with httpx.AsyncClient(timeout=RESEND_TIMEOUT_SECONDS) as client:

            async def request_fn() -> httpx.Response:
                return await client.post(RESEND_SEND_URL, headers=headers, json=payload)

            response = await request_with_retries(
                request_fn,
                max_attempts=RESEND_MAX_ATTEMPTS,
                base_delay=RESEND_RETRY_BASE_DELAY,
                max_delay=RESEND_RETRY_MAX_DELAY,
                retry_statuses=DEFAULT_RETRY_STATUSES,
            )
    except httpx.TimeoutException as exc:
        logger.warning("Resend timeout")
        raise ExternalServiceError("Connection timeout", service=SERVICE_NAME) from exc
    except httpx.RequestError as exc:
        logger.exception("Resend connection error")
        raise ExternalServiceError(
            f"Connection error: {exc.__class__.__name__}", service=SERVICE_NAME
        ) from exc

    if response.status_code >= 400:
        try:
            detail = response.json().get("message") or response.text
        except ValueError:
            detail = response.text
        logger.error("Resend rejected email with status %s", response.status_code)
        raise ExternalServiceError(
            f"Email send failed ({response.status_code}): {detail}", service=SERVICE_NAME
        )

    try:
        return response.json().get("id")
    except ValueError:
        return None


def build_contact_email(data: ContactRequest) -> tuple[str, str, str]:
    """Pick recipient, subject and rendered HTML for a contact/booking notification."""
    service = data.service or "Sin especificar"
    if data.source == "asme_abogados":
        return (
            settings.legal_notify_email,
            f"Nueva solicitud de cita legal: {service}",
            email_templates.render_legal_appointment_email(
                name=data.name, email=data.email, phone=data.phone, service=service
            ),
        )
    if data.source == "asme":
        return (
            settings.CONTACT_NOTIFY_EMAIL,
            f"Nueva solicitud de servicio ASME: {service}",
            email_templates.render_asme_appointment_email(
                name=data.name,
                email=data.email,
                phone=data.phone,
                service=service,
                participants=data.participants,
            ),
        )
    return (
        settings.CONTACT_NOTIFY_EMAIL,
        f"Nuevo mensaje de contacto de {data.name}",
        email_templates.render_contact_email(
            name=data.name, email=data.email, phone=data.phone, message=data.message or ""
        ),
    )


async def send_contact_notification(data: ContactRequest) -> str | None:
    """Notify staff of a form submission; replies go to the customer."""
    to, subject, html = build_contact_email(data)
    message_id = await send_email(to=to, subject=subject, html=html, reply_to=data.email)
    logger.info("Contact notification sent (source=%s)", data.source)
    return message_id
