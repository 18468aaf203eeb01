"""Tests for contact notifications and the outbound email helpers."""

import httpx
import pytest

from asme.core.config import settings
from asme.core.errors import ExternalServiceError
from asme.schemas.contact import ContactRequest
from asme.services import email_service
from asme.services.http_service import request_with_retries


@pytest.mark.asyncio
async def test_contact_form_notifies_staff(client, sent_emails):
    response = await client.post(
        "/api/contact",
        json={"name": "Marta <b>", "email": "marta@example.com", "message": "Necesito un PIPC"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "id": "msg-1"}
    (email,) = sent_emails
    assert email["to"] == settings.CONTACT_NOTIFY_EMAIL
    assert email["reply_to"] == "marta@example.com"
    assert "Marta &lt;b&gt;" in email["html"]


@pytest.mark.asyncio
async def test_legal_booking_goes_to_legal_inbox(client, sent_emails, monkeypatch):
    monkeypatch.setattr(settings, "LEGAL_NOTIFY_EMAIL", "abogados@asme.mx")

    await client.post(
        "/api/contact",
        json={
            "name": "Pedro",
            "email": "pedro@example.com",
            "service": "Derecho Familiar",
            "source": "asme_abogados",
        },
    )

    assert sent_emails[0]["to"] == "abogados@asme.mx"
    assert sent_emails[0]["subject"] == "Nueva solicitud de cita legal: Derecho Familiar"


@pytest.mark.asyncio
async def test_contact_provider_failure_returns_502(client, monkeypatch):
    monkeypatch.setattr(settings, "RESEND_API_KEY", "")

    response = await client.post(
        "/api/contact", json={"name": "Ana", "email": "ana@example.com", "message": "Hola"}
    )

    assert response.status_code == 502
    assert response.json()["detail"] == "No se pudo enviar el mensaje. Intenta de nuevo."


@pytest.mark.asyncio
async def test_contact_invalid_email_returns_400(client, sent_emails):
    response = await client.post("/api/contact", json={"name": "Ana", "email": "no-es-correo"})

    assert response.status_code == 400
    assert sent_emails == []


def test_build_contact_email_for_asme_service():
    to, subject, html = email_service.build_contact_email(
        ContactRequest(
            name="Luis",
            email="luis@example.com",
            service="Capacitación",
            participants=12,
            source="asme",
        )
    )

    assert to == settings.CONTACT_NOTIFY_EMAIL
    assert subject == "Nueva solicitud de servicio ASME: Capacitación"
    assert "12" in html


def test_html_to_text_strips_markup():
    html = "<style>p{}</style><p>Hola</p><p>mundo &amp; más</p>"
    assert email_service.html_to_text(html) == "Hola mundo & más"


@pytest.mark.asyncio
async def test_send_email_requires_api_key(monkeypatch):
    monkeypatch.setattr(settings, "RESEND_API_KEY", "")

    with pytest.raises(ExternalServiceError, match="not configured"):
        await email_service.send_email(to="a@example.com", subject="x", html="<p>x</p>")


@pytest.mark.asyncio
async def test_request_with_retries_retries_transient_status():
    statuses = iter([503, 200])
    calls = []

    async def request_fn():
        calls.append(1)
        return httpx.Response(next(statuses))

    response = await request_with_retries(request_fn, base_delay=0, max_delay=0)

    assert response.status_code == 200
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_request_with_retries_returns_last_response():
    async def request_fn():
        return httpx.Response(500)

    response = await request_with_retries(request_fn, max_attempts=2, base_delay=0, max_delay=0)

    assert response.status_code == 500
