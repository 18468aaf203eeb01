"""HTML notification templates for the contact and booking forms.

Every interpolated value is HTML-escaped; callers pass raw user input.
"""

import html
from datetime import datetime

ASME_RED = "#dc2626"
ASME_RED_DARK = "#991b1b"
LEGAL_DARK = "#1f2937"
LEGAL_DARKER = "#111827"


def escape_text(text: str | int | None) -> str:
    """HTML-escape text to prevent injection."""
    if text is None:
        return ""
    return html.escape(str(text), quote=True)


def _info_row(label: str, value_html: str) -> str:
    return f'''
                      <tr>
                        <td style="padding: 8px 0;">
                          <strong style="color: #374151;">{label}:</strong>
                          {value_html}
                        </td>
                      </tr>'''


def _client_rows(name: str, email: str, phone: str | None) -> str:
    rows = _info_row("Nombre", f'<span style="color: #6b7280; margin-left: 8px;">{escape_text(name)}</span>')
    rows += _info_row(
        "Email",
        f'<a href="mailto:{escape_text(email)}" style="color: {ASME_RED}; text-decoration: none; margin-left: 8px;">{escape_text(email)}</a>',
    )
    if phone:
        rows += _info_row(
            "Teléfono",
            f'<a href="tel:{escape_text(phone)}" style="color: {ASME_RED}; text-decoration: none; margin-left: 8px;">{escape_text(phone)}</a>',
        )
    return rows


def _boxed(title: str, inner: str, border_color: str) -> str:
    return f'''
              <table width="100%" cellpadding="0" cellspacing="0" style="background-color: #f9fafb; border-left: 4px solid {border_color}; margin: 30px 0;">
                <tr>
                  <td style="padding: 20px;">
                    <p style="margin: 0 0 12px; color: #6b7280; font-size: 14px; font-weight: 600; text-transform: uppercase; letter-spacing: 0.5px;">
                      {title}
                    </p>
                    <table width="100%" cellpadding="0" cellspacing="0">{inner}
                    </table>
                  </td>
                </tr>
              </table>'''


def _service_badge(service: str) -> str:
    return f'''
              <table width="100%" cellpadding="0" cellspacing="0">
                <tr>
                  <td align="center" style="padding: 20px 0;">
                    <span style="display: inline-block; background: linear-gradient(135deg, {ASME_RED} 0%, {ASME_RED_DARK} 100%); color: #ffffff; padding: 12px 30px; border-radius: 25px; font-weight: bold; font-size: 16px;">
                      {escape_text(service)}
                    </span>
                  </td>
                </tr>
              </table>'''


def _callout(text_html: str, background: str, border: str, color: str) -> str:
    return f'''
              <table width="100%" cellpadding="0" cellspacing="0" style="background-color: {background}; border-left: 4px solid {border}; margin: 20px 0;">
                <tr>
                  <td style="padding: 20px;">
                    <p style="margin: 0; color: {color}; font-size: 14px; line-height: 1.6;">{text_html}</p>
                  </td>
                </tr>
              </table>'''


def _layout(
    *,
    title: str,
    heading: str,
    header_from: str,
    header_to: str,
    content: str,
    company: str,
    footer_note: str,
) -> str:
    year = datetime.now().year
    return f'''<!DOCTYPE html>
<html lang="es">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
</head>
<body style="margin: 0; padding: 0; font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; background-color: #f4f4f4;">
  <table width="100%" cellpadding="0" cellspacing="0" style="background-color: #f4f4f4; padding: 40px 20px;">
    <tr>
      <td align="center">
        <table width="600" cellpadding="0" cellspacing="0" style="background-color: #ffffff; border-radius: 8px; overflow: hidden;">
          <tr>
            <td style="background: linear-gradient(135deg, {header_from} 0%, {header_to} 100%); padding: 40px 30px; text-align: center;">
              <h1 style="margin: 0; color: #ffffff; font-size: 28px; font-weight: bold;">{heading}</h1>
            </td>
          </tr>
          <tr>
            <td style="padding: 40px 30px;">{content}
            </td>
          </tr>
          <tr>
            <td style="background-color: #f9fafb; padding: 30px; text-align: center; border-top: 1px solid #e5e7eb;">
              <p style="margin: 0; color: #6b7280; font-size: 14px;">&copy; {year} {company}. Todos los derechos reservados.</p>
              <p style="margin: 10px 0 0; color: #9ca3af; font-size: 12px;">{footer_note}</p>
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>'''


def render_contact_email(*, name: str, email: str, message: str, phone: str | None = None) -> str:
    """General contact form notification."""
    content = f'''
              <p style="margin: 0 0 20px; color: #374151; font-size: 16px; line-height: 1.6;">
                Has recibido un nuevo mensaje desde el formulario de contacto de ASME:
              </p>'''
    content += _boxed("Información del Cliente", _client_rows(name, email, phone), ASME_RED)
    content += f'''
              <table width="100%" cellpadding="0" cellspacing="0" style="background-color: #f9fafb; border-radius: 6px; margin: 20px 0;">
                <tr>
                  <td style="padding: 20px;">
                    <p style="margin: 0 0 12px; color: #6b7280; font-size: 14px; font-weight: 600; text-transform: uppercase;">Mensaje</p>
                    <p style="margin: 0; color: #374151; font-size: 15px; line-height: 1.6; white-space: pre-wrap;">{escape_text(message)}</p>
                  </td>
                </tr>
              </table>
              <p style="margin: 30px 0 0; color: #6b7280; font-size: 14px; line-height: 1.6;">
                Por favor, responde a este cliente lo antes posible.
              </p>'''
    return _layout(
        title="Nuevo Mensaje de Contacto",
        heading="Nuevo Mensaje de Contacto",
        header_from=ASME_RED,
        header_to=ASME_RED_DARK,
        content=content,
        company="ASME Consultoría",
        footer_note="Este es un mensaje automático del sistema de contacto.",
    )


def render_legal_appointment_email(*, name: str, email: str, service: str, phone: str | None = None) -> str:
    """ASME Abogados booking notification."""
    content = f'''
              <p style="margin: 0 0 20px; color: #374151; font-size: 16px; line-height: 1.6;">
                Se ha recibido una nueva solicitud de cita para el servicio de <strong>{escape_text(service)}</strong>:
              </p>'''
    content += _service_badge(service)
    content += _boxed("Datos del Cliente", _client_rows(name, email, phone), LEGAL_DARK)
    content += _callout(
        "<strong>Acción Requerida:</strong> Contacta al cliente en menos de 24 horas para programar su consulta.",
        "#fef3c7",
        "#f59e0b",
        "#92400e",
    )
    content += '''
              <p style="margin: 30px 0 0; color: #6b7280; font-size: 14px; line-height: 1.6;">
                Recuerda mantener la confidencialidad de toda la información del cliente bajo el secreto profesional.
              </p>'''
    return _layout(
        title="Nueva Cita Legal",
        heading="Nueva Solicitud de Cita Legal",
        header_from=LEGAL_DARK,
        header_to=LEGAL_DARKER,
        content=content,
        company="ASME Abogados",
        footer_note="Este es un mensaje automático del sistema de citas.",
    )


def render_asme_appointment_email(
    *,
    name: str,
    email: str,
    service: str,
    phone: str | None = None,
    participants: str | int | None = None,
) -> str:
    """ASME consulting service request notification."""
    rows = _client_rows(name, email, phone)
    if participants:
        rows += _info_row(
            "Participantes",
            f'<span style="color: #6b7280; margin-left: 8px;">{escape_text(participants)} personas</span>',
        )
    next_steps = "Contacta al cliente para coordinar la fecha y hora del servicio"
    if participants:
        next_steps += " y confirmar el número de participantes"

    content = f'''
              <p style="margin: 0 0 20px; color: #374151; font-size: 16px; line-height: 1.6;">
                Se ha recibido una nueva solicitud para el servicio de <strong>{escape_text(service)}</strong>:
              </p>'''
    content += _service_badge(service)
    content += _boxed("Información del Cliente", rows, ASME_RED)
    content += _callout(
        f"<strong>Próximos Pasos:</strong> {next_steps}.",
        "#dbeafe",
        "#3b82f6",
        "#1e40af",
    )
    return _layout(
        title="Nueva Cita ASME",
        heading="Nueva Solicitud de Servicio ASME",
        header_from=ASME_RED,
        header_to=ASME_RED_DARK,
        content=content,
        company="ASME Consultoría",
        footer_note="Este es un mensaje automático del sistema de citas.",
    )


def render_campaign_email(*, subject: str, body_html: str) -> str:
    """Marketing campaign wrapper. body_html must already be sanitized."""
    return _layout(
        title=escape_text(subject),
        heading=escape_text(subject),
        header_from="#1e3a8a",
        header_to="#2563eb",
        content=f'''
              <div style="color: #374151; font-size: 16px; line-height: 1.6;">{body_html}</div>''',
        company="ASME",
        footer_note="Recibes este correo porque eres cliente de ASME.",
    )
