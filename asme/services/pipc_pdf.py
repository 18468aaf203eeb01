"""
PIPC PDF Generation.

Renders a Programa Interno de Protección Civil document with reportlab
from a fully loaded project.
"""

import io
from collections import Counter
from datetime import date, datetime
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.graphics.charts.piecharts import Pie
from reportlab.graphics.shapes import Drawing, String
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from asme.schemas.pipc import PIPCProjectFull

EMPTY_VALUE = "—"

DEFAULT_LEGAL_FRAMEWORK = (
    "El presente Programa Interno de Protección Civil se elabora con fundamento en "
    "la Ley General de Protección Civil, la Ley de Protección Civil y Gestión Integral "
    "de Riesgos del Estado de Baja California, su reglamento, así como en las Normas "
    "Oficiales Mexicanas aplicables y demás disposiciones legales vigentes en materia "
    "de protección civil."
)

PROGRAM_DEFINITION = (
    "El Programa Interno de Protección Civil es el instrumento de planeación y operación "
    "que se aplica de manera permanente en los inmuebles, con el objetivo de prevenir, "
    "mitigar y responder ante riesgos y emergencias, salvaguardando la integridad física "
    "de las personas, los bienes y el entorno."
)

GENERAL_OBJECTIVE = (
    "Establecer las acciones preventivas, de auxilio y recuperación necesarias para "
    "proteger a las personas, bienes e instalaciones ante la ocurrencia de una emergencia "
    "o desastre."
)

SPECIFIC_OBJECTIVES = (
    "Identificar riesgos, capacitar al personal, organizar la Unidad Interna de Protección "
    "Civil y establecer procedimientos de actuación ante situaciones de emergencia."
)

HEADER_GREY = colors.HexColor("#d9d9d9")
GRID_COLOR = colors.HexColor("#333333")
CATEGORY_COLORS = {
    "interno": colors.HexColor("#1e40af"),
    "externo": colors.HexColor("#065f46"),
}


def _text(value) -> str:
    """Escape a value for a Paragraph; empty values render as a dash."""
    if value is None or value == "":
        return EMPTY_VALUE
    return escape(str(value))


def _format_date(value: Optional[date]) -> str:
    return value.strftime("%d/%m/%Y") if value else EMPTY_VALUE


def _full_address(company_info) -> str:
    if not company_info:
        return ""
    parts = [
        company_info.domicilio,
        company_info.colonia,
        company_info.municipio,
        company_info.estado,
    ]
    return ", ".join(p for p in parts if p)


def _grid_table(rows: list[list], col_widths: list[float]) -> Table:
    table = Table(rows, colWidths=col_widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_GREY),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.75, GRID_COLOR),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 5),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
            ]
        )
    )
    return table


def _label_table(rows: list[tuple[str, str]], styles: dict) -> Table:
    data = [
        [Paragraph(f"<b>{escape(label)}</b>", styles["normal"]), Paragraph(value, styles["normal"])]
        for label, value in rows
    ]
    table = Table(data, colWidths=[2.2 * inch, 4.3 * inch])
    table.setStyle(
        TableStyle(
            [
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("TOPPADDING", (0, 0), (-1, -1), 2),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
            ]
        )
    )
    return table


def _create_risk_chart(risks) -> Optional[Drawing]:
    """Pie chart of risks by category (interno / externo)."""
    counts = Counter((r.categoria or "sin categoría") for r in risks)
    if not counts:
        return None

    drawing = Drawing(450, 170)
    labels = list(counts.keys())
    values = [counts[label] for label in labels]

    pie = Pie()
    pie.x = 165
    pie.y = 15
    pie.width = 110
    pie.height = 110
    pie.data = values
    pie.labels = [f"{label} ({value})" for label, value in zip(labels, values)]
    pie.slices.strokeWidth = 0.5
    pie.slices.strokeColor = colors.white
    pie.sideLabels = True
    pie.simpleLabels = False
    pie.slices.fontSize = 9
    for i, label in enumerate(labels):
        pie.slices[i].fillColor = CATEGORY_COLORS.get(label, colors.HexColor("#9ca3af"))

    drawing.add(pie)
    drawing.add(
        String(225, 155, "Riesgos por categoría", fontSize=10, fontName="Helvetica-Bold", textAnchor="middle")
    )
    return drawing


def _build_styles() -> dict:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "PIPCTitle",
            parent=base["Heading1"],
            fontSize=16,
            alignment=TA_CENTER,
            spaceAfter=8,
        ),
        "subtitle": ParagraphStyle(
            "PIPCSubtitle",
            parent=base["Normal"],
            fontSize=12,
            alignment=TA_CENTER,
            textColor=colors.HexColor("#333333"),
            spaceAfter=16,
        ),
        "section": ParagraphStyle(
            "PIPCSection",
            parent=base["Heading2"],
            fontSize=11,
            spaceBefore=14,
            spaceAfter=8,
        ),
        "paragraph": ParagraphStyle(
            "PIPCParagraph",
            parent=base["Normal"],
            fontSize=10,
            leading=15,
            alignment=TA_JUSTIFY,
            spaceAfter=8,
        ),
        "normal": base["Normal"],
        "footer": ParagraphStyle(
            "PIPCFooter",
            parent=base["Normal"],
            fontSize=8,
            alignment=TA_CENTER,
            textColor=colors.HexColor("#666666"),
        ),
    }


def create_pipc_pdf(data: PIPCProjectFull, generated_on: Optional[date] = None) -> bytes:
    """
    Generate the PIPC document for a project.

    Args:
        data: Project with client, sections, risks and training loaded
        generated_on: Date printed in the footer (defaults to today)

    Returns:
        PDF bytes
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=50,
        leftMargin=50,
        topMargin=50,
        bottomMargin=60,
        title=f"PIPC {data.client.razon_social}",
    )
    styles = _build_styles()
    elements = []

    company = data.company_info
    occupancy = data.occupancy
    uipc = data.uipc

    # Header
    elements.append(Paragraph("PROGRAMA INTERNO DE PROTECCIÓN CIVIL", styles["title"]))
    elements.append(Paragraph(_text(data.client.razon_social or "SIN NOMBRE"), styles["subtitle"]))

    # =========================================================================
    # Introduction
    # =========================================================================
    elements.append(Paragraph("MARCO JURÍDICO", styles["section"]))
    elements.append(Paragraph(DEFAULT_LEGAL_FRAMEWORK, styles["paragraph"]))
    if company and company.marco_juridico:
        elements.append(
            Paragraph(f"<b>Normatividad aplicable:</b> {_text(company.marco_juridico)}", styles["paragraph"])
        )

    elements.append(Paragraph("DEFINICIÓN DEL PROGRAMA INTERNO DE PROTECCIÓN CIVIL", styles["section"]))
    elements.append(Paragraph(PROGRAM_DEFINITION, styles["paragraph"]))

    elements.append(Paragraph("OBJETIVOS DEL PROGRAMA", styles["section"]))
    elements.append(Paragraph(f"<b>Objetivo General:</b> {GENERAL_OBJECTIVE}", styles["paragraph"]))
    elements.append(Paragraph(f"<b>Objetivos Específicos:</b> {SPECIFIC_OBJECTIVES}", styles["paragraph"]))

    # =========================================================================
    # I. General data
    # =========================================================================
    elements.append(Paragraph("I. DATOS GENERALES", styles["section"]))
    elements.append(
        _label_table(
            [
                ("Razón Social:", _text(data.client.razon_social)),
                ("RFC:", _text(data.client.rfc or "No especificado")),
                ("Domicilio:", _text(_full_address(company))),
                ("Teléfono:", _text(company.telefono if company else None)),
                ("Correo:", _text(company.email if company else None)),
                ("Representante Legal:", _text(company.representante_legal if company else None)),
            ],
            styles,
        )
    )

    # =========================================================================
    # II. Occupancy
    # =========================================================================
    elements.append(Paragraph("II. OCUPACIÓN DEL INMUEBLE", styles["section"]))
    elements.append(
        _label_table(
            [
                ("Población fija:", _text(occupancy.poblacion_fija if occupancy else None)),
                ("Población flotante:", _text(occupancy.poblacion_flotante if occupancy else None)),
                ("Edificios:", _text(occupancy.edificios if occupancy else None)),
                ("Niveles:", _text(occupancy.niveles if occupancy else None)),
            ],
            styles,
        )
    )

    # =========================================================================
    # III. Internal unit (UIPC)
    # =========================================================================
    elements.append(Paragraph("III. UNIDAD INTERNA DE PROTECCIÓN CIVIL", styles["section"]))
    elements.append(
        _label_table(
            [
                ("Responsable:", _text(uipc.responsable if uipc else None)),
                ("Coordinador:", _text(uipc.coordinador if uipc else None)),
            ],
            styles,
        )
    )
    brigadas = (uipc.brigadas if uipc else None) or {}
    if brigadas:
        rows = [["Brigada", "Integrantes"]]
        for name, members in brigadas.items():
            rows.append(
                [
                    Paragraph(_text(name.replace("_", " ").capitalize()), styles["normal"]),
                    Paragraph(_text(", ".join(members)), styles["normal"]),
                ]
            )
        elements.append(Spacer(1, 6))
        elements.append(_grid_table(rows, [2.2 * inch, 4.3 * inch]))

    # =========================================================================
    # IV. Risks
    # =========================================================================
    elements.append(Paragraph("IV. ANÁLISIS DE RIESGOS", styles["section"]))
    risk_rows = [["Tipo", "Categoría", "Nivel"]]
    if data.risks:
        for risk in data.risks:
            risk_rows.append(
                [
                    Paragraph(_text(risk.tipo), styles["normal"]),
                    _text(risk.categoria),
                    _text(risk.nivel),
                ]
            )
    else:
        risk_rows.append(["No se registraron riesgos", "", ""])
    elements.append(_grid_table(risk_rows, [3.3 * inch, 1.6 * inch, 1.6 * inch]))

    risk_chart = _create_risk_chart(data.risks)
    if risk_chart:
        elements.append(Spacer(1, 8))
        elements.append(risk_chart)

    # =========================================================================
    # V. Training
    # =========================================================================
    elements.append(Paragraph("V. PROGRAMA DE CAPACITACIÓN", styles["section"]))
    training_rows = [["Curso", "Fecha", "Duración"]]
    if data.training:
        for course in sorted(data.training, key=lambda t: t.fecha or date.min):
            training_rows.append(
                [
                    Paragraph(_text(course.curso), styles["normal"]),
                    _format_date(course.fecha),
                    _text(course.duracion),
                ]
            )
    else:
        training_rows.append(["No se registraron capacitaciones", "", ""])
    elements.append(_grid_table(training_rows, [3.3 * inch, 1.6 * inch, 1.6 * inch]))

    # Footer
    generated = generated_on or datetime.now().date()
    elements.append(Spacer(1, 24))
    elements.append(
        Paragraph(f"Documento generado automáticamente - {_format_date(generated)}", styles["footer"])
    )

    doc.build(elements)
    return buffer.getvalue()
