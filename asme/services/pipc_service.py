"""PIPC service - compliance clients, projects and generated documents."""

import logging
import re
import time
from datetime import date, timedelta
from uuid import UUID

from sqlalchemy.orm import Session

from asme.db.base import utcnow
from asme.db.enums import PIPCProjectStatus, RiskCategory
from asme.db.models import (
    PIPCUIPC,
    PIPCClient,
    PIPCCompanyInfo,
    PIPCFile,
    PIPCOccupancy,
    PIPCProject,
    PIPCRisk,
    PIPCTraining,
)
from asme.schemas.pipc import (
    CompanyInfoData,
    OccupancyData,
    PIPCProjectFull,
    RiskCreate,
    TrainingCreate,
    UIPCData,
)
from asme.services import media_service, pipc_pdf

logger = logging.getLogger(__name__)

LEGAL_FRAMEWORK_TEXT = (
    "Ley General de Protección Civil, Ley de Protección Civil y Gestión Integral de "
    "Riesgos del Estado de Baja California, NOM-002-STPS-2010, NOM-026-STPS-2008, "
    "NOM-003-SEGOB-2011"
)

DEFAULT_RESOURCES = [
    ("Extintores ABC", RiskCategory.INTERNO, "Bajo"),
    ("Botiquín primeros auxilios", RiskCategory.INTERNO, "Bajo"),
    ("Señalización evacuación", RiskCategory.INTERNO, "Bajo"),
]

DEFAULT_SIGNAGE = [
    ("Señales de salida", RiskCategory.INTERNO, "Bajo"),
    ("Señales de ruta evacuación", RiskCategory.INTERNO, "Bajo"),
    ("Señales de extintor", RiskCategory.INTERNO, "Bajo"),
    ("Punto de reunión", RiskCategory.EXTERNO, "Bajo"),
]

DRILL_COURSE = "Simulacro de evacuación"
DRILL_DURATION = "30 minutos"


# =============================================================================
# Clients and projects
# =============================================================================

def create_client(db: Session, razon_social: str, rfc: str | None = None) -> tuple[PIPCClient, PIPCProject]:
    """Create a PIPC client together with its first draft project."""
    client = PIPCClient(razon_social=razon_social.strip(), rfc=(rfc or "").strip().upper() or None)
    db.add(client)
    db.flush()
    project = PIPCProject(client_id=client.id, status=PIPCProjectStatus.DRAFT.value)
    db.add(project)
    db.commit()
    db.refresh(client)
    db.refresh(project)
    logger.info("PIPC client %s created with project %s", client.id, project.id)
    return client, project


def list_clients_with_projects(db: Session) -> list[tuple[PIPCClient, list[PIPCProject]]]:
    clients = db.query(PIPCClient).order_by(PIPCClient.created_at.desc()).all()
    if not clients:
        return []
    projects = (
        db.query(PIPCProject)
        .filter(PIPCProject.client_id.in_([c.id for c in clients]))
        .order_by(PIPCProject.created_at.asc())
        .all()
    )
    by_client: dict[UUID, list[PIPCProject]] = {}
    for project in projects:
        by_client.setdefault(project.client_id, []).append(project)
    return [(client, by_client.get(client.id, [])) for client in clients]


def get_client(db: Session, client_id: UUID) -> PIPCClient | None:
    return db.query(PIPCClient).filter(PIPCClient.id == client_id).first()


def get_project(db: Session, project_id: UUID) -> PIPCProject | None:
    return db.query(PIPCProject).filter(PIPCProject.id == project_id).first()


def _delete_project_rows(db: Session, project_id: UUID) -> None:
    for model in (PIPCCompanyInfo, PIPCOccupancy, PIPCUIPC, PIPCRisk, PIPCTraining, PIPCFile):
        db.query(model).filter(model.project_id == project_id).delete(synchronize_session=False)


def delete_client(db: Session, client: PIPCClient) -> None:
    """Delete a client with its projects and every project section."""
    projects = db.query(PIPCProject).filter(PIPCProject.client_id == client.id).all()
    for project in projects:
        _delete_project_rows(db, project.id)
        db.delete(project)
    db.delete(client)
    db.commit()
    logger.info("PIPC client %s deleted", client.id)


def load_project(db: Session, project: PIPCProject) -> PIPCProjectFull:
    """Load the project with its client and every section."""
    project_id = project.id
    return PIPCProjectFull(
        project=project,
        client=get_client(db, project.client_id),
        company_info=db.get(PIPCCompanyInfo, project_id),
        occupancy=db.get(PIPCOccupancy, project_id),
        uipc=db.get(PIPCUIPC, project_id),
        risks=db.query(PIPCRisk).filter(PIPCRisk.project_id == project_id).all(),
        training=db.query(PIPCTraining).filter(PIPCTraining.project_id == project_id).all(),
        file=db.get(PIPCFile, project_id),
    )


def _touch(project: PIPCProject) -> None:
    project.updated_at = utcnow()


# =============================================================================
# One-per-project sections (upserts)
# =============================================================================

def _upsert(db: Session, model, project: PIPCProject, values: dict):
    row = db.get(model, project.id)
    if row is None:
        row = model(project_id=project.id, **values)
        db.add(row)
    else:
        for field, value in values.items():
            setattr(row, field, value)
    _touch(project)
    db.commit()
    db.refresh(row)
    return row


def upsert_company_info(db: Session, project: PIPCProject, data: CompanyInfoData) -> PIPCCompanyInfo:
    return _upsert(db, PIPCCompanyInfo, project, data.model_dump(exclude_unset=True))


def upsert_occupancy(db: Session, project: PIPCProject, data: OccupancyData) -> PIPCOccupancy:
    return _upsert(db, PIPCOccupancy, project, data.model_dump(exclude_unset=True))


def upsert_uipc(db: Session, project: PIPCProject, data: UIPCData) -> PIPCUIPC:
    return _upsert(db, PIPCUIPC, project, data.model_dump(exclude_unset=True))


# =============================================================================
# Risks and training
# =============================================================================

def add_risk(db: Session, project: PIPCProject, data: RiskCreate) -> PIPCRisk:
    risk = PIPCRisk(
        project_id=project.id,
        tipo=data.tipo.strip(),
        categoria=data.categoria.value,
        nivel=data.nivel,
    )
    db.add(risk)
    _touch(project)
    db.commit()
    db.refresh(risk)
    return risk


def get_risk(db: Session, risk_id: UUID) -> PIPCRisk | None:
    return db.query(PIPCRisk).filter(PIPCRisk.id == risk_id).first()


def delete_risk(db: Session, risk: PIPCRisk) -> None:
    db.delete(risk)
    db.commit()


def add_training(db: Session, project: PIPCProject, data: TrainingCreate, today: date | None = None) -> PIPCTraining:
    """
    Record a completed course.

    Raises:
        ValueError: fecha is today or later
    """
    today = today or date.today()
    if data.fecha and data.fecha >= today:
        raise ValueError("La fecha debe ser anterior a hoy")

    training = PIPCTraining(
        project_id=project.id,
        curso=data.curso.strip(),
        fecha=data.fecha,
        duracion=data.duracion,
    )
    db.add(training)
    _touch(project)
    db.commit()
    db.refresh(training)
    return training


def get_training(db: Session, training_id: UUID) -> PIPCTraining | None:
    return db.query(PIPCTraining).filter(PIPCTraining.id == training_id).first()


def delete_training(db: Session, training: PIPCTraining) -> None:
    db.delete(training)
    db.commit()


# =============================================================================
# Quick-add helpers
# =============================================================================

def add_legal_framework(db: Session, project: PIPCProject) -> PIPCCompanyInfo:
    return _upsert(db, PIPCCompanyInfo, project, {"marco_juridico": LEGAL_FRAMEWORK_TEXT})


def _add_risk_rows(db: Session, project: PIPCProject, items) -> list[PIPCRisk]:
    risks = [
        PIPCRisk(project_id=project.id, tipo=tipo, categoria=categoria.value, nivel=nivel)
        for tipo, categoria, nivel in items
    ]
    db.add_all(risks)
    _touch(project)
    db.commit()
    return risks


def add_resource_inventory(db: Session, project: PIPCProject) -> list[PIPCRisk]:
    """Default inventory entries (extinguishers, first aid, signage)."""
    return _add_risk_rows(db, project, DEFAULT_RESOURCES)


def add_signage_list(db: Session, project: PIPCProject) -> list[PIPCRisk]:
    return _add_risk_rows(db, project, DEFAULT_SIGNAGE)


def add_drill_record(db: Session, project: PIPCProject, today: date | None = None) -> PIPCTraining:
    """Evacuation drill dated yesterday, so it always passes the date rule."""
    yesterday = (today or date.today()) - timedelta(days=1)
    return add_training(
        db,
        project,
        TrainingCreate(curso=DRILL_COURSE, fecha=yesterday, duracion=DRILL_DURATION),
        today=today,
    )


# =============================================================================
# PDF generation
# =============================================================================

def build_pdf_key(razon_social: str, now_ms: int | None = None) -> str:
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    name = re.sub(r"\s+", "_", razon_social.strip())
    stem, _ = media_service.split_file_name(f"{name}.pdf")
    return f"{media_service.PIPC_PDFS_FOLDER}/pipc_{stem}_{stamp}.pdf"


def generate_pdf(db: Session, project: PIPCProject) -> str:
    """
    Render, upload and record the project's PDF.

    The pipc_files row is overwritten and the project moves to generated.
    Returns the public URL.
    """
    data = load_project(db, project)
    pdf_bytes = pipc_pdf.create_pipc_pdf(data)
    key = build_pdf_key(data.client.razon_social)
    url = media_service.upload_public_object(key, pdf_bytes, "application/pdf")

    file_row = db.get(PIPCFile, project.id)
    if file_row is None:
        file_row = PIPCFile(project_id=project.id)
        db.add(file_row)
    file_row.pdf_url = url
    file_row.generated_at = utcnow()

    project.status = PIPCProjectStatus.GENERATED.value
    _touch(project)
    db.commit()
    logger.info("PIPC PDF generated for project %s", project.id)
    return url
