"""PIPC router - civil protection program clients, projects and PDFs."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from asme.core.deps import get_db, require_csrf_header, require_roles
from asme.core.errors import ExternalServiceError
from asme.db.enums import ROLES_CAN_MANAGE_CONTENT, ROLES_CAN_VIEW_DASHBOARD
from asme.schemas.pipc import (
    CompanyInfoData,
    CompanyInfoRead,
    OccupancyData,
    OccupancyRead,
    PIPCClientCreate,
    PIPCClientCreated,
    PIPCClientWithProjects,
    PIPCPdfResponse,
    PIPCProjectFull,
    RiskCreate,
    RiskRead,
    TrainingCreate,
    TrainingRead,
    UIPCData,
    UIPCRead,
)
from asme.services import pipc_service

router = APIRouter()

can_view = [Depends(require_roles(ROLES_CAN_VIEW_DASHBOARD))]
staff_write = [Depends(require_csrf_header), Depends(require_roles(ROLES_CAN_MANAGE_CONTENT))]


def _get_project_or_404(db: Session, project_id: UUID):
    project = pipc_service.get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Proyecto no encontrado")
    return project


# =============================================================================
# Clients
# =============================================================================

@router.get("/clients", response_model=list[PIPCClientWithProjects], dependencies=can_view)
def list_clients(db: Session = Depends(get_db)):
    return [
        PIPCClientWithProjects.model_validate(
            {
                "id": client.id,
                "razon_social": client.razon_social,
                "rfc": client.rfc,
                "created_at": client.created_at,
                "projects": projects,
            }
        )
        for client, projects in pipc_service.list_clients_with_projects(db)
    ]


@router.post(
    "/clients",
    response_model=PIPCClientCreated,
    status_code=201,
    dependencies=staff_write,
)
def create_client(data: PIPCClientCreate, db: Session = Depends(get_db)):
    """Create the client and its first draft project."""
    client, project = pipc_service.create_client(db, data.razon_social, data.rfc)
    return PIPCClientCreated(client=client, project=project)


@router.delete("/clients/{client_id}", status_code=204, dependencies=staff_write)
def delete_client(client_id: UUID, db: Session = Depends(get_db)):
    client = pipc_service.get_client(db, client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Cliente no encontrado")
    pipc_service.delete_client(db, client)
    return None


# =============================================================================
# Projects
# =============================================================================

@router.get("/projects/{project_id}", response_model=PIPCProjectFull, dependencies=can_view)
def get_project(project_id: UUID, db: Session = Depends(get_db)):
    project = _get_project_or_404(db, project_id)
    return pipc_service.load_project(db, project)


@router.put(
    "/projects/{project_id}/company-info",
    response_model=CompanyInfoRead,
    dependencies=staff_write,
)
def upsert_company_info(project_id: UUID, data: CompanyInfoData, db: Session = Depends(get_db)):
    project = _get_project_or_404(db, project_id)
    return pipc_service.upsert_company_info(db, project, data)


@router.put(
    "/projects/{project_id}/occupancy",
    response_model=OccupancyRead,
    dependencies=staff_write,
)
def upsert_occupancy(project_id: UUID, data: OccupancyData, db: Session = Depends(get_db)):
    project = _get_project_or_404(db, project_id)
    return pipc_service.upsert_occupancy(db, project, data)


@router.put(
    "/projects/{project_id}/uipc",
    response_model=UIPCRead,
    dependencies=staff_write,
)
def upsert_uipc(project_id: UUID, data: UIPCData, db: Session = Depends(get_db)):
    project = _get_project_or_404(db, project_id)
    return pipc_service.upsert_uipc(db, project, data)


@router.post(
    "/projects/{project_id}/risks",
    response_model=RiskRead,
    status_code=201,
    dependencies=staff_write,
)
def add_risk(project_id: UUID, data: RiskCreate, db: Session = Depends(get_db)):
    project = _get_project_or_404(db, project_id)
    return pipc_service.add_risk(db, project, data)


@router.delete("/projects/{project_id}/risks/{risk_id}", status_code=204, dependencies=staff_write)
def delete_risk(project_id: UUID, risk_id: UUID, db: Session = Depends(get_db)):
    risk = pipc_service.get_risk(db, risk_id)
    if not risk or risk.project_id != project_id:
        raise HTTPException(status_code=404, detail="Riesgo no encontrado")
    pipc_service.delete_risk(db, risk)
    return None


@router.post(
    "/projects/{project_id}/training",
    response_model=TrainingRead,
    status_code=201,
    dependencies=staff_write,
)
def add_training(project_id: UUID, data: TrainingCreate, db: Session = Depends(get_db)):
    project = _get_project_or_404(db, project_id)
    try:
        return pipc_service.add_training(db, project, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete(
    "/projects/{project_id}/training/{training_id}",
    status_code=204,
    dependencies=staff_write,
)
def delete_training(project_id: UUID, training_id: UUID, db: Session = Depends(get_db)):
    training = pipc_service.get_training(db, training_id)
    if not training or training.project_id != project_id:
        raise HTTPException(status_code=404, detail="Capacitación no encontrada")
    pipc_service.delete_training(db, training)
    return None


# =============================================================================
# Quick-add helpers
# =============================================================================

@router.post(
    "/projects/{project_id}/quick/legal-framework",
    response_model=CompanyInfoRead,
    dependencies=staff_write,
)
def add_legal_framework(project_id: UUID, db: Session = Depends(get_db)):
    project = _get_project_or_404(db, project_id)
    return pipc_service.add_legal_framework(db, project)


@router.post(
    "/projects/{project_id}/quick/resource-inventory",
    response_model=list[RiskRead],
    dependencies=staff_write,
)
def add_resource_inventory(project_id: UUID, db: Session = Depends(get_db)):
    project = _get_project_or_404(db, project_id)
    return pipc_service.add_resource_inventory(db, project)


@router.post(
    "/projects/{project_id}/quick/signage",
    response_model=list[RiskRead],
    dependencies=staff_write,
)
def add_signage_list(project_id: UUID, db: Session = Depends(get_db)):
    project = _get_project_or_404(db, project_id)
    return pipc_service.add_signage_list(db, project)


@router.post(
    "/projects/{project_id}/quick/drill",
    response_model=TrainingRead,
    dependencies=staff_write,
)
def add_drill_record(project_id: UUID, db: Session = Depends(get_db)):
    project = _get_project_or_404(db, project_id)
    return pipc_service.add_drill_record(db, project)


# =============================================================================
# PDF
# =============================================================================

@router.post(
    "/projects/{project_id}/pdf",
    response_model=PIPCPdfResponse,
    dependencies=staff_write,
)
def generate_pdf(project_id: UUID, db: Session = Depends(get_db)):
    """Render the PDF, store it in the Space and mark the project generated."""
    project = _get_project_or_404(db, project_id)
    try:
        url = pipc_service.generate_pdf(db, project)
    except ExternalServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return PIPCPdfResponse(pdfUrl=url)
