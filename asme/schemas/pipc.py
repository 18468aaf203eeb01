"""PIPC compliance schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from asme.db.enums import RiskCategory


class PIPCClientCreate(BaseModel):
    razon_social: str = Field(..., min_length=1, max_length=255)
    rfc: str | None = Field(None, max_length=20)


class PIPCClientRead(BaseModel):
    id: UUID
    razon_social: str
    rfc: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class PIPCProjectRead(BaseModel):
    id: UUID
    client_id: UUID
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PIPCClientWithProjects(PIPCClientRead):
    projects: list[PIPCProjectRead] = []


class PIPCClientCreated(BaseModel):
    client: PIPCClientRead
    project: PIPCProjectRead


# =============================================================================
# Project sections
# =============================================================================

class CompanyInfoData(BaseModel):
    domicilio: str | None = Field(None, max_length=500)
    colonia: str | None = Field(None, max_length=255)
    municipio: str | None = Field(None, max_length=255)
    estado: str = Field("Baja California", max_length=100)
    telefono: str | None = Field(None, max_length=50)
    representante_legal: str | None = Field(None, max_length=255)
    email: EmailStr | None = None
    marco_juridico: str | None = None


class CompanyInfoRead(CompanyInfoData):
    project_id: UUID
    email: str | None = None

    model_config = {"from_attributes": True}


class OccupancyData(BaseModel):
    poblacion_fija: int | None = Field(None, ge=0)
    poblacion_flotante: int | None = Field(None, ge=0)
    edificios: int | None = Field(None, ge=0)
    niveles: int | None = Field(None, ge=0)


class OccupancyRead(OccupancyData):
    project_id: UUID

    model_config = {"from_attributes": True}


class UIPCData(BaseModel):
    responsable: str | None = Field(None, max_length=255)
    coordinador: str | None = Field(None, max_length=255)
    brigadas: dict[str, list[str]] | None = None


class UIPCRead(UIPCData):
    project_id: UUID

    model_config = {"from_attributes": True}


class RiskCreate(BaseModel):
    tipo: str = Field(..., min_length=1, max_length=255)
    categoria: RiskCategory
    nivel: str | None = Field(None, max_length=50)


class RiskRead(BaseModel):
    id: UUID
    project_id: UUID
    tipo: str | None
    categoria: str | None
    nivel: str | None

    model_config = {"from_attributes": True}


class TrainingCreate(BaseModel):
    curso: str = Field(..., min_length=1, max_length=255)
    fecha: date | None = None
    duracion: str | None = Field(None, max_length=100)


class TrainingRead(BaseModel):
    id: UUID
    project_id: UUID
    curso: str | None
    fecha: date | None
    duracion: str | None

    model_config = {"from_attributes": True}


class PIPCFileRead(BaseModel):
    project_id: UUID
    pdf_url: str | None
    generated_at: datetime | None

    model_config = {"from_attributes": True}


class PIPCProjectFull(BaseModel):
    """Everything needed to edit a project or render its PDF."""
    project: PIPCProjectRead
    client: PIPCClientRead
    company_info: CompanyInfoRead | None = None
    occupancy: OccupancyRead | None = None
    uipc: UIPCRead | None = None
    risks: list[RiskRead] = []
    training: list[TrainingRead] = []
    file: PIPCFileRead | None = None


class PIPCPdfResponse(BaseModel):
    pdfUrl: str
