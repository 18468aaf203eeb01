"""PIPC (Programa Interno de Protección Civil) compliance models.

One PIPCClient owns projects; each project has at most one row of company
info, occupancy, UIPC and generated file (keyed by project_id), plus any
number of risks and training records.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import JSON, Date, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from asme.db.base import Base, utcnow
from asme.db.enums import PIPCProjectStatus


class PIPCClient(Base):
    __tablename__ = "pipc_clients"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    razon_social: Mapped[str] = mapped_column(String(255), nullable=False)
    rfc: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )


class PIPCProject(Base):
    __tablename__ = "pipc_projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("pipc_clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(20), default=PIPCProjectStatus.DRAFT.value, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False
    )


class PIPCCompanyInfo(Base):
    __tablename__ = "pipc_company_info"

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("pipc_projects.id", ondelete="CASCADE"), primary_key=True
    )
    domicilio: Mapped[str | None] = mapped_column(String(500), nullable=True)
    colonia: Mapped[str | None] = mapped_column(String(255), nullable=True)
    municipio: Mapped[str | None] = mapped_column(String(255), nullable=True)
    estado: Mapped[str] = mapped_column(String(100), default="Baja California", nullable=False)
    telefono: Mapped[str | None] = mapped_column(String(50), nullable=True)
    representante_legal: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    marco_juridico: Mapped[str | None] = mapped_column(Text, nullable=True)


class PIPCOccupancy(Base):
    __tablename__ = "pipc_occupancy"

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("pipc_projects.id", ondelete="CASCADE"), primary_key=True
    )
    poblacion_fija: Mapped[int | None] = mapped_column(Integer, nullable=True)
    poblacion_flotante: Mapped[int | None] = mapped_column(Integer, nullable=True)
    edificios: Mapped[int | None] = mapped_column(Integer, nullable=True)
    niveles: Mapped[int | None] = mapped_column(Integer, nullable=True)


class PIPCUIPC(Base):
    """Internal civil-protection unit: leaders and brigade rosters."""

    __tablename__ = "pipc_uipc"

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("pipc_projects.id", ondelete="CASCADE"), primary_key=True
    )
    responsable: Mapped[str | None] = mapped_column(String(255), nullable=True)
    coordinador: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # {"evacuacion": ["Ana", "Luis"], "primeros_auxilios": [...]}
    brigadas: Mapped[dict | None] = mapped_column(JSON, nullable=True)


class PIPCRisk(Base):
    __tablename__ = "pipc_risks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("pipc_projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tipo: Mapped[str | None] = mapped_column(String(255), nullable=True)
    categoria: Mapped[str | None] = mapped_column(String(20), nullable=True)
    nivel: Mapped[str | None] = mapped_column(String(50), nullable=True)


class PIPCTraining(Base):
    __tablename__ = "pipc_training"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("pipc_projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    curso: Mapped[str | None] = mapped_column(String(255), nullable=True)
    fecha: Mapped[date | None] = mapped_column(Date, nullable=True)
    duracion: Mapped[str | None] = mapped_column(String(100), nullable=True)


class PIPCFile(Base):
    """Latest generated PDF for a project (overwritten on regeneration)."""

    __tablename__ = "pipc_files"

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("pipc_projects.id", ondelete="CASCADE"), primary_key=True
    )
    pdf_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    generated_at: Mapped[datetime | None] = mapped_column(nullable=True)
