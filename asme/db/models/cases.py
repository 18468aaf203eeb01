"""Legal case (caso) models and their child records."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    Date,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from asme.db.base import Base, utcnow
from asme.db.enums import DEFAULT_CASE_STATUS, DEFAULT_HEARING_STATUS


class Caso(Base):
    """
    A case/matter tracked by the law firm.

    Soft-deleted through is_archived; hard deletion is done by
    case_service.delete_case, which removes children explicitly.
    """

    __tablename__ = "casos"
    __table_args__ = (
        Index("idx_casos_last_update", "last_update"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    case_number: Mapped[str] = mapped_column(String(100), nullable=False)

    # Client contact
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    client_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    case_type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_CASE_STATUS.value, nullable=False
    )
    assigned_to: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    next_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    # NULL on legacy rows; treated as not archived
    is_archived: Mapped[bool | None] = mapped_column(
        Boolean, default=False, server_default=text("FALSE"), nullable=True
    )

    last_update: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )


class CasoAudiencia(Base):
    """A scheduled court hearing linked to a case."""

    __tablename__ = "caso_audiencias"
    __table_args__ = (
        Index("idx_caso_audiencias_caso", "caso_id", "fecha"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    caso_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("casos.id", ondelete="CASCADE"), nullable=False
    )
    fecha: Mapped[datetime] = mapped_column(nullable=False)
    tipo: Mapped[str] = mapped_column(String(255), nullable=False)
    sala: Mapped[str | None] = mapped_column(String(255), nullable=True)
    estatus: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_HEARING_STATUS.value, nullable=False
    )
    notas: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False
    )


class CasoNota(Base):
    """Free-text note on a case."""

    __tablename__ = "caso_notas"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    caso_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("casos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    contenido: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )


class CasoDocumento(Base):
    """
    Metadata for a file stored in the private documents bucket.

    storage_path is the object key; the file itself never passes through
    the database.
    """

    __tablename__ = "caso_documentos"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    caso_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("casos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    file_name: Mapped[str] = mapped_column(String(500), nullable=False)
    storage_path: Mapped[str] = mapped_column(String(1000), nullable=False)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    mime_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    document_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    audiencia_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("caso_audiencias.id", ondelete="SET NULL"), nullable=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )


class CasoTimeline(Base):
    """Append-only activity log for a case."""

    __tablename__ = "caso_timeline"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    caso_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("casos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    action_type: Mapped[str] = mapped_column(String(50), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
