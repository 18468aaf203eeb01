"""Case documents - private bucket objects plus caso_documentos rows.

Objects are keyed {caso_id}/{epoch_ms}-{file_name} and only ever served
through short-lived presigned URLs.
"""

from __future__ import annotations

import logging
import time
from typing import BinaryIO
from uuid import UUID

from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from asme.core.config import settings
from asme.core.errors import ExternalServiceError
from asme.db.enums import DocumentType, TimelineAction
from asme.db.models import CasoDocumento
from asme.schemas.case import DocumentRead
from asme.services import timeline_service
from asme.services.storage_client import get_documents_client

logger = logging.getLogger(__name__)

SERVICE_NAME = "documents"


# =============================================================================
# Storage Operations
# =============================================================================

def build_storage_path(caso_id: UUID, file_name: str, now_ms: int | None = None) -> str:
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    safe_name = file_name.replace("/", "_").replace("\\", "_")
    return f"{caso_id}/{stamp}-{safe_name}"


def store_object(storage_path: str, body: bytes | BinaryIO, content_type: str | None) -> None:
    client = get_documents_client()
    extra = {"ContentType": content_type} if content_type else {}
    try:
        client.put_object(
            Bucket=settings.DOCUMENTS_BUCKET,
            Key=storage_path,
            Body=body,
            **extra,
        )
    except (ClientError, BotoCoreError) as exc:
        logger.exception("Document upload failed for %s", storage_path)
        raise ExternalServiceError(f"Upload failed: {exc}", service=SERVICE_NAME) from exc


def delete_objects(storage_paths: list[str]) -> None:
    """Remove objects from the documents bucket."""
    paths = [p for p in storage_paths if p]
    if not paths:
        return
    client = get_documents_client()
    try:
        for path in paths:
            client.delete_object(Bucket=settings.DOCUMENTS_BUCKET, Key=path)
    except (ClientError, BotoCoreError) as exc:
        logger.exception("Document delete failed")
        raise ExternalServiceError(f"Delete failed: {exc}", service=SERVICE_NAME) from exc


def generate_download_url(storage_path: str) -> str | None:
    """Presigned GET URL, or None when signing fails."""
    client = get_documents_client()
    try:
        return client.generate_presigned_url(
            "get_object",
            Params={"Bucket": settings.DOCUMENTS_BUCKET, "Key": storage_path},
            ExpiresIn=settings.PRESIGNED_URL_TTL_SECONDS,
        )
    except (ClientError, BotoCoreError):
        logger.warning("Could not sign download URL for %s", storage_path)
        return None


# =============================================================================
# Service Functions
# =============================================================================

def upload_document(
    db: Session,
    caso_id: UUID,
    *,
    file_name: str,
    body: bytes | BinaryIO,
    content_type: str | None,
    file_size: int | None,
    document_type: DocumentType | None = None,
    audiencia_id: UUID | None = None,
    description: str | None = None,
    user_id: UUID | None = None,
    commit: bool = True,
) -> CasoDocumento:
    """
    Store the object, then insert its row and an add_doc timeline entry.

    If the row insert fails the stored object is removed again.
    """
    storage_path = build_storage_path(caso_id, file_name)
    store_object(storage_path, body, content_type)

    try:
        document = CasoDocumento(
            caso_id=caso_id,
            file_name=file_name,
            storage_path=storage_path,
            file_size=file_size,
            mime_type=content_type or None,
            document_type=document_type.value if document_type else None,
            audiencia_id=audiencia_id,
            description=description or None,
        )
        db.add(document)
        db.flush()
    except SQLAlchemyError:
        logger.exception("Document row insert failed; removing %s", storage_path)
        delete_objects([storage_path])
        raise

    type_label = "AUTO " if document_type == DocumentType.AUTO else ""
    timeline_service.log_timeline(
        db,
        caso_id,
        TimelineAction.ADD_DOC,
        f"Documento {type_label}subido: {file_name}",
        user_id,
        commit=False,
    )
    if commit:
        db.commit()
        db.refresh(document)
    return document


def get_document(db: Session, document_id: UUID) -> CasoDocumento | None:
    return db.query(CasoDocumento).filter(CasoDocumento.id == document_id).first()


def list_documents(db: Session, caso_id: UUID) -> list[CasoDocumento]:
    return (
        db.query(CasoDocumento)
        .filter(CasoDocumento.caso_id == caso_id)
        .order_by(CasoDocumento.created_at.desc())
        .all()
    )


def get_latest_auto_document(db: Session, audiencia_id: UUID) -> CasoDocumento | None:
    """Most recent AUTO document linked to a hearing."""
    return (
        db.query(CasoDocumento)
        .filter(
            CasoDocumento.audiencia_id == audiencia_id,
            CasoDocumento.document_type == DocumentType.AUTO.value,
        )
        .order_by(CasoDocumento.created_at.desc())
        .first()
    )


def delete_document(db: Session, document: CasoDocumento, user_id: UUID | None = None) -> None:
    """Delete the storage object first, then the row; logs delete_doc."""
    delete_objects([document.storage_path])
    caso_id = document.caso_id
    file_name = document.file_name
    db.delete(document)
    timeline_service.log_timeline(
        db,
        caso_id,
        TimelineAction.DELETE_DOC,
        f"Documento eliminado: {file_name}",
        user_id,
        commit=False,
    )
    db.commit()


def to_document_read(document: CasoDocumento) -> DocumentRead:
    """Convert a row to its read schema with a fresh download URL."""
    return DocumentRead(
        id=document.id,
        caso_id=document.caso_id,
        file_name=document.file_name,
        storage_path=document.storage_path,
        file_size=document.file_size,
        mime_type=document.mime_type,
        document_type=document.document_type,
        audiencia_id=document.audiencia_id,
        description=document.description,
        created_at=document.created_at,
        download_url=generate_download_url(document.storage_path),
    )
