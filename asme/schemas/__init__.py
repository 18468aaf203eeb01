"""Pydantic schemas for API request/response models."""

from asme.schemas.auth import MeResponse, UserSession
from asme.schemas.case import CaseCreate, CaseRead, CaseUpdate
from asme.schemas.client import ClientCreate, ClientRead, ClientUpdate

__all__ = [
    # Auth
    "UserSession",
    "MeResponse",
    # Cases
    "CaseCreate",
    "CaseRead",
    "CaseUpdate",
    # Clients
    "ClientCreate",
    "ClientRead",
    "ClientUpdate",
]
