"""SQLAlchemy ORM models for the tables the API reads and writes."""

from asme.db.models.appointments import Appointment
from asme.db.models.auth import UserRole
from asme.db.models.blog import BlogPost, LegalBlogPost
from asme.db.models.campaigns import EmailCampaign, EmailCampaignTarget
from asme.db.models.cases import (
    Caso,
    CasoAudiencia,
    CasoDocumento,
    CasoNota,
    CasoTimeline,
)
from asme.db.models.clients import Client, ClientContact, ClientHistory
from asme.db.models.media import ServiceCard, TeamMember, TeamMemberImage
from asme.db.models.pipc import (
    PIPCClient,
    PIPCCompanyInfo,
    PIPCFile,
    PIPCOccupancy,
    PIPCProject,
    PIPCRisk,
    PIPCTraining,
    PIPCUIPC,
)

__all__ = [
    "Appointment",
    "BlogPost",
    "Caso",
    "CasoAudiencia",
    "CasoDocumento",
    "CasoNota",
    "CasoTimeline",
    "Client",
    "ClientContact",
    "ClientHistory",
    "EmailCampaign",
    "EmailCampaignTarget",
    "LegalBlogPost",
    "PIPCClient",
    "PIPCCompanyInfo",
    "PIPCFile",
    "PIPCOccupancy",
    "PIPCProject",
    "PIPCRisk",
    "PIPCTraining",
    "PIPCUIPC",
    "ServiceCard",
    "TeamMember",
    "TeamMemberImage",
    "UserRole",
]
