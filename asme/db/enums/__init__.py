"""Enum definitions for application constants."""

from asme.db.enums.appointments import (
    ABOGADOS_SERVICES,
    ASME_SERVICES,
    DEFAULT_APPOINTMENT_STATUS,
    SERVICES_BY_SOURCE,
    AppointmentAction,
    AppointmentSource,
    AppointmentStatus,
)
from asme.db.enums.auth import OtpType, Role
from asme.db.enums.campaigns import (
    SEGMENT_LABELS,
    CampaignStatus,
    CampaignTargetStatus,
    Segment,
)
from asme.db.enums.cases import (
    DEFAULT_CASE_STATUS,
    DEFAULT_HEARING_STATUS,
    CaseStatus,
    CaseType,
    DocumentType,
    HearingStatus,
    TimelineAction,
)
from asme.db.enums.clients import ClientHistoryEvent, ClientSort, ClientStatus
from asme.db.enums.media import BlogKind, ServiceCardContentType, UploadFolder
from asme.db.enums.permissions import (
    ROLES_CAN_EDIT_CASES,
    ROLES_CAN_INVITE,
    ROLES_CAN_MANAGE_APPOINTMENTS,
    ROLES_CAN_MANAGE_CONTENT,
    ROLES_CAN_VIEW_DASHBOARD,
)
from asme.db.enums.pipc import PIPCProjectStatus, RiskCategory
