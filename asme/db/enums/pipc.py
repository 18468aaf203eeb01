"""PIPC (Programa Interno de Protección Civil) enums."""

from enum import Enum


class PIPCProjectStatus(str, Enum):
    DRAFT = "draft"
    READY = "ready"
    GENERATED = "generated"


class RiskCategory(str, Enum):
    INTERNO = "interno"
    EXTERNO = "externo"
