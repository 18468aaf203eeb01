"""Media, gallery and upload enums."""

from enum import Enum


class UploadFolder(str, Enum):
    """Folders accepted by the Spaces upload endpoints."""

    BLOG_IMAGES = "blog-images"
    BLOG_MEDIA = "blog-media"
    LEGAL_BLOG_IMAGES = "legal-blog-images"
    LEGAL_BLOG_MEDIA = "legal-blog-media"

    @property
    def is_media(self) -> bool:
        """Media folders hold audio/video; the rest hold images."""
        return self.value.endswith("media")

    @classmethod
    def has_value(cls, value: str) -> bool:
        return value in cls._value2member_map_


class ServiceCardContentType(str, Enum):
    """What a service_cards row feeds on the marketing site."""

    SERVICE = "service"
    GALLERY = "gallery"
    LEGAL_SERVICE = "legal_service"


class BlogKind(str, Enum):
    """The two blog collections."""

    ASME = "asme"
    LEGAL = "legal"
