"""Utility modules."""

from asme.utils.normalization import normalize_email, normalize_text, slugify
from asme.utils.pagination import (
    PaginationParams,
    get_pagination,
    paginate_query,
    total_pages,
)

__all__ = [
    # Normalization
    "normalize_email",
    "normalize_text",
    "slugify",
    # Pagination
    "PaginationParams",
    "get_pagination",
    "paginate_query",
    "total_pages",
]
