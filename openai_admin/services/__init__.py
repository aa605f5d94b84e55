from .pagination import clamp_page_size, iter_pages, list_all
from .resources import (
    ADMIN_KEYS,
    ORGANIZATIONS,
    PROJECT_API_KEYS,
    PROJECTS,
    ResourceFamily,
    ResourceOperations,
)

__all__ = [
    "ADMIN_KEYS",
    "ORGANIZATIONS",
    "PROJECT_API_KEYS",
    "PROJECTS",
    "ResourceFamily",
    "ResourceOperations",
    "clamp_page_size",
    "iter_pages",
    "list_all",
]
