"""Domain layer: entities and value objects. No dependencies on outer layers."""

from contactbook.domain.entities import (
    CATEGORIES,
    CATEGORY_BUSINESS,
    CATEGORY_OTHER,
    CATEGORY_PRIVATE,
    BUSINESS_SUBCATEGORIES,
    Contact,
    ContactDraft,
    ContactSubmission,
    subcategory_options,
)

__all__ = [
    "BUSINESS_SUBCATEGORIES",
    "CATEGORIES",
    "CATEGORY_BUSINESS",
    "CATEGORY_OTHER",
    "CATEGORY_PRIVATE",
    "Contact",
    "ContactDraft",
    "ContactSubmission",
    "subcategory_options",
]
