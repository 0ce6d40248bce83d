"""Form validation for contact drafts, password changes, and registration. Pure functions."""

import re

from contactbook.application.messages import message
from contactbook.domain import CATEGORIES, CATEGORY_PRIVATE, ContactDraft
from contactbook.domain.entities import parse_calendar_date

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s-]{9,15}$")


def _subcategory_error(category: str, subcategory: str) -> str | None:
    # One rule per category. Służbowy choices are restricted by the selector,
    # so here it only has to be non-empty like any other non-private category.
    if category == CATEGORY_PRIVATE:
        return None
    if not (subcategory or "").strip():
        return message("subcategory_required")
    return None


def validate(draft: ContactDraft, is_create_mode: bool) -> dict[str, str]:
    """Return field -> message for every failing rule. Empty means submittable."""
    errors: dict[str, str] = {}

    if not draft.first_name.strip():
        errors["first_name"] = message("first_name_required")
    if not draft.last_name.strip():
        errors["last_name"] = message("last_name_required")

    if not draft.email.strip():
        errors["email"] = message("email_required")
    elif not EMAIL_PATTERN.search(draft.email):
        errors["email"] = message("email_invalid")

    if draft.category not in CATEGORIES:
        errors["category"] = message("category_required")

    subcategory_error = _subcategory_error(draft.category, draft.subcategory)
    if subcategory_error:
        errors["subcategory"] = subcategory_error

    if not draft.phone_number.strip():
        errors["phone_number"] = message("phone_required")
    elif not PHONE_PATTERN.fullmatch(draft.phone_number):
        errors["phone_number"] = message("phone_invalid")

    if not draft.date_of_birth:
        errors["date_of_birth"] = message("date_of_birth_required")
    elif parse_calendar_date(draft.date_of_birth) is None:
        errors["date_of_birth"] = message("date_of_birth_invalid")

    if is_create_mode and not draft.password.strip():
        errors["password"] = message("password_required")

    return errors


def validate_new_password(new_password: str) -> str | None:
    """Return the password-field error for the password-change dialog, or None."""
    if not (new_password or "").strip():
        return message("password_required")
    return None


def validate_registration(username: str, password: str, confirm_password: str) -> dict[str, str]:
    """Only the confirmation is checked locally; the backend owns the other rules."""
    if password != confirm_password:
        return {"password": message("passwords_mismatch")}
    return {}
