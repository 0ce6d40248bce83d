"""Domain entities: Contact, ContactDraft, and ContactSubmission."""

from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime, timezone

CATEGORY_BUSINESS = "Służbowy"
CATEGORY_PRIVATE = "Prywatny"
CATEGORY_OTHER = "Inny"

CATEGORIES = (CATEGORY_BUSINESS, CATEGORY_PRIVATE, CATEGORY_OTHER)

# Choices offered by the subcategory selector when category is Służbowy.
BUSINESS_SUBCATEGORIES = ("Szef", "Klient", "Współpracownik")


def subcategory_options(category: str) -> tuple[str, ...] | None:
    """Return the fixed subcategory choices for a category, or None for free text.

    Prywatny has no subcategory at all and returns an empty tuple.
    """
    if category == CATEGORY_BUSINESS:
        return BUSINESS_SUBCATEGORIES
    if category == CATEGORY_PRIVATE:
        return ()
    return None


def iso_instant(value: datetime) -> str:
    """Format as a UTC ISO-8601 instant with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_calendar_date(text: str) -> date | None:
    """Parse YYYY-MM-DD, or None when the text is not a calendar date."""
    try:
        return date.fromisoformat((text or "").strip())
    except ValueError:
        return None


def calendar_date_to_instant(text: str) -> str | None:
    """Turn a form date (YYYY-MM-DD) into the instant sent to the backend (UTC midnight)."""
    parsed = parse_calendar_date(text)
    if parsed is None:
        return None
    return iso_instant(datetime(parsed.year, parsed.month, parsed.day, tzinfo=timezone.utc))


def instant_to_calendar_date(value: datetime | None) -> str:
    """Coerce a stored instant to the plain date shown in a date input."""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date().isoformat()


@dataclass(frozen=True)
class ContactSubmission:
    """
    Request body for create/update. Carries no id.
    password is None when it must not be sent.
    """

    first_name: str
    last_name: str
    email: str
    category: str
    subcategory: str | None
    phone_number: str
    date_of_birth: str | None
    password: str | None = None


@dataclass(frozen=True)
class Contact:
    """
    A directory record as returned by the backend.
    The password is write-only and never present here.
    """

    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    category: str = ""
    subcategory: str | None = None
    phone_number: str = ""
    date_of_birth: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_submission(self, *, password: str | None = None) -> ContactSubmission:
        """Resubmit the stored fields as-is, optionally with a new password."""
        return ContactSubmission(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            category=self.category,
            subcategory=self.subcategory,
            phone_number=self.phone_number,
            date_of_birth=iso_instant(self.date_of_birth) if self.date_of_birth else None,
            password=password,
        )


@dataclass(frozen=True)
class ContactDraft:
    """
    Form values for a contact being created or edited. All fields are text,
    date_of_birth as YYYY-MM-DD. Changes go through with_field so the
    category/subcategory rules hold.
    """

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    category: str = ""
    subcategory: str = ""
    phone_number: str = ""
    date_of_birth: str = ""
    password: str = field(default="", repr=False)

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactDraft":
        """Pre-fill from an existing contact. Password stays blank."""
        return cls(
            first_name=contact.first_name or "",
            last_name=contact.last_name or "",
            email=contact.email or "",
            category=contact.category or "",
            subcategory=contact.subcategory or "",
            phone_number=contact.phone_number or "",
            date_of_birth=instant_to_calendar_date(contact.date_of_birth),
        )

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def with_field(self, name: str, value: str) -> "ContactDraft":
        """Return a copy with one field changed.

        Changing category clears subcategory; re-selecting the current one
        keeps it. Subcategory is ignored for Prywatny and restricted to the
        offered choices for Służbowy.
        """
        if name not in self.field_names():
            raise ValueError(f"Unknown contact field: {name}")
        value = value or ""
        if name == "category":
            if value == self.category:
                return self
            return replace(self, category=value, subcategory="")
        if name == "subcategory":
            options = subcategory_options(self.category)
            if options == ():
                return self
            if options and value and value not in options:
                raise ValueError(
                    f"Subcategory for {self.category} must be one of: {', '.join(options)}."
                )
        return replace(self, **{name: value})

    def to_submission(self, *, include_password: bool) -> ContactSubmission:
        subcategory: str | None = self.subcategory
        if self.category == CATEGORY_PRIVATE:
            subcategory = None
        return ContactSubmission(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            category=self.category,
            subcategory=subcategory,
            phone_number=self.phone_number,
            date_of_birth=calendar_date_to_instant(self.date_of_birth),
            password=self.password if include_password else None,
        )
