"""Dialog states and use-case results returned to the presentation layer."""

from dataclasses import dataclass, field

from contactbook.domain import Contact, ContactDraft


@dataclass(frozen=True)
class Closed:
    name = "closed"


@dataclass(frozen=True)
class Viewing:
    contact: Contact
    name = "viewing"


@dataclass(frozen=True)
class Editing:
    """contact is None in create mode."""

    contact: Contact | None
    draft: ContactDraft = field(default_factory=ContactDraft)
    field_errors: dict[str, str] = field(default_factory=dict)
    name = "editing"

    @property
    def is_create(self) -> bool:
        return self.contact is None


@dataclass(frozen=True)
class ConfirmingDelete:
    contact: Contact
    name = "confirming_delete"


@dataclass(frozen=True)
class ChangingPassword:
    contact: Contact
    new_password: str = field(default="", repr=False)
    password_error: str = ""
    name = "changing_password"


DialogState = Closed | Viewing | Editing | ConfirmingDelete | ChangingPassword


@dataclass(frozen=True)
class LoginResult:
    succeeded: bool
    error: str = ""


@dataclass(frozen=True)
class RegistrationResult:
    succeeded: bool
    field_errors: dict[str, str] = field(default_factory=dict)
    error: str = ""
