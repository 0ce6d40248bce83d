"""
Contact book client core: clean-architecture layout.

- domain: entities (Contact, ContactDraft, ContactSubmission). No outer dependencies.
- application: use cases (ContactManager, DialogController, ContactStore, AuthService),
  ports (ContactGateway, AuthGateway, TokenStore, SessionOracle), validation, DTOs.
- infrastructure: adapters (HttpContactGateway, InMemoryContactGateway, FileTokenStore).
"""

from contactbook.application import (
    AuthService,
    ChangingPassword,
    Closed,
    ConfirmingDelete,
    ContactManager,
    Editing,
    GatewayError,
    Viewing,
    validate,
)
from contactbook.domain import Contact, ContactDraft, ContactSubmission
from contactbook.infrastructure import (
    FileTokenStore,
    HttpAuthGateway,
    HttpContactGateway,
    InMemoryContactGateway,
    TokenSessionOracle,
)

__all__ = [
    "AuthService",
    "ChangingPassword",
    "Closed",
    "ConfirmingDelete",
    "Contact",
    "ContactDraft",
    "ContactManager",
    "ContactSubmission",
    "Editing",
    "FileTokenStore",
    "GatewayError",
    "HttpAuthGateway",
    "HttpContactGateway",
    "InMemoryContactGateway",
    "TokenSessionOracle",
    "Viewing",
    "validate",
]
