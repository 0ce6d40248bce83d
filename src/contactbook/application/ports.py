"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from contactbook.domain import Contact, ContactSubmission


class ContactGateway(Protocol):
    """Backend access for contacts. Failures raise GatewayError subclasses."""

    async def list(self) -> list[Contact]:
        """Return all contacts in server order."""
        ...

    async def create(self, record: ContactSubmission) -> Contact:
        """Create a contact and return it as stored by the backend."""
        ...

    async def update(self, contact_id: str, record: ContactSubmission) -> None:
        """Replace all editable fields of the contact."""
        ...

    async def delete(self, contact_id: str) -> None:
        """Remove the contact."""
        ...


class AuthGateway(Protocol):
    """Backend access for accounts."""

    async def login(self, username: str, password: str) -> str:
        """Return the access token for valid credentials."""
        ...

    async def register(self, username: str, password: str) -> None:
        """Create an account."""
        ...


class TokenStore(Protocol):
    """Durable storage for the single access token."""

    def load(self) -> str | None:
        ...

    def save(self, token: str) -> None:
        ...

    def clear(self) -> None:
        ...


class SessionOracle(Protocol):
    """Answers whether the current caller is authenticated."""

    def is_authenticated(self) -> bool:
        ...
