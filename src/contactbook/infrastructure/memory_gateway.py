"""In-memory implementation of ContactGateway and AuthGateway (no backend)."""

import uuid
from dataclasses import replace
from datetime import datetime

from contactbook.application.errors import (
    BackendValidationError,
    GatewayError,
    InvalidCredentials,
)
from contactbook.domain import Contact, ContactSubmission
from contactbook.domain.entities import CATEGORY_PRIVATE


def _contact_from(contact_id: str, record: ContactSubmission) -> Contact:
    dob = None
    if record.date_of_birth:
        dob = datetime.fromisoformat(record.date_of_birth.replace("Z", "+00:00"))
    return Contact(
        id=contact_id,
        first_name=record.first_name,
        last_name=record.last_name,
        email=record.email,
        category=record.category,
        subcategory=None if record.category == CATEGORY_PRIVATE else record.subcategory,
        phone_number=record.phone_number,
        date_of_birth=dob,
    )


class InMemoryContactGateway:
    """Stores contacts in memory. Order preserved by insertion.

    Every call is appended to calls as (operation, args). fail_next(op, exc)
    makes the next call of that operation raise exc instead.
    """

    def __init__(self, contacts=()) -> None:
        self._by_id: dict[str, Contact] = {}
        self._order: list[str] = []
        self.passwords: dict[str, str] = {}  # contact id -> last password submitted
        self.submissions: list[ContactSubmission] = []
        self.calls: list[tuple[str, tuple]] = []
        self._failures: dict[str, GatewayError] = {}
        for contact in contacts:
            self._by_id[contact.id] = contact
            self._order.append(contact.id)

    def fail_next(self, operation: str, exc: GatewayError) -> None:
        self._failures[operation] = exc

    def _enter(self, operation: str, *args) -> None:
        self.calls.append((operation, args))
        exc = self._failures.pop(operation, None)
        if exc is not None:
            raise exc

    def call_count(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)

    def _require(self, contact_id: str) -> Contact:
        contact = self._by_id.get(contact_id)
        if contact is None:
            raise GatewayError("Contact not found", status_code=404)
        return contact

    async def create(self, record: ContactSubmission) -> Contact:
        self._enter("create", record)
        self.submissions.append(record)
        contact = _contact_from(str(uuid.uuid4()), record)
        self._by_id[contact.id] = contact
        self._order.append(contact.id)
        if record.password:
            self.passwords[contact.id] = record.password
        return contact

    async def update(self, contact_id: str, record: ContactSubmission) -> None:
        self._enter("update", contact_id, record)
        self.submissions.append(record)
        self._require(contact_id)
        self._by_id[contact_id] = _contact_from(contact_id, record)
        if record.password:
            self.passwords[contact_id] = record.password

    async def delete(self, contact_id: str) -> None:
        self._enter("delete", contact_id)
        self._require(contact_id)
        del self._by_id[contact_id]
        self._order.remove(contact_id)
        self.passwords.pop(contact_id, None)

    async def list(self):
        self._enter("list")
        return [replace(self._by_id[cid]) for cid in self._order]


class InMemoryAuthGateway:
    """Accounts in memory. Tokens are opaque random strings."""

    def __init__(self) -> None:
        self._accounts: dict[str, str] = {}

    async def register(self, username: str, password: str) -> None:
        if not (username or "").strip():
            raise BackendValidationError("Username is required.", field="Username")
        if username in self._accounts:
            raise BackendValidationError("Username is already taken.", field="Username")
        if len(password or "") < 6:
            raise BackendValidationError(
                "Password must be at least 6 characters.", field="Password"
            )
        self._accounts[username] = password

    async def login(self, username: str, password: str) -> str:
        if username not in self._accounts or self._accounts[username] != password:
            raise InvalidCredentials("Invalid credentials", status_code=401)
        return uuid.uuid4().hex
