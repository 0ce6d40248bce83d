"""Shared fixtures: in-memory gateway, token store, and a manager wired to both."""

from datetime import datetime, timezone

import pytest

from contactbook.application import AuthService, ContactManager
from contactbook.domain import Contact
from contactbook.infrastructure import (
    InMemoryAuthGateway,
    InMemoryContactGateway,
    InMemoryTokenStore,
    TokenSessionOracle,
)


def make_contact(contact_id: str = "1", **overrides) -> Contact:
    values = dict(
        id=contact_id,
        first_name="Jan",
        last_name="Kowalski",
        email="jan@x.pl",
        category="Służbowy",
        subcategory="Klient",
        phone_number="123456789",
        date_of_birth=datetime(2000, 1, 1, tzinfo=timezone.utc),
    )
    values.update(overrides)
    return Contact(**values)


@pytest.fixture
def contacts() -> list[Contact]:
    return [
        make_contact("1"),
        make_contact(
            "2",
            first_name="Anna",
            last_name="Nowak",
            email="anna@x.pl",
            category="Prywatny",
            subcategory=None,
            phone_number="+48 600-100-200",
        ),
    ]


@pytest.fixture
def gateway(contacts) -> InMemoryContactGateway:
    return InMemoryContactGateway(contacts)


@pytest.fixture
def tokens() -> InMemoryTokenStore:
    return InMemoryTokenStore(token="token-123")


@pytest.fixture
def anonymous_tokens() -> InMemoryTokenStore:
    return InMemoryTokenStore()


def build_manager(gateway, tokens) -> ContactManager:
    return ContactManager(
        gateway,
        TokenSessionOracle(tokens),
        auth=AuthService(InMemoryAuthGateway(), tokens),
    )


@pytest.fixture
def manager(gateway, tokens) -> ContactManager:
    return build_manager(gateway, tokens)


@pytest.fixture
def anonymous_manager(gateway, anonymous_tokens) -> ContactManager:
    return build_manager(gateway, anonymous_tokens)
