"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.http_gateway import HttpAuthGateway, HttpContactGateway
from contactbook.infrastructure.memory_gateway import (
    InMemoryAuthGateway,
    InMemoryContactGateway,
)
from contactbook.infrastructure.token_store import (
    FileTokenStore,
    InMemoryTokenStore,
    TokenSessionOracle,
)

__all__ = [
    "FileTokenStore",
    "HttpAuthGateway",
    "HttpContactGateway",
    "InMemoryAuthGateway",
    "InMemoryContactGateway",
    "InMemoryTokenStore",
    "TokenSessionOracle",
]
