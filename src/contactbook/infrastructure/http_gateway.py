"""HTTP implementations of ContactGateway and AuthGateway (httpx, async)."""

import logging

import httpx
from pydantic import ValidationError

from contactbook.application.errors import (
    BackendValidationError,
    GatewayError,
    GatewayUnavailable,
    InvalidCredentials,
)
from contactbook.application.messages import message
from contactbook.application.ports import TokenStore
from contactbook.domain import Contact, ContactSubmission
from contactbook.infrastructure.schemas import (
    ContactBody,
    ContactItem,
    Credentials,
    ErrorBody,
    TokenResponse,
)

logger = logging.getLogger(__name__)

CONTACTS_PATH = "/api/contacts"
LOGIN_PATH = "/api/auth/login"
REGISTER_PATH = "/api/auth/register"


def _structured_error(response: httpx.Response) -> ErrorBody | None:
    """Parse a 400 body of the form {"error": {"message", "field"}}, or None."""
    if response.status_code != 400:
        return None
    try:
        return ErrorBody.model_validate(response.json())
    except (ValueError, ValidationError):
        return None


class _HttpBase:
    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        # No timeout: a slow request only delays the dialog transition.
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=None)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json: dict | None = None,
    ) -> httpx.Response:
        try:
            return await self._client.request(method, path, headers=headers, json=json)
        except httpx.TransportError as exc:
            logger.warning("%s %s unreachable: %s", method, path, exc)
            raise GatewayUnavailable(message("server_unreachable")) from exc


class HttpContactGateway(_HttpBase):
    """Contacts over HTTP/JSON. Reading is public; writes send the bearer token."""

    def __init__(
        self,
        base_url: str,
        tokens: TokenStore,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url, client=client)
        self._tokens = tokens

    def _headers(self) -> dict[str, str]:
        token = self._tokens.load()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def _check(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        structured = _structured_error(response)
        if structured is not None:
            raise BackendValidationError(
                structured.error.message, field=structured.error.field
            )
        logger.warning(
            "%s %s returned %d",
            response.request.method,
            response.request.url.path,
            response.status_code,
        )
        raise GatewayError(message("server_error"), status_code=response.status_code)

    async def create(self, record: ContactSubmission) -> Contact:
        body = ContactBody.from_submission(record).to_json()
        response = await self._send("POST", CONTACTS_PATH, headers=self._headers(), json=body)
        self._check(response)
        try:
            return ContactItem.model_validate(response.json()).to_contact()
        except (ValueError, ValidationError) as exc:
            raise GatewayError(message("server_error"), status_code=response.status_code) from exc

    async def update(self, contact_id: str, record: ContactSubmission) -> None:
        body = ContactBody.from_submission(record).to_json()
        response = await self._send(
            "PUT", f"{CONTACTS_PATH}/{contact_id}", headers=self._headers(), json=body
        )
        self._check(response)

    async def delete(self, contact_id: str) -> None:
        response = await self._send(
            "DELETE", f"{CONTACTS_PATH}/{contact_id}", headers=self._headers()
        )
        self._check(response)

    async def list(self):
        response = await self._send("GET", f"{CONTACTS_PATH}/", headers=self._headers())
        self._check(response)
        try:
            items = response.json()
            return [ContactItem.model_validate(item).to_contact() for item in items]
        except (TypeError, ValueError, ValidationError) as exc:
            raise GatewayError(message("server_error"), status_code=response.status_code) from exc


class HttpAuthGateway(_HttpBase):
    """Login and registration. Neither call sends a token."""

    async def login(self, username: str, password: str) -> str:
        body = Credentials(username=username, password=password).model_dump(by_alias=True)
        response = await self._send("POST", LOGIN_PATH, json=body)
        if response.status_code == 401:
            raise InvalidCredentials(message("invalid_credentials"), status_code=401)
        if not response.is_success:
            raise GatewayError(message("login_failed"), status_code=response.status_code)
        try:
            return TokenResponse.model_validate(response.json()).access_token
        except (ValueError, ValidationError) as exc:
            raise GatewayError(message("login_failed"), status_code=response.status_code) from exc

    async def register(self, username: str, password: str) -> None:
        body = Credentials(username=username, password=password).model_dump(by_alias=True)
        response = await self._send("POST", REGISTER_PATH, json=body)
        if response.is_success:
            return
        structured = _structured_error(response)
        if structured is not None:
            raise BackendValidationError(structured.error.message, field=structured.error.field)
        raise GatewayError(message("register_failed"), status_code=response.status_code)
