"""Login, logout, and registration. Writes the token store; never reads contacts."""

import logging

from contactbook.application.dto import LoginResult, RegistrationResult
from contactbook.application.errors import (
    BackendValidationError,
    GatewayError,
    GatewayUnavailable,
    InvalidCredentials,
)
from contactbook.application.messages import message
from contactbook.application.ports import AuthGateway, TokenStore
from contactbook.application.validation import validate_registration

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, gateway: AuthGateway, tokens: TokenStore) -> None:
        self._gateway = gateway
        self._tokens = tokens

    async def login(self, username: str, password: str) -> LoginResult:
        """Exchange credentials for a token and persist it."""
        try:
            token = await self._gateway.login(username, password)
        except InvalidCredentials:
            logger.info("Login rejected for %s", username)
            return LoginResult(succeeded=False, error=message("invalid_credentials"))
        except GatewayUnavailable:
            return LoginResult(succeeded=False, error=message("server_unreachable"))
        except GatewayError as exc:
            logger.warning("Login failed: %s", exc.message)
            return LoginResult(succeeded=False, error=message("login_failed"))
        self._tokens.save(token)
        logger.info("Logged in as %s", username)
        return LoginResult(succeeded=True)

    def logout(self) -> None:
        self._tokens.clear()
        logger.info("Logged out")

    async def register(
        self, username: str, password: str, confirm_password: str
    ) -> RegistrationResult:
        """Create an account. Backend field errors map onto username/password case-insensitively."""
        field_errors = validate_registration(username, password, confirm_password)
        if field_errors:
            return RegistrationResult(succeeded=False, field_errors=field_errors)
        try:
            await self._gateway.register(username, password)
        except BackendValidationError as exc:
            field = (exc.field or "").lower()
            if field:
                return RegistrationResult(succeeded=False, field_errors={field: exc.message})
            return RegistrationResult(succeeded=False, error=exc.message)
        except GatewayUnavailable:
            return RegistrationResult(succeeded=False, error=message("server_unreachable"))
        except GatewayError as exc:
            logger.warning("Registration failed: %s", exc.message)
            return RegistrationResult(succeeded=False, error=message("register_failed"))
        logger.info("Registered %s", username)
        return RegistrationResult(succeeded=True)
