"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from contactbook.application.auth_service import AuthService
from contactbook.application.contact_manager import ContactManager
from contactbook.application.contact_store import ContactStore
from contactbook.application.dialog_controller import DialogController
from contactbook.application.dto import (
    ChangingPassword,
    Closed,
    ConfirmingDelete,
    DialogState,
    Editing,
    LoginResult,
    RegistrationResult,
    Viewing,
)
from contactbook.application.errors import (
    BackendValidationError,
    GatewayError,
    GatewayUnavailable,
    InvalidCredentials,
)
from contactbook.application.ports import (
    AuthGateway,
    ContactGateway,
    SessionOracle,
    TokenStore,
)
from contactbook.application.validation import (
    validate,
    validate_new_password,
    validate_registration,
)

__all__ = [
    "AuthGateway",
    "AuthService",
    "BackendValidationError",
    "ChangingPassword",
    "Closed",
    "ConfirmingDelete",
    "ContactGateway",
    "ContactManager",
    "ContactStore",
    "DialogController",
    "DialogState",
    "Editing",
    "GatewayError",
    "GatewayUnavailable",
    "InvalidCredentials",
    "LoginResult",
    "RegistrationResult",
    "SessionOracle",
    "TokenStore",
    "Viewing",
    "validate",
    "validate_new_password",
    "validate_registration",
]
