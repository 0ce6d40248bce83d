"""Gateway failures. Raised by infrastructure adapters, caught at the application boundary."""


class GatewayError(Exception):
    """A backend call failed. message is safe to show to the user."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GatewayUnavailable(GatewayError):
    """The backend could not be reached at all."""


class InvalidCredentials(GatewayError):
    """Login rejected with 401."""


class BackendValidationError(GatewayError):
    """400 with a structured body: {"error": {"message": ..., "field": ...}}."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message, status_code=400)
        self.field = field
