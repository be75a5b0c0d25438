"""Error types raised by the admin console client."""


class AdminClientError(Exception):
    """Base error for failed backend interactions.

    ``backend_message`` holds the text from the response's error payload,
    when the backend sent one.
    """

    def __init__(self, message: str, backend_message: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.backend_message = backend_message


class AuthError(AdminClientError):
    """Invalid credentials, non-admin role, or an expired token."""


class NetworkError(AdminClientError):
    """Transport failure before a response was received."""


class ServerError(AdminClientError):
    """Non-2xx response or a payload that failed schema validation."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        backend_message: str | None = None,
    ) -> None:
        super().__init__(message, backend_message=backend_message)
        self.status_code = status_code


SCHEMA_MISMATCH = "schema_mismatch"
