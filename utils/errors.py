"""
utils/errors.py

Error types raised while handling a generation request. Each carries the
HTTP status and the plain-text message returned to the client.
"""


class FrontendError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FrontendError):
    """A form field is missing, malformed or out of range."""

    status_code = 400


class BackendError(FrontendError):
    """The payload could not be encoded or the backend call failed."""

    status_code = 500
