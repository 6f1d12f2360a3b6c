"""Errors raised by the files_manager core.

Every error carries the HTTP status it maps to and the message sent back
to the client as ``{"error": message}``.
"""


class FilesManagerError(Exception):
    status_code = 500
    default_message = "Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(FilesManagerError):
    """Missing or invalid credentials, token, or user."""

    status_code = 401
    default_message = "Unauthorized"


class ValidationError(FilesManagerError):
    """Malformed request parameters; the message names the problem."""

    status_code = 400
    default_message = "Bad request"


class NotFound(FilesManagerError):
    """Unknown id, or a record the caller is not allowed to see."""

    status_code = 404
    default_message = "Not found"


class Conflict(FilesManagerError):
    status_code = 400
    default_message = "Already exist"


class IOFailure(FilesManagerError):
    """Blob could not be decoded or written."""

    status_code = 400


class DomainError(FilesManagerError):
    """Operation does not apply to the record's type."""

    status_code = 400
