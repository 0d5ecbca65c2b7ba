# productapi/errors.py
from enum import IntEnum
from typing import Optional


class ErrorKind(IntEnum):
    """Failure kinds the API reports. Each value is the HTTP status it maps to."""

    VALIDATION = 400
    FORBIDDEN = 403
    NOT_FOUND = 404
    INTERNAL = 500


class APIError(Exception):
    kind = ErrorKind.INTERNAL
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return int(self.kind)


class ValidationError(APIError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid product data"


class AuthorizationError(APIError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Forbidden - Invalid API Key"


class NotFoundError(APIError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Product not found"


class InternalError(APIError):
    kind = ErrorKind.INTERNAL
