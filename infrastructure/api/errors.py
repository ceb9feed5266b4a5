"""Classified failures raised by the outbound API gateway."""

from typing import Literal, Optional

ErrorKind = Literal["authorization", "validation", "unavailable"]


class ApiError(Exception):
    kind: ErrorKind = "unavailable"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthorizationError(ApiError):
    """401 from the remote API. The session has already been evicted when this is raised."""

    kind: ErrorKind = "authorization"


class ApiValidationError(ApiError):
    """4xx other than 401 (duplicate email, missing field...)."""

    kind: ErrorKind = "validation"


class ApiUnavailableError(ApiError):
    """5xx, timeout or connectivity loss. Retrying is left to the user."""

    kind: ErrorKind = "unavailable"
