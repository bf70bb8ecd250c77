from typing import Optional


class ServiceError(Exception):
    """Base error carrying the HTTP status the web layer maps it to."""

    status_code = 500
    default_message = "internal error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidToken(ServiceError):
    # Recovered into the anonymous state by the auth middleware, never surfaced
    status_code = 401
    default_message = "invalid token"


class AuthFailed(ServiceError):
    status_code = 401
    default_message = "invalid credentials"


class Unauthorized(ServiceError):
    status_code = 401
    default_message = "unauthorized"


class Forbidden(ServiceError):
    status_code = 403
    default_message = "forbidden"


class NotFound(ServiceError):
    status_code = 404
    default_message = "not found"


class Conflict(ServiceError):
    status_code = 409
    default_message = "conflict"


class StorageUnavailable(ServiceError):
    status_code = 500
    default_message = "storage unavailable"
