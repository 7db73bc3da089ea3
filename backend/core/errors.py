"""Error taxonomy shared by the stores, the auth service and the routes."""

from typing import Any

from fastapi import status


class AppError(Exception):
    """Base application error, rendered by the handler registered in ``create_app``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code}


class ValidationError(AppError):
    """Request payload failed one validation step."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, step: str, message: str = "Invalid request data"):
        self.step = step
        super().__init__(message, code="VALIDATION_ERROR")

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["step"] = self.step
        return result


class EmailInUse(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message, code="EMAIL_IN_USE")


class InvalidCredentials(AppError):
    # Same message for unknown email and wrong password.
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class SessionInvalid(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self):
        super().__init__("Session is invalid or expired", code="SESSION_INVALID")


class SessionNotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self):
        super().__init__("Session not found", code="SESSION_NOT_FOUND")


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    MISSING = "missing"
    INVALID_OR_EXPIRED = "invalid_or_expired"

    def __init__(self, reason: str):
        self.reason = reason
        message = "Access token missing" if reason == self.MISSING else "Access token invalid or expired"
        super().__init__(message, code="UNAUTHORIZED")

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["reason"] = self.reason
        return result


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Not allowed"):
        super().__init__(message, code="FORBIDDEN")


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found"):
        super().__init__(message, code="NOT_FOUND")


class StoreUnavailable(AppError):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code="STORE_UNAVAILABLE")


class UnknownError(AppError):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code="UNKNOWN_ERROR")
