"""Service-level errors. Routes translate these into HTTP responses."""

from fastapi import status


class ServiceError(Exception):
    """Base class for failures raised by the auth, complaint and storage layers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class ValidationError(ServiceError):
    """A required field is missing/blank or a value is outside its allowed set."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthError(ServiceError):
    """Bearer token could not be turned into a known user."""

    status_code = status.HTTP_401_UNAUTHORIZED


class MissingToken(AuthError):
    pass


class MalformedToken(AuthError):
    pass


class InvalidToken(AuthError):
    pass


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(ServiceError):
    """Reading or writing the backing JSON document failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
