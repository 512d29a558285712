"""HTTP-facing error taxonomy raised by route handlers."""

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)

from app.errors.base import BaseAppError


class UnauthorizedError(BaseAppError):
    """Raised when the request carries no valid session."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class ForbiddenError(BaseAppError):
    """Raised when the session is valid but its role is insufficient."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


class NotFoundError(BaseAppError):
    """Raised when the target resource does not exist."""

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class ValidationFailedError(BaseAppError):
    """Raised when input fails validation. Carries a field -> message map."""

    def __init__(
        self,
        errors: dict[str, str] | None = None,
        detail: str = "Validation failed",
    ) -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)
        self.errors = errors or {}


class ConflictError(BaseAppError):
    """Raised when a uniqueness rule would be violated."""

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(detail, HTTP_409_CONFLICT)
