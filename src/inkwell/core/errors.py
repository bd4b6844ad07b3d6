"""Domain exceptions raised by Inkwell services.

Every exception maps to exactly one HTTP status code. Services raise them and
the application translates them at the boundary (see ``inkwell.main``); no
layer in between recovers from them.
"""

from __future__ import annotations

from fastapi import status


class InkwellError(RuntimeError):
    """Base exception for request-terminal failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def to_payload(self) -> dict[str, object]:
        """Return the JSON body sent to the client."""
        return {"detail": self.detail}


class Unauthenticated(InkwellError):
    """No caller identity where one is required."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthenticated"


class Forbidden(InkwellError):
    """Caller identity present but the capability is missing."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "This action is unauthorized"


class NotFound(InkwellError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ValidationFailed(InkwellError):
    """Input shape or business-rule violation tied to a single attribute."""

    status_code = 422
    default_detail = "The given data was invalid"

    def __init__(self, attribute: str, message: str) -> None:
        self.attribute = attribute
        super().__init__(message)

    def to_payload(self) -> dict[str, object]:
        return {"detail": self.detail, "errors": {self.attribute: [self.detail]}}


__all__ = [
    "InkwellError",
    "Unauthenticated",
    "Forbidden",
    "NotFound",
    "ValidationFailed",
]
