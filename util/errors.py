# util/errors.py
from fastapi import HTTPException, status
from util.enums import ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)

    @classmethod
    def of(cls, error: ErrorMessage, reason: str | None = None) -> "AppError":
        message = error.value.message
        if reason:
            message = f"{message}: {reason}"
        return cls(message, error.value.http_status)

    @property
    def message(self) -> str:
        return str(self.detail)


class InvalidArgumentError(AppError):
    """Malformed identifier or missing required field."""


class NotFoundError(AppError):
    """Object absent from the store."""


class VerificationError(AppError):
    """Signature refused by the configured verifier."""


class StoreFailureError(AppError):
    """Backend failure surfaced to the caller; earlier steps are not rolled back."""


class ParseError(AppError):
    """Stored content is not valid structured data."""
