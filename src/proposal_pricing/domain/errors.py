"""Pricing errors.

Raised by the domain and use cases; `entrypoints/http/exception_handlers.py`
turns them into responses by `error_code`. Nothing here knows about HTTP.
"""

from typing import Any


class DomainError(Exception):
    """Base pricing error: a message, a stable `error_code` and keyword context."""

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.error_code, **self.context}


class ValidationError(DomainError):
    """
    Input that cannot be priced.

    `errors` lists per-field failures collected at the HTTP boundary
    (e.g. {"field": "pricing.total", "message": "...", "code": "INVALID_DECIMAL"})
    so a client sees every bad field in one response.
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        self.errors: list[dict[str, str]] | None = errors or None
        default = "Validation failed" if self.errors else "Validation error"
        super().__init__(message or default, **context)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class InvalidPricingInput(ValidationError):
    """Money math was handed a term, rate, factor or amount it cannot use."""


class NotFoundError(DomainError):
    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        where = f" with identifier '{identifier}'" if identifier else ""
        super().__init__(
            f"{resource}{where} not found", resource=resource, identifier=identifier, **context
        )


class SessionStateError(DomainError):
    """Command issued to a pricing session before load() or after dispose()."""

    error_code: str = "CONFLICT"


class InternalError(DomainError):
    error_code: str = "INTERNAL_ERROR"
