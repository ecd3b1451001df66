"""REST API error response models.

Every non-2xx response of the pricing API has this shape.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """One failing field of a rejected request."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "pricing.total",
                "message": "Must be a valid decimal: 12,000",
                "code": "INVALID_DECIMAL",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response.

    `code` is stable and safe to branch on (VALIDATION_ERROR, NOT_FOUND,
    CONFLICT, INVALID_VALUE, INTERNAL_ERROR); `errors` is only present for
    field-level validation failures.
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Proposal with identifier '42' not found", "code": "NOT_FOUND"},
                {"detail": "Pricing session has been disposed", "code": "CONFLICT"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "plan.term_months",
                            "message": "term_months must be > 0",
                            "code": "INVALID_VALUE",
                        },
                    ],
                },
            ]
        }
    )
