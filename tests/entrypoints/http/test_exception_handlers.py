"""Tests for FastAPI exception handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from proposal_pricing.domain.errors import (
    DomainError,
    InternalError,
    InvalidPricingInput,
    NotFoundError,
    SessionStateError,
    ValidationError,
)
from proposal_pricing.entrypoints.http.exception_handlers import register_exception_handlers


@pytest.fixture
def app() -> FastAPI:
    """Minimal app whose routes raise each kind of error."""
    test_app = FastAPI()
    register_exception_handlers(test_app)

    @test_app.get("/validation-error")
    def raise_validation_error() -> None:
        raise ValidationError("Validation failed")

    @test_app.get("/validation-error-with-fields")
    def raise_validation_error_with_fields() -> None:
        raise ValidationError(
            errors=[
                {"field": "pricing.total", "message": "Must be a valid decimal: x", "code": "INVALID_DECIMAL"},
                {"field": "pricing.subtotal", "message": "Must be a valid decimal: y", "code": "INVALID_DECIMAL"},
            ]
        )

    @test_app.get("/invalid-pricing-input")
    def raise_invalid_pricing_input() -> None:
        raise InvalidPricingInput("term_months must be > 0", term_months=0)

    @test_app.get("/not-found-error")
    def raise_not_found_error() -> None:
        raise NotFoundError("Proposal", "42")

    @test_app.get("/session-state-error")
    def raise_session_state_error() -> None:
        raise SessionStateError("Pricing session has been disposed")

    @test_app.get("/internal-error")
    def raise_internal_error() -> None:
        raise InternalError("Unexpected condition")

    @test_app.get("/generic-domain-error")
    def raise_generic_domain_error() -> None:
        raise DomainError("Something domain-specific")

    @test_app.get("/value-error")
    def raise_value_error() -> None:
        raise ValueError("Invalid decimal format")

    @test_app.get("/unexpected-error")
    def raise_unexpected_error() -> None:
        raise RuntimeError("Something went wrong")

    @test_app.get("/typed/{count}")
    def typed(count: int) -> dict:
        return {"count": count}

    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


class TestDomainErrorHandler:
    def test_validation_error_returns_422(self, client: TestClient) -> None:
        response = client.get("/validation-error")

        assert response.status_code == 422
        assert response.json() == {"detail": "Validation failed", "code": "VALIDATION_ERROR"}

    def test_field_errors_are_returned(self, client: TestClient) -> None:
        response = client.get("/validation-error-with-fields")

        assert response.status_code == 422
        data = response.json()
        assert data["detail"] == "Validation failed"
        assert [e["field"] for e in data["errors"]] == ["pricing.total", "pricing.subtotal"]

    def test_invalid_pricing_input_returns_422(self, client: TestClient) -> None:
        response = client.get("/invalid-pricing-input")

        assert response.status_code == 422
        assert response.json() == {"detail": "term_months must be > 0", "code": "VALIDATION_ERROR"}

    def test_not_found_returns_404(self, client: TestClient) -> None:
        response = client.get("/not-found-error")

        assert response.status_code == 404
        assert response.json() == {"detail": "Proposal with identifier '42' not found", "code": "NOT_FOUND"}

    def test_session_state_error_returns_409(self, client: TestClient) -> None:
        response = client.get("/session-state-error")

        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"

    def test_internal_error_returns_500(self, client: TestClient) -> None:
        response = client.get("/internal-error")

        assert response.status_code == 500
        assert response.json() == {"detail": "Unexpected condition", "code": "INTERNAL_ERROR"}

    def test_unmapped_code_returns_400(self, client: TestClient) -> None:
        response = client.get("/generic-domain-error")

        assert response.status_code == 400
        assert response.json()["code"] == "DOMAIN_ERROR"


class TestRequestValidationErrorHandler:
    def test_path_type_error_returns_structured_422(self, client: TestClient) -> None:
        response = client.get("/typed/abc")

        assert response.status_code == 422
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert data["detail"] == "Invalid request parameters"
        assert data["errors"][0]["field"] == "count"


class TestFallbackHandlers:
    def test_value_error_returns_422(self, client: TestClient) -> None:
        response = client.get("/value-error")

        assert response.status_code == 422
        assert response.json() == {"detail": "Invalid decimal format", "code": "INVALID_VALUE"}

    def test_unexpected_error_returns_generic_500(self, client: TestClient) -> None:
        response = client.get("/unexpected-error")

        assert response.status_code == 500
        assert response.json() == {"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"}
