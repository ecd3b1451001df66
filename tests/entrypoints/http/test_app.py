"""Unit tests for application wiring: metadata, routers and docs."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from proposal_pricing.entrypoints.http.app import build_app


# ==============================================================================
# Application Creation
# ==============================================================================


def test_build_app_returns_fastapi_instance() -> None:
    app = build_app()

    assert isinstance(app, FastAPI)
    assert app.title == "Proposal Pricing API"
    assert app.version == "0.1.0"


def test_build_app_returns_new_instances() -> None:
    assert build_app() is not build_app()


# ==============================================================================
# Router Registration
# ==============================================================================


def test_routes_are_registered_with_prefixes() -> None:
    paths = {route.path for route in build_app().routes}

    assert "/health" in paths
    assert "/v1/pricing/quote" in paths
    assert "/v1/financing/monthly-payment" in paths
    assert "/v1/proposals/{proposal_id}/offers" in paths


def test_health_is_not_versioned() -> None:
    client = TestClient(build_app())

    assert client.get("/health").status_code == 200
    assert client.get("/v1/health").status_code == 404


# ==============================================================================
# Documentation
# ==============================================================================


def test_openapi_schema_lists_every_endpoint() -> None:
    client = TestClient(build_app())

    schema = client.get("/openapi.json").json()

    assert schema["info"]["title"] == "Proposal Pricing API"
    assert set(schema["paths"]) >= {
        "/health",
        "/v1/pricing/quote",
        "/v1/financing/monthly-payment",
        "/v1/proposals/{proposal_id}/offers",
    }


def test_docs_endpoints_available() -> None:
    client = TestClient(build_app())

    assert client.get("/docs").status_code == 200
    assert client.get("/redoc").status_code == 200
