from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from proposal_pricing.entrypoints.http.app import build_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(build_app(), raise_server_exceptions=False)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_health_is_not_versioned(client: TestClient) -> None:
    # Probes hit the root path; only the pricing API lives under /v1
    assert client.get("/v1/health").status_code == 404


def test_health_does_not_touch_database(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)

    assert client.get("/health").status_code == 200
