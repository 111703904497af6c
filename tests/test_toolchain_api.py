"""Tests for the toolchain configuration API endpoints."""

import pytest
from fastapi.testclient import TestClient

from toolchain import config
from toolchain.app import app

_KEY = "5f" * 32


@pytest.fixture
def client():
    """Create a test client."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    monkeypatch.delenv("TOOLCHAIN_EXTRA_NETWORKS", raising=False)
    monkeypatch.setattr(config, "ALLOW_PARTIAL", False, raising=False)
    monkeypatch.delenv("POLYGON_RPC_URL", raising=False)
    monkeypatch.delenv("PRIVATE_KEY", raising=False)


@pytest.fixture
def configured_env(monkeypatch):
    monkeypatch.setenv("POLYGON_RPC_URL", "https://polygon-rpc.example/v2")
    monkeypatch.setenv("PRIVATE_KEY", _KEY)


def test_get_toolchain_masks_credentials(client, configured_env):
    response = client.get("/api/toolchain")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["config"] == {
        "solidity": "0.8.9",
        "networks": {
            "polygon": {
                "url": "https://polygon-rpc.example/v2",
                "accounts": ["0x…5f5f"],
            }
        },
    }
    assert _KEY not in response.text


def test_get_toolchain_missing_variables(client):
    response = client.get("/api/toolchain")
    assert response.status_code == 503
    data = response.json()
    assert data["ok"] is False
    assert "POLYGON_RPC_URL" in data["error"]
    assert data["missing"] == [
        {"variable": "POLYGON_RPC_URL", "network": "polygon"},
        {"variable": "PRIVATE_KEY", "network": "polygon"},
    ]


def test_get_toolchain_partial_mode(client, monkeypatch):
    monkeypatch.setattr(config, "ALLOW_PARTIAL", True, raising=False)
    monkeypatch.setenv("POLYGON_RPC_URL", "https://polygon-rpc.example/v2")

    response = client.get("/api/toolchain")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["missing"] == [{"variable": "PRIVATE_KEY", "network": "polygon"}]
    assert data["config"]["networks"]["polygon"]["accounts"] == ["0x…ined"]


def test_validate_endpoint_ok(client, configured_env):
    response = client.get("/api/toolchain/validate")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "missing": [], "problems": []}


def test_validate_endpoint_reports_problems(client, monkeypatch):
    monkeypatch.setenv("POLYGON_RPC_URL", "localhost")
    monkeypatch.setenv("PRIVATE_KEY", "abcd1234")

    data = client.get("/api/toolchain/validate").json()
    assert data["ok"] is False
    assert data["missing"] == []
    assert len(data["problems"]) == 2
    assert "abcd1234" not in " ".join(data["problems"])


@pytest.mark.parametrize(
    "raw, fragment",
    [
        ('{"amoy": {"keys": ["K"]}}', "needs a 'url'"),
        ("{oops", "Invalid JSON for TOOLCHAIN_EXTRA_NETWORKS"),
        ("[1, 2]", "must contain a JSON object"),
    ],
)
@pytest.mark.parametrize("path", ["/api/toolchain", "/api/toolchain/validate", "/api/networks"])
def test_invalid_extra_networks_are_reported(client, configured_env, monkeypatch, raw, fragment, path):
    monkeypatch.setenv("TOOLCHAIN_EXTRA_NETWORKS", raw)

    response = client.get(path)
    assert response.status_code == 500
    data = response.json()
    assert data["ok"] is False
    assert fragment in data["error"]
    assert _KEY not in response.text


def test_get_networks(client, monkeypatch):
    monkeypatch.setenv("POLYGON_RPC_URL", "https://polygon-rpc.example/v2")

    response = client.get("/api/networks")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["networks"] == [
        {
            "name": "polygon",
            "urlVariable": "POLYGON_RPC_URL",
            "keyVariables": ["PRIVATE_KEY"],
            "configured": False,
        }
    ]
    assert data["requiredVariables"] == ["POLYGON_RPC_URL", "PRIVATE_KEY"]


def test_main_serves_app_on_configured_address(monkeypatch):
    from toolchain import __main__ as entry

    calls = []
    monkeypatch.setattr(entry.uvicorn, "run", lambda served, host, port: calls.append((served, host, port)))

    entry.main()

    assert calls == [(app, entry.HOST, entry.PORT)]
