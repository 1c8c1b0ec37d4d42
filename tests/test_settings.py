from __future__ import annotations

import pytest

from project_address.app.container import build_container
from project_address.app.settings import get_settings


def test_defaults(monkeypatch):
    for name in ("BUILDINGS_API_URL", "BUILDINGS_CACHE_TTL_SECONDS", "HTTP_TIMEOUT_SECONDS", "LOG_LEVEL", "MCP_PORT"):
        monkeypatch.delenv(name, raising=False)

    s = get_settings()
    assert s.buildings_api_url is None
    assert s.cache_ttl_seconds == 300
    assert s.http_timeout_seconds == 10.0
    assert s.log_level == "INFO"
    assert s.mcp_port == 3334

    c = build_container(s)
    assert c.buildings is None


def test_values_are_cleaned(monkeypatch):
    monkeypatch.setenv("BUILDINGS_API_URL", ' "http://buildings.test/api" ')
    monkeypatch.setenv("BUILDINGS_CACHE_MAXSIZE", "'32'")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    s = get_settings()
    assert s.buildings_api_url == "http://buildings.test/api"
    assert s.cache_maxsize == 32
    assert s.log_level == "DEBUG"

    c = build_container(s)
    assert c.buildings is not None


def test_bad_number_fails_fast(monkeypatch):
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "soon")
    with pytest.raises(ValueError):
        get_settings()
