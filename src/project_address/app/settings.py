from __future__ import annotations

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    # Buildings source (optional)
    buildings_api_url: str | None

    # Cache
    cache_ttl_seconds: int
    cache_maxsize: int

    # HTTP
    http_timeout_seconds: float
    http_user_agent: str

    # Logging
    log_level: str

    # MCP server
    mcp_host: str
    mcp_port: int
    mcp_path: str


def _clean(s: str | None) -> str:
    return (s or "").strip().strip('"').strip("'")


def _int(name: str, default: int) -> int:
    v = _clean(os.getenv(name, str(default)))
    return int(v)


def _float(name: str, default: float) -> float:
    v = _clean(os.getenv(name, str(default)))
    return float(v)


def get_settings() -> Settings:
    """
    환경변수(.env 포함)에서 설정을 읽습니다.
    - BUILDINGS_API_URL이 없으면 bbox 기반 건물 조회 기능은 비활성
    """
    return Settings(
        buildings_api_url=_clean(os.getenv("BUILDINGS_API_URL")) or None,
        # cache
        cache_ttl_seconds=_int("BUILDINGS_CACHE_TTL_SECONDS", 300),
        cache_maxsize=_int("BUILDINGS_CACHE_MAXSIZE", 256),
        # http
        http_timeout_seconds=_float("HTTP_TIMEOUT_SECONDS", 10.0),
        http_user_agent=_clean(os.getenv("HTTP_USER_AGENT", "project-address/0.1.0")),
        # logging
        log_level=_clean(os.getenv("LOG_LEVEL", "INFO")).upper() or "INFO",
        # mcp
        mcp_host=_clean(os.getenv("MCP_HOST", "127.0.0.1")),
        mcp_port=_int("MCP_PORT", 3334),
        mcp_path=_clean(os.getenv("MCP_PATH", "/mcp")),
    )
