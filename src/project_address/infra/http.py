from __future__ import annotations

import logging
from typing import Any

import httpx

from project_address.core.errors import UpstreamError

log = logging.getLogger(__name__)


class HttpClient:
    def __init__(
        self,
        *,
        timeout_seconds: float,
        user_agent: str,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    def get_json(self, url: str, *, params: dict[str, Any]) -> Any:
        try:
            r = self._client.get(url, params=params)
            r.raise_for_status()
            return r.json()
        except httpx.HTTPError as e:
            log.warning("HTTP error: %s", e)
            raise UpstreamError(f"Upstream HTTP error: {e}") from e
        except ValueError as e:
            # JSON 디코딩 실패
            log.warning("Invalid JSON from %s: %s", url, e)
            raise UpstreamError(f"Upstream returned invalid JSON: {e}") from e

    def close(self) -> None:
        self._client.close()
