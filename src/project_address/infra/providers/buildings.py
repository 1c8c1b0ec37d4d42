from __future__ import annotations

import logging
import math
from typing import Any

from project_address.core.errors import UpstreamError
from project_address.core.models import BoundingBox
from project_address.infra.cache import Cache
from project_address.infra.http import HttpClient

log = logging.getLogger(__name__)


def _cache_key(bbox: BoundingBox, zoom: int) -> str:
    # 뷰포트가 조금씩 흔들려도 같은 키가 나오도록 소수 3자리로 반올림 (half-up)
    edges = (bbox.min_lon, bbox.min_lat, bbox.max_lon, bbox.max_lat)
    return "buildings:" + ",".join(str(math.floor(v * 1000 + 0.5) / 1000) for v in edges) + f":{zoom}"


class BuildingsProvider:
    """
    bbox/zoom 기준으로 건물 footprint FeatureCollection을 가져옵니다.
    - GET {api_url}?bbox=minLon,minLat,maxLon,maxLat&zoom=z
    - 응답은 GeoJSON FeatureCollection을 기대
    """

    def __init__(self, *, http: HttpClient, api_url: str, cache: Cache) -> None:
        self._http = http
        self._api_url = api_url
        self._cache = cache

    def fetch(self, bbox: BoundingBox, zoom: int) -> dict[str, Any]:
        cache_key = _cache_key(bbox, zoom)
        cached = self._cache.get(cache_key)
        if cached is not None:
            log.debug("Cache hit for buildings: %s", cache_key)
            return cached  # type: ignore[return-value]

        params = {"bbox": bbox.to_query(), "zoom": str(zoom)}
        payload = self._http.get_json(self._api_url, params=params)

        if not isinstance(payload, dict) or payload.get("type") != "FeatureCollection":
            log.error("Buildings API returned non-FeatureCollection payload")
            raise UpstreamError("Buildings API did not return a GeoJSON FeatureCollection")

        features = payload.get("features")
        if not isinstance(features, list):
            raise UpstreamError("Buildings API FeatureCollection has no features array")

        log.info("Fetched %d buildings for bbox=%s zoom=%s", len(features), params["bbox"], zoom)
        self._cache.set(cache_key, payload)
        return payload
