from __future__ import annotations

import httpx
import pytest

from project_address.core.errors import UpstreamError
from project_address.core.models import BoundingBox
from project_address.infra.cache import Cache
from project_address.infra.http import HttpClient
from project_address.infra.providers.buildings import BuildingsProvider, _cache_key

API_URL = "http://buildings.test/api/buildings"
BBOX = BoundingBox(min_lon=102.59, min_lat=17.96, max_lon=102.61, max_lat=17.98)


def _fc(n: int = 2) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"id": f"b-{i}"},
                "geometry": {"type": "Point", "coordinates": [102.6 + i * 0.001, 17.97]},
            }
            for i in range(n)
        ],
    }


def _provider(handler) -> BuildingsProvider:
    http = HttpClient(timeout_seconds=1.0, user_agent="test", transport=httpx.MockTransport(handler))
    return BuildingsProvider(http=http, api_url=API_URL, cache=Cache(maxsize=16, ttl_seconds=60))


def test_fetch_sends_bbox_and_zoom():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_fc())

    fc = _provider(handler).fetch(BBOX, 17)

    assert len(fc["features"]) == 2
    assert seen[0].url.params["bbox"] == "102.59,17.96,102.61,17.98"
    assert seen[0].url.params["zoom"] == "17"
    assert seen[0].headers["User-Agent"] == "test"


def test_fetch_caches_by_rounded_viewport():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=_fc())

    provider = _provider(handler)
    provider.fetch(BBOX, 17)
    # 소수 3자리 반올림 후 같은 뷰포트
    nudged = BoundingBox(min_lon=102.5901, min_lat=17.9601, max_lon=102.6099, max_lat=17.9799)
    provider.fetch(nudged, 17)
    assert len(calls) == 1

    provider.fetch(BBOX, 16)
    assert len(calls) == 2


def test_cache_key_rounds_half_up():
    # 1.0625 * 1000 == 1062.5 (정확히 표현됨) -> 1063, 뷰포트 키는 Math.round와 같은 방향
    exact_half = BoundingBox(min_lon=0.0625, min_lat=0.1875, max_lon=1.0625, max_lat=1.1875)
    rounded = BoundingBox(min_lon=0.063, min_lat=0.188, max_lon=1.063, max_lat=1.188)
    assert _cache_key(exact_half, 17) == _cache_key(rounded, 17)
    assert _cache_key(exact_half, 17) == "buildings:0.063,0.188,1.063,1.188:17"


def test_fetch_rejects_non_feature_collection():
    provider = _provider(lambda request: httpx.Response(200, json={"type": "Feature"}))
    with pytest.raises(UpstreamError):
        provider.fetch(BBOX, 17)


def test_fetch_wraps_http_errors():
    provider = _provider(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(UpstreamError):
        provider.fetch(BBOX, 17)


def test_fetch_wraps_invalid_json():
    provider = _provider(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(UpstreamError):
        provider.fetch(BBOX, 17)
