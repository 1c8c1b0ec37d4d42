from __future__ import annotations

import httpx
import pytest

from project_address.core.errors import ValidationError
from project_address.core.models import AdminSelection, BoundingBox
from project_address.core.text import parse_bbox
from project_address.infra.cache import Cache
from project_address.infra.http import HttpClient
from project_address.infra.providers.buildings import BuildingsProvider
from project_address.services.address_service import AddressService

ADMIN = AdminSelection(country="LAO", state="VTE", city="Central", village="V1")


def test_build_many_keeps_failed_features():
    service = AddressService()
    items = service.build_many(
        [
            {"type": "Feature", "id": 7, "geometry": {"type": "Point", "coordinates": [102.6, 17.97]}},
            {"type": "Feature", "properties": {"id": "b-2"}, "geometry": {"type": "Polygon", "coordinates": [[]]}},
            "not-a-feature",
        ],
        ADMIN,
    )

    assert [it["id"] for it in items] == [7, "b-2", None]
    assert items[0]["address"]["addr"].startswith("LAO-VTE-Central-V1-")
    assert items[1]["address"] is None
    assert items[2]["address"] is None


def test_build_logs_failure(caplog):
    service = AddressService()
    with caplog.at_level("WARNING"):
        assert service.build({"type": "Feature", "geometry": None}, ADMIN) is None
    assert "Failed to generate address" in caplog.text


def test_build_for_bbox_requires_provider():
    with pytest.raises(ValidationError):
        AddressService().build_for_bbox(parse_bbox("0,0,1,1"), 17, ADMIN)


def test_build_for_bbox_encodes_fetched_buildings():
    fc = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"id": "b-1"},
                "geometry": {"type": "Polygon", "coordinates": [[[0, 0], [2, 0], [2, 2], [0, 2], [0, 0]]]},
            }
        ],
    }
    http = HttpClient(
        timeout_seconds=1.0,
        user_agent="test",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=fc)),
    )
    provider = BuildingsProvider(http=http, api_url="http://buildings.test", cache=Cache(maxsize=4, ttl_seconds=60))
    service = AddressService(buildings_provider=provider)

    items = service.build_for_bbox(BoundingBox(-1, -1, 3, 3), 17, ADMIN)
    assert len(items) == 1
    assert items[0]["id"] == "b-1"
    assert 1 <= items[0]["address"]["blockNo"] <= 100000


def test_parse_bbox():
    bbox = parse_bbox(" 102.59, 17.96,102.61 ,17.98 ")
    assert bbox == BoundingBox(102.59, 17.96, 102.61, 17.98)
    assert bbox.to_query() == "102.59,17.96,102.61,17.98"


@pytest.mark.parametrize("raw", ["", "1,2,3", "a,b,c,d", "0,0,nan,1", "1,0,0,1", "0,1,1,1"])
def test_parse_bbox_rejects_bad_input(raw):
    with pytest.raises(ValidationError):
        parse_bbox(raw)
