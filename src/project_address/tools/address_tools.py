from __future__ import annotations

import math
from typing import Any

from fastmcp import FastMCP
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from project_address.app.container import Container
from project_address.core.errors import UpstreamError, ValidationError
from project_address.core.models import AdminSelection
from project_address.core.text import parse_bbox
from project_address.core.tiles import ADDRESS_ZOOM, block_number, lonlat_to_tile, morton
from project_address.services.address_service import AddressService

FAILED_MESSAGE = "주소를 생성할 수 없습니다: geometry가 없거나 유효한 좌표가 없습니다."


class AdminArgs(BaseModel):
    country: str = Field("", description="국가 코드/이름 (예: LAO)")
    state: str = Field("", description="주/도 코드/이름 (예: VTE)")
    city: str = Field("", description="시/군 코드/이름")
    village: str = Field("", description="마을 코드/이름")

    def to_selection(self) -> AdminSelection:
        return AdminSelection(country=self.country, state=self.state, city=self.city, village=self.village)


class BboxArgs(AdminArgs):
    bbox: str = Field(..., description="'minLon,minLat,maxLon,maxLat'")
    zoom: int = Field(ADDRESS_ZOOM, ge=0, le=22, description="건물 조회 시 사용할 지도 줌 레벨")


def _error(code: str, message: str, **extra: Any) -> dict[str, Any]:
    return {"common": {"errorCode": code, "errorMessage": message}, **extra}


def _build_one(service: AddressService, feature: dict[str, Any] | None, admin: AdminSelection) -> dict[str, Any]:
    result = service.build(feature, admin)
    if result is None:
        return {"address": None, "message": FAILED_MESSAGE}
    return {"address": result.to_dict(), "message": None}


def _extract_features(feature_collection: Any) -> list[Any]:
    """FeatureCollection 또는 Feature 리스트 둘 다 허용."""
    if isinstance(feature_collection, list):
        return feature_collection
    if isinstance(feature_collection, dict):
        if feature_collection.get("type") == "Feature":
            return [feature_collection]
        features = feature_collection.get("features")
        if isinstance(features, list):
            return features
    return []


def _build_in_bbox(service: AddressService, args: BboxArgs) -> dict[str, Any]:
    try:
        bbox = parse_bbox(args.bbox)
    except ValidationError as e:
        return _error("INVALID_BBOX", str(e), items=[])

    try:
        items = service.build_for_bbox(bbox, args.zoom, args.to_selection())
    except ValidationError as e:
        return _error("NO_BUILDINGS_PROVIDER", str(e), items=[])
    except UpstreamError as e:
        return _error("UPSTREAM_ERROR", str(e), items=[])

    return {"items": items, "meta": {"bbox": bbox.to_query(), "zoom": args.zoom, "count": len(items)}}


def _locate(lon: float, lat: float) -> dict[str, Any]:
    if not (math.isfinite(lon) and math.isfinite(lat)):
        return _error("INVALID_COORDINATES", "lon/lat must be finite numbers", tile=None)

    tile = lonlat_to_tile(lon, lat, ADDRESS_ZOOM)
    return {
        "tile": {"z": ADDRESS_ZOOM, "x": tile.x, "y": tile.y},
        "morton": morton(tile.x, tile.y),
        "blockNo": block_number(tile),
    }


def register_address_tools(mcp: FastMCP, container: Container) -> None:
    address_service = container.address_service

    @mcp.tool(
        name="build_address",
        description=(
            "선택한 건물 GeoJSON Feature와 행정구역(국가/주/시/마을)으로 "
            "'{country}-{state}-{city}-{village}-{blockNo}.{buildingNo}' 형식의 결정적 주소를 생성합니다."
        ),
    )
    def build_address(
        feature: dict[str, Any],
        country: str = "",
        state: str = "",
        city: str = "",
        village: str = "",
    ) -> dict[str, Any]:
        """
        blockNo: bbox 중점의 z17 타일을 Morton 인코딩한 값 (1..100000)
        buildingNo: geometry JSON 텍스트의 DJB2 해시 (1..1000)
        """
        admin = AdminArgs(country=country, state=state, city=city, village=village).to_selection()
        return _build_one(address_service, feature, admin)

    @mcp.tool(
        name="build_addresses",
        description="FeatureCollection(또는 Feature 리스트)의 모든 건물에 대해 주소를 일괄 생성합니다.",
    )
    def build_addresses(
        feature_collection: dict[str, Any] | list[dict[str, Any]],
        country: str = "",
        state: str = "",
        city: str = "",
        village: str = "",
    ) -> dict[str, Any]:
        admin = AdminArgs(country=country, state=state, city=city, village=village).to_selection()
        items = address_service.build_many(_extract_features(feature_collection), admin)
        return {"items": items}

    @mcp.tool(
        name="build_addresses_in_bbox",
        description=(
            "bbox/zoom으로 건물 footprint를 조회(BUILDINGS_API_URL)한 뒤 각 건물의 주소를 생성합니다."
        ),
    )
    def build_addresses_in_bbox(
        bbox: str,
        zoom: int = ADDRESS_ZOOM,
        country: str = "",
        state: str = "",
        city: str = "",
        village: str = "",
    ) -> dict[str, Any]:
        try:
            args = BboxArgs(bbox=bbox, zoom=zoom, country=country, state=state, city=city, village=village)
        except PydanticValidationError as e:
            return _error("INVALID_ARGS", str(e), items=[])
        return _build_in_bbox(address_service, args)

    @mcp.tool(
        name="locate_tile",
        description="경도/위도가 속한 z17 타일 인덱스와 블록 번호를 반환합니다(진단용).",
    )
    def locate_tile(lon: float, lat: float) -> dict[str, Any]:
        return _locate(lon, lat)
