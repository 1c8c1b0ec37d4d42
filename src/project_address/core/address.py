from __future__ import annotations

from typing import Any, Mapping

from project_address.core.geometry import centroid_of_geometry
from project_address.core.hashing import building_number
from project_address.core.models import AddressResult, AdminSelection
from project_address.core.tiles import ADDRESS_ZOOM, block_number, lonlat_to_tile


def format_address(admin: AdminSelection, block_no: int, building_no: int) -> str:
    # 빈 행정구역 값은 빈 세그먼트로 그대로 남김 (예: "LAO--Central-V1-12.3")
    return f"{admin.country}-{admin.state}-{admin.city}-{admin.village}-{block_no}.{building_no}"


def build_address(
    feature: Mapping[str, Any] | None,
    admin: AdminSelection | Mapping[str, Any] | None,
) -> AddressResult | None:
    """
    선택된 건물 feature와 행정구역 선택값으로 주소 문자열을 만듭니다.

    Args:
        feature: GeoJSON Feature (dict). geometry 필드가 필요합니다.
        admin: AdminSelection 또는 country/state/city/village 키를 가진 dict

    Returns:
        AddressResult, geometry가 없거나 대표점을 구할 수 없으면 None
    """
    if not isinstance(feature, Mapping):
        return None
    geometry = feature.get("geometry")
    if not geometry:
        return None

    centroid = centroid_of_geometry(geometry)
    if centroid is None:
        return None

    tile = lonlat_to_tile(centroid.lon, centroid.lat, ADDRESS_ZOOM)

    if not isinstance(admin, AdminSelection):
        admin = AdminSelection.from_mapping(admin)

    block_no = block_number(tile)
    building_no = building_number(geometry)

    return AddressResult(
        addr=format_address(admin, block_no, building_no),
        block_no=block_no,
        building_no=building_no,
    )
