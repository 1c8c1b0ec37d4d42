from __future__ import annotations

import math
from typing import Any

from project_address.core.models import BoundingBox, Centroid

# GeometryCollection은 coordinates 대신 geometries를 가집니다.
COORDINATE_TYPES = frozenset(
    {"MultiPoint", "LineString", "MultiLineString", "Polygon", "MultiPolygon"}
)


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _to_float(v: Any) -> float:
    # JSON의 아주 큰 정수는 double로 표현되지 않음 -> inf 취급
    try:
        return float(v)
    except OverflowError:
        return math.inf


def _is_position(node: Any) -> bool:
    return (
        isinstance(node, (list, tuple))
        and len(node) >= 2
        and _is_number(node[0])
        and _is_number(node[1])
    )


def bbox_from_coords(coords: Any) -> BoundingBox | None:
    """
    중첩된 좌표 배열을 전부 훑어 bbox를 만듭니다.

    NaN/Infinity가 섞인 좌표쌍은 건너뛰고, 유효한 좌표쌍이 하나도 없으면 None.
    """
    min_lon = min_lat = math.inf
    max_lon = max_lat = -math.inf

    stack = [coords]
    while stack:
        node = stack.pop()
        if _is_position(node):
            lon, lat = _to_float(node[0]), _to_float(node[1])
            if not (math.isfinite(lon) and math.isfinite(lat)):
                continue
            min_lon = min(min_lon, lon)
            min_lat = min(min_lat, lat)
            max_lon = max(max_lon, lon)
            max_lat = max(max_lat, lat)
        elif isinstance(node, (list, tuple)):
            stack.extend(node)

    if min_lon == math.inf:
        return None
    return BoundingBox(min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat)


def _collect_coords(geometry: Any) -> list[Any]:
    """GeometryCollection 멤버들의 coordinates를 (중첩 컬렉션 포함) 모읍니다."""
    out: list[Any] = []
    if not isinstance(geometry, dict):
        return out

    if geometry.get("type") == "GeometryCollection":
        for member in geometry.get("geometries") or []:
            out.extend(_collect_coords(member))
    elif "coordinates" in geometry:
        out.append(geometry.get("coordinates"))
    return out


def centroid_of_geometry(geometry: Any) -> Centroid | None:
    """
    geometry의 대표점을 구합니다.

    - Point: 좌표가 유한하면 그대로 사용
    - 그 외: bbox 중점 (면적 가중 중심이 아님)
    - 알 수 없는 타입이거나 유효 좌표가 없으면 None
    """
    if not isinstance(geometry, dict):
        return None

    g_type = geometry.get("type")

    if g_type == "Point":
        coords = geometry.get("coordinates")
        if not _is_position(coords):
            return None
        lon, lat = _to_float(coords[0]), _to_float(coords[1])
        if math.isfinite(lon) and math.isfinite(lat):
            return Centroid(lon=lon, lat=lat)
        return None

    if g_type in COORDINATE_TYPES:
        bbox = bbox_from_coords(geometry.get("coordinates"))
    elif g_type == "GeometryCollection":
        bbox = bbox_from_coords(_collect_coords(geometry))
    else:
        return None

    return bbox.midpoint() if bbox else None
