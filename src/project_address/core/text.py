from __future__ import annotations

import math

from project_address.core.errors import ValidationError
from project_address.core.models import BoundingBox


def parse_bbox(raw: str) -> BoundingBox:
    """
    "minLon,minLat,maxLon,maxLat" 문자열을 BoundingBox로 변환합니다.
    네 값 모두 유한한 숫자이고 min < max 여야 합니다.
    """
    parts = [p.strip() for p in (raw or "").split(",")]
    if len(parts) != 4:
        raise ValidationError("Invalid bbox. Use 'minLon,minLat,maxLon,maxLat'.")

    try:
        min_lon, min_lat, max_lon, max_lat = (float(p) for p in parts)
    except ValueError as e:
        raise ValidationError(f"Invalid bbox number: {e}") from e

    if not all(math.isfinite(v) for v in (min_lon, min_lat, max_lon, max_lat)):
        raise ValidationError("Invalid bbox. Values must be finite numbers.")
    if not (min_lon < max_lon and min_lat < max_lat):
        raise ValidationError("Invalid bbox. Use 'minLon,minLat,maxLon,maxLat' with min < max.")

    return BoundingBox(min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat)
