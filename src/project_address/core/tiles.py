from __future__ import annotations

import math

from project_address.core.models import TileIndex

ADDRESS_ZOOM = 17
BLOCK_MODULUS = 100000


def _tile_axis(v: float) -> int:
    # 비유한 값(NaN/Infinity)은 0 (브라우저의 ToInt32와 동일)
    return math.floor(v) if math.isfinite(v) else 0


def lonlat_to_tile(lon: float, lat: float, zoom: int = ADDRESS_ZOOM) -> TileIndex:
    """
    Web Mercator slippy-tile 인덱스.

    위도 클램핑은 하지 않습니다. 투영이 정의되지 않는 축(극점, tan + sec <= 0,
    오버플로)은 0으로 둡니다.
    """
    n = 2 ** zoom
    fx = ((lon + 180) / 360) * n

    lat_rad = (lat * math.pi) / 180
    cos_lat = math.cos(lat_rad)
    merc = math.tan(lat_rad) + 1 / cos_lat if cos_lat != 0 else math.inf
    if merc > 0 and math.isfinite(merc):
        fy = ((1 - math.log(merc) / math.pi) / 2) * n
    else:
        fy = math.nan

    return TileIndex(x=_tile_axis(fx), y=_tile_axis(fy))


def part1by1(n: int) -> int:
    # 하위 16비트만 사용, 그 위는 버림
    n &= 0x0000FFFF
    n = (n ^ (n << 8)) & 0x00FF00FF
    n = (n ^ (n << 4)) & 0x0F0F0F0F
    n = (n ^ (n << 2)) & 0x33333333
    n = (n ^ (n << 1)) & 0x55555555
    return n


def morton(x: int, y: int) -> int:
    """y는 홀수 비트, x는 짝수 비트. 결과는 [0, 2^32)."""
    return (part1by1(y) << 1) | part1by1(x)


def block_number(tile: TileIndex) -> int:
    return (morton(tile.x, tile.y) % BLOCK_MODULUS) + 1
