from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class AdminSelection:
    country: str = ""
    state: str = ""
    city: str = ""
    village: str = ""

    @classmethod
    def from_mapping(cls, m: Mapping[str, Any] | None) -> AdminSelection:
        """
        UI에서 넘어온 행정구역 선택값을 그대로 받습니다.
        값 검증은 하지 않고, 없거나 None이면 빈 문자열로 둡니다.
        """
        m = m or {}

        def _seg(key: str) -> str:
            v = m.get(key)
            return "" if v is None else str(v)

        return cls(
            country=_seg("country"),
            state=_seg("state"),
            city=_seg("city"),
            village=_seg("village"),
        )


@dataclass(frozen=True)
class Centroid:
    lon: float
    lat: float


@dataclass(frozen=True)
class BoundingBox:
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def midpoint(self) -> Centroid:
        return Centroid(
            lon=(self.min_lon + self.max_lon) / 2,
            lat=(self.min_lat + self.max_lat) / 2,
        )

    def to_query(self) -> str:
        return f"{self.min_lon},{self.min_lat},{self.max_lon},{self.max_lat}"


@dataclass(frozen=True)
class TileIndex:
    x: int
    y: int


@dataclass(frozen=True)
class AddressResult:
    addr: str
    block_no: int
    building_no: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "addr": self.addr,
            "blockNo": self.block_no,
            "buildingNo": self.building_no,
        }
