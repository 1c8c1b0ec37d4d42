from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from project_address.core.address import build_address
from project_address.core.errors import ValidationError
from project_address.core.models import AddressResult, AdminSelection, BoundingBox
from project_address.infra.providers.buildings import BuildingsProvider

log = logging.getLogger(__name__)


def _feature_id(feature: Any) -> Any:
    if not isinstance(feature, Mapping):
        return None
    if feature.get("id") is not None:
        return feature.get("id")
    props = feature.get("properties")
    if isinstance(props, Mapping):
        return props.get("id")
    return None


class AddressService:
    def __init__(self, *, buildings_provider: BuildingsProvider | None = None) -> None:
        self._buildings = buildings_provider

    def build(self, feature: Mapping[str, Any] | None, admin: AdminSelection) -> AddressResult | None:
        result = build_address(feature, admin)
        if result is None:
            log.warning("Failed to generate address for feature id=%s", _feature_id(feature))
        else:
            log.debug("Generated address %s", result.addr)
        return result

    def build_many(self, features: Iterable[Any], admin: AdminSelection) -> list[dict[str, Any]]:
        """
        여러 feature에 대해 주소를 생성합니다.
        실패한 feature는 address=None으로 남깁니다(건너뛰지 않음).
        """
        items: list[dict[str, Any]] = []
        for feature in features:
            result = self.build(feature if isinstance(feature, Mapping) else None, admin)
            items.append(
                {
                    "id": _feature_id(feature),
                    "address": result.to_dict() if result else None,
                }
            )
        return items

    def build_for_bbox(self, bbox: BoundingBox, zoom: int, admin: AdminSelection) -> list[dict[str, Any]]:
        if self._buildings is None:
            raise ValidationError("Buildings provider not configured (set BUILDINGS_API_URL)")

        fc = self._buildings.fetch(bbox, zoom)
        return self.build_many(fc.get("features") or [], admin)
