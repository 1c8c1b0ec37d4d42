from __future__ import annotations

from dataclasses import dataclass

from project_address.app.settings import Settings, get_settings
from project_address.infra.cache import Cache
from project_address.infra.http import HttpClient
from project_address.infra.providers.buildings import BuildingsProvider
from project_address.services.address_service import AddressService


@dataclass(frozen=True)
class Container:
    settings: Settings
    cache: Cache
    http: HttpClient
    buildings: BuildingsProvider | None
    address_service: AddressService


def build_container(settings: Settings | None = None) -> Container:
    settings = settings or get_settings()

    cache = Cache(maxsize=settings.cache_maxsize, ttl_seconds=settings.cache_ttl_seconds)
    http = HttpClient(timeout_seconds=settings.http_timeout_seconds, user_agent=settings.http_user_agent)

    # URL이 설정된 경우에만 건물 조회 활성
    buildings = None
    if settings.buildings_api_url:
        buildings = BuildingsProvider(http=http, api_url=settings.buildings_api_url, cache=cache)

    address_service = AddressService(buildings_provider=buildings)

    return Container(
        settings=settings,
        cache=cache,
        http=http,
        buildings=buildings,
        address_service=address_service,
    )
