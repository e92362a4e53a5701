"""Tests for the worldwide dish cache and lookup service."""

import asyncio
import json
from datetime import timedelta

from smartchef.domain.worldwide import CountryDish, WorldwideDishesCache, cache_key
from smartchef.services.storage import InMemoryMedium
from smartchef.services.worldwide import WorldwideDishService
from smartchef.services.worldwide_cache import WorldwideDishCache
from tests.conftest import NOW, FakeDishSource, FixedClock


def _dishes() -> list[CountryDish]:
    return [CountryDish.model_validate(raw) for raw in FakeDishSource().payload]


def test_cache_key_format() -> None:
    assert cache_key("JP", 10, 2026) == "worldwide_JP_10_2026"


def test_entry_validity_boundaries(dish_cache: WorldwideDishCache) -> None:
    fresh = WorldwideDishesCache(
        country_code="JP",
        month=10,
        year=2026,
        dishes=_dishes(),
        timestamp=NOW - timedelta(days=6),
    )
    stale = fresh.model_copy(update={"timestamp": NOW - timedelta(days=8)})

    assert dish_cache.is_valid(fresh) is True
    assert dish_cache.is_valid(stale) is False


def test_lookup_hits_within_ttl_and_misses_after(
    dish_cache: WorldwideDishCache, clock: FixedClock
) -> None:
    dishes = _dishes()
    assert dish_cache.store("JP", 10, 2026, dishes) is True

    clock.advance(days=6)
    assert dish_cache.lookup("JP", 10, 2026) == dishes

    clock.advance(days=2)
    assert dish_cache.lookup("JP", 10, 2026) is None


def test_lookup_miss_for_other_month(dish_cache: WorldwideDishCache) -> None:
    dish_cache.store("JP", 10, 2026, _dishes())

    assert dish_cache.lookup("JP", 11, 2026) is None
    assert dish_cache.lookup("IT", 10, 2026) is None


def test_store_overwrites_entry(dish_cache: WorldwideDishCache) -> None:
    dish_cache.store("JP", 10, 2026, _dishes())
    dish_cache.store("JP", 10, 2026, [])

    assert dish_cache.lookup("JP", 10, 2026) == []


def test_legacy_millisecond_timestamp_is_read(
    dish_cache: WorldwideDishCache, medium: InMemoryMedium
) -> None:
    medium.values["worldwide_JP_10_2026"] = json.dumps(
        {
            "countryCode": "JP",
            "month": 10,
            "year": 2026,
            "dishes": FakeDishSource().payload,
            "timestamp": int((NOW - timedelta(days=1)).timestamp() * 1000),
        }
    )

    assert dish_cache.lookup("JP", 10, 2026) == _dishes()


def test_timestamp_without_timezone_is_read_as_utc(
    dish_cache: WorldwideDishCache, medium: InMemoryMedium
) -> None:
    for month, day in ((10, 17), (9, 1)):
        medium.values[cache_key("JP", month, 2026)] = json.dumps(
            {
                "countryCode": "JP",
                "month": month,
                "year": 2026,
                "dishes": FakeDishSource().payload,
                "timestamp": f"2026-{month:02d}-{day:02d}T12:00:00",
            }
        )

    assert dish_cache.lookup("JP", 10, 2026) == _dishes()
    assert dish_cache.lookup("JP", 9, 2026) is None
    assert dish_cache.purge_expired() == 1
    assert list(medium.values) == ["worldwide_JP_10_2026"]


def test_purge_expired_keeps_fresh_entries(
    dish_cache: WorldwideDishCache, medium: InMemoryMedium, clock: FixedClock
) -> None:
    dish_cache.store("JP", 9, 2026, _dishes())
    clock.advance(days=10)
    dish_cache.store("JP", 10, 2026, _dishes())
    medium.values["worldwide_XX_1_2020"] = "garbage"
    medium.values["smartchef_inventory"] = "[]"

    assert dish_cache.purge_expired() == 2

    assert sorted(medium.values) == ["smartchef_inventory", "worldwide_JP_10_2026"]


def test_service_fetches_on_miss_and_caches(dish_cache: WorldwideDishCache) -> None:
    source = FakeDishSource()
    service = WorldwideDishService(cache=dish_cache, source=source)

    first = asyncio.run(service.get_dishes("JP"))
    second = asyncio.run(service.get_dishes("JP"))

    assert first == second == _dishes()
    assert source.calls == [("JP", 10, 2026)]


def test_service_refetches_expired_or_forced(
    dish_cache: WorldwideDishCache, clock: FixedClock
) -> None:
    source = FakeDishSource()
    service = WorldwideDishService(cache=dish_cache, source=source)

    asyncio.run(service.get_dishes("JP", 10, 2026))
    clock.advance(days=8)
    asyncio.run(service.get_dishes("JP", 10, 2026))
    asyncio.run(service.get_dishes("JP", 10, 2026, force_refresh=True))

    assert len(source.calls) == 3
