"""Worldwide dishes lookup backed by the seven-day cache."""

import logging
from dataclasses import dataclass

from pydantic import TypeAdapter

from smartchef.adapters.dish_source_client import DishSourceClient
from smartchef.domain.worldwide import CountryDish
from smartchef.services.worldwide_cache import WorldwideDishCache

_DISHES = TypeAdapter(list[CountryDish])

_logger = logging.getLogger(__name__)


@dataclass
class WorldwideDishService:
    """Serves cached dishes and refreshes them from the source on a miss."""

    cache: WorldwideDishCache
    source: DishSourceClient

    async def get_dishes(
        self,
        country_code: str,
        month: int | None = None,
        year: int | None = None,
        force_refresh: bool = False,
    ) -> list[CountryDish]:
        """Return dishes for a country, defaulting to the current month."""
        current_month, current_year = self.cache.current_month_year()
        month = month or current_month
        year = year or current_year
        if not force_refresh:
            cached = self.cache.lookup(country_code, month, year)
            if cached is not None:
                return cached

        raw = await self.source.fetch_dishes(country_code, month, year)
        dishes = _DISHES.validate_python(raw)
        if not self.cache.store(country_code, month, year, dishes):
            _logger.warning(
                "Worldwide dishes not cached: country=%s month=%s year=%s",
                country_code,
                month,
                year,
            )
        return dishes
