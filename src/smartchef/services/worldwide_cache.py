"""Seven-day cache of worldwide dishes keyed by country and month."""

import logging
from dataclasses import dataclass
from datetime import timedelta

from smartchef.domain.worldwide import CountryDish, WorldwideDishesCache, cache_key
from smartchef.services.clock import Clock
from smartchef.services.storage import JsonStore, decode_model

CACHE_TTL_DAYS = 7
CACHE_KEY_PREFIX = "worldwide_"

_logger = logging.getLogger(__name__)


@dataclass
class WorldwideDishCache:
    """Read-through cache entries; expired entries are never reused."""

    kv: JsonStore
    clock: Clock
    ttl_days: int = CACHE_TTL_DAYS

    def is_valid(self, entry: WorldwideDishesCache) -> bool:
        """Return True while the entry is younger than the TTL."""
        return self.clock.now() - entry.timestamp < timedelta(days=self.ttl_days)

    def lookup(
        self, country_code: str, month: int, year: int
    ) -> list[CountryDish] | None:
        """Return cached dishes, or None on a miss or an expired entry."""
        key = cache_key(country_code, month, year)
        entry = self.kv.read(key, decode_model(WorldwideDishesCache))
        if entry is None:
            return None
        if not self.is_valid(entry):
            _logger.info("Worldwide cache expired: key=%s", key)
            return None
        return entry.dishes

    def store(
        self, country_code: str, month: int, year: int, dishes: list[CountryDish]
    ) -> bool:
        """Overwrite the entry for a key with freshly fetched dishes."""
        entry = WorldwideDishesCache(
            country_code=country_code,
            month=month,
            year=year,
            dishes=dishes,
            timestamp=self.clock.now(),
        )
        return self.kv.write(cache_key(country_code, month, year), entry.to_payload())

    def purge_expired(self) -> int:
        """Delete expired or unreadable entries and return how many went."""
        removed = 0
        for key in self.kv.keys(CACHE_KEY_PREFIX):
            entry = self.kv.read(key, decode_model(WorldwideDishesCache))
            if entry is None or not self.is_valid(entry):
                self.kv.remove(key)
                removed += 1
        if removed:
            _logger.info("Purged %s worldwide cache entries", removed)
        return removed

    def current_month_year(self) -> tuple[int, int]:
        """Return the (month, year) pair for today."""
        now = self.clock.now()
        return now.month, now.year
