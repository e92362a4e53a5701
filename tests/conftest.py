"""Shared test fixtures."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from pathlib import Path

import pytest

from smartchef.adapters.dish_source_client import DishSourceClient
from smartchef.config import Settings
from smartchef.containers import AppContainer, build_container
from smartchef.domain.nutrition import MealType, NutritionInfo, NutritionLog
from smartchef.errors import StorageError, StorageQuotaExceededError
from smartchef.services.aggregation import NutritionAnalytics
from smartchef.services.clock import Clock
from smartchef.services.diet_plan import DietPlanStore
from smartchef.services.inventory import InventoryStore, UsageHistory
from smartchef.services.nutrition_logs import NutritionLogStore, new_log_id
from smartchef.services.storage import InMemoryMedium, JsonStore, KeyValueMedium
from smartchef.services.worldwide_cache import WorldwideDishCache

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)
TODAY = NOW.date()


@dataclass
class FixedClock(Clock):
    """Clock that only moves when told to."""

    current: datetime = NOW

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@dataclass
class FailingMedium(KeyValueMedium):
    """Medium that reads from memory but refuses writes like a full disk."""

    values: dict[str, str] = field(default_factory=dict)
    fail_reads: bool = False

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError("medium unavailable")
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        raise StorageQuotaExceededError(key, len(value), 0)

    def delete(self, key: str) -> None:
        raise StorageError("medium unavailable")

    def keys(self) -> Iterable[str]:
        return list(self.values)


@dataclass
class FakeDishSource(DishSourceClient):
    """Dish source returning a fixed payload and recording calls."""

    payload: list[dict[str, object]] = field(
        default_factory=lambda: [
            {
                "id": "jp-1",
                "title": "Kinoko Gohan",
                "country": "Japan",
                "countryCode": "JP",
                "category": "seasonal",
                "description": "Mushroom rice for autumn.",
                "difficulty": "Easy",
                "prepTime": "15 min",
                "cookTime": "40 min",
                "tags": ["rice", "mushroom"],
                "seasonalNote": "Perfect for October",
            }
        ]
    )
    calls: list[tuple[str, int, int]] = field(default_factory=list)

    async def fetch_dishes(
        self, country_code: str, month: int, year: int
    ) -> list[dict[str, object]]:
        self.calls.append((country_code, month, year))
        return self.payload


def make_log(  # noqa: PLR0913
    day: date = TODAY,
    calories: float = 500,
    protein: float = 30,
    carbs: float = 50,
    fat: float = 15,
    fiber: float | None = None,
    meal_type: MealType = MealType.LUNCH,
) -> NutritionLog:
    """Build a nutrition log with sensible defaults."""
    return NutritionLog(
        id=new_log_id(),
        date=day,
        recipe_id="recipe-1",
        recipe_title="Chana Masala",
        meal_type=meal_type,
        servings=1,
        nutrition=NutritionInfo(
            calories=calories, protein=protein, carbs=carbs, fat=fat, fiber=fiber
        ),
        timestamp=NOW,
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def medium() -> InMemoryMedium:
    return InMemoryMedium()


@pytest.fixture
def kv(medium: InMemoryMedium) -> JsonStore:
    return JsonStore(medium)


@pytest.fixture
def log_store(kv: JsonStore, clock: FixedClock) -> NutritionLogStore:
    return NutritionLogStore(kv=kv, clock=clock)


@pytest.fixture
def diet_plans(kv: JsonStore) -> DietPlanStore:
    return DietPlanStore(kv)


@pytest.fixture
def analytics(
    log_store: NutritionLogStore, diet_plans: DietPlanStore, clock: FixedClock
) -> NutritionAnalytics:
    return NutritionAnalytics(logs=log_store, diet_plans=diet_plans, clock=clock)


@pytest.fixture
def usage_history(kv: JsonStore, clock: FixedClock) -> UsageHistory:
    return UsageHistory(kv=kv, clock=clock)


@pytest.fixture
def inventory(
    kv: JsonStore, clock: FixedClock, usage_history: UsageHistory
) -> InventoryStore:
    return InventoryStore(kv=kv, clock=clock, usage=usage_history)


@pytest.fixture
def dish_cache(kv: JsonStore, clock: FixedClock) -> WorldwideDishCache:
    return WorldwideDishCache(kv=kv, clock=clock)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "store", timezone="UTC")


@pytest.fixture
def container(
    settings: Settings, medium: InMemoryMedium, clock: FixedClock
) -> AppContainer:
    return build_container(settings, medium=medium, clock=clock)
