"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from smartchef.adapters.dish_source_client import HttpxDishSourceClient
from smartchef.adapters.file_medium import FileMedium
from smartchef.config import Settings
from smartchef.services.aggregation import NutritionAnalytics
from smartchef.services.clock import Clock, SystemClock
from smartchef.services.diet_plan import DietPlanStore
from smartchef.services.inventory import InventoryStore, UsageHistory
from smartchef.services.nutrition_logs import NutritionLogStore
from smartchef.services.storage import JsonStore, KeyValueMedium
from smartchef.services.worldwide import WorldwideDishService
from smartchef.services.worldwide_cache import WorldwideDishCache


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    nutrition_logs: NutritionLogStore
    diet_plans: DietPlanStore
    analytics: NutritionAnalytics
    inventory: InventoryStore
    usage_history: UsageHistory
    dish_cache: WorldwideDishCache
    dish_service: WorldwideDishService | None
    close_resources: Callable[[], Awaitable[None]]

    def clear_nutrition_data(self) -> None:
        """Remove the diet plan and every nutrition log."""
        self.diet_plans.delete()
        self.nutrition_logs.clear()


def build_container(
    settings: Settings | None = None,
    medium: KeyValueMedium | None = None,
    clock: Clock | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_clock = clock or SystemClock(resolved_settings.timezone)
    kv = JsonStore(
        medium
        or FileMedium(
            root=resolved_settings.data_dir,
            quota_bytes=resolved_settings.storage_quota_bytes,
        )
    )
    nutrition_logs = NutritionLogStore(
        kv=kv,
        clock=resolved_clock,
        retention_days=resolved_settings.log_retention_days,
    )
    diet_plans = DietPlanStore(kv)
    usage_history = UsageHistory(
        kv=kv,
        clock=resolved_clock,
        retention_days=resolved_settings.usage_history_days,
    )
    inventory = InventoryStore(kv=kv, clock=resolved_clock, usage=usage_history)
    dish_cache = WorldwideDishCache(
        kv=kv,
        clock=resolved_clock,
        ttl_days=resolved_settings.dish_cache_ttl_days,
    )

    dish_source: HttpxDishSourceClient | None = None
    dish_service: WorldwideDishService | None = None
    if resolved_settings.dish_source_url:
        dish_source = HttpxDishSourceClient.create(
            base_url=resolved_settings.dish_source_url,
            timeout_seconds=resolved_settings.dish_source_timeout_seconds,
        )
        dish_service = WorldwideDishService(cache=dish_cache, source=dish_source)

    async def close_resources() -> None:
        if dish_source is not None:
            await dish_source.close()

    return AppContainer(
        settings=resolved_settings,
        clock=resolved_clock,
        nutrition_logs=nutrition_logs,
        diet_plans=diet_plans,
        analytics=NutritionAnalytics(
            logs=nutrition_logs, diet_plans=diet_plans, clock=resolved_clock
        ),
        inventory=inventory,
        usage_history=usage_history,
        dish_cache=dish_cache,
        dish_service=dish_service,
        close_resources=close_resources,
    )
