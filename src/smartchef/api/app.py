"""Local HTTP surface over the data layer."""

import datetime as dt
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response
from pydantic import Field

from smartchef.app_logging import configure_logging
from smartchef.containers import AppContainer
from smartchef.domain.inventory import (
    InventoryCategory,
    InventoryDraft,
    InventoryItem,
    SmartLowStockItem,
    UsageReason,
)
from smartchef.domain.models import CamelModel
from smartchef.domain.nutrition import (
    DailyNutrition,
    DietPlan,
    MealType,
    NutritionInfo,
    NutritionLog,
    NutritionProgress,
    WeeklySummary,
)
from smartchef.domain.worldwide import CountryDish
from smartchef.services.inventory import WriteOutcome
from smartchef.services.nutrition_logs import new_log_id

HTTP_INSUFFICIENT_STORAGE = 507


class LogMealRequest(CamelModel):
    """Meal to log; nutrition is per serving and gets scaled."""

    recipe_id: str
    recipe_title: str
    meal_type: MealType
    servings: float = Field(gt=0)
    nutrition: NutritionInfo
    date: dt.date | None = None


class AdjustQuantityRequest(CamelModel):
    """Signed quantity change for an inventory item."""

    delta: float
    reason: UsageReason = UsageReason.MANUAL


def _raise_for_outcome(outcome: WriteOutcome) -> None:
    if outcome is WriteOutcome.NOT_FOUND:
        raise HTTPException(404, "Item not found")
    if outcome is WriteOutcome.NOT_PERSISTED:
        raise HTTPException(HTTP_INSUFFICIENT_STORAGE, "Inventory was not saved")


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        purged = app.state.container.dish_cache.purge_expired()
        logger.info("Startup cache purge removed %s entries", purged)
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/nutrition/logs")
    async def list_logs(
        request: Request,
        date: dt.date | None = None,
        start: dt.date | None = None,
        end: dt.date | None = None,
    ) -> list[NutritionLog]:
        """List logs for a day, an inclusive range, or all of them."""
        store = _container(request).nutrition_logs
        if date is not None:
            return store.list_by_date(date)
        if start is not None and end is not None:
            return store.list_by_range(start, end)
        return store.list_all()

    @app.post("/nutrition/logs", status_code=201)
    async def log_meal(payload: LogMealRequest, request: Request) -> NutritionLog:
        """Log a cooked meal for today or a given date."""
        state = _container(request)
        entry = NutritionLog(
            id=new_log_id(),
            date=payload.date or state.analytics.today_date(),
            recipe_id=payload.recipe_id,
            recipe_title=payload.recipe_title,
            meal_type=payload.meal_type,
            servings=payload.servings,
            nutrition=payload.nutrition.scaled(payload.servings),
            timestamp=state.clock.now(),
        )
        if not state.nutrition_logs.append(entry):
            raise HTTPException(HTTP_INSUFFICIENT_STORAGE, "Meal was not logged")
        return entry

    @app.delete("/nutrition/logs/{log_id}", status_code=204)
    async def delete_log(log_id: str, request: Request) -> Response:
        """Delete a log; unknown ids succeed."""
        _container(request).nutrition_logs.remove(log_id)
        return Response(status_code=204)

    @app.get("/nutrition/diet-plan")
    async def get_diet_plan(request: Request) -> DietPlan:
        """Return the active plan."""
        plan = _container(request).diet_plans.get()
        if plan is None:
            raise HTTPException(404, "No diet plan")
        return plan

    @app.put("/nutrition/diet-plan")
    async def save_diet_plan(plan: DietPlan, request: Request) -> DietPlan:
        """Replace the active plan."""
        if not _container(request).diet_plans.save(plan):
            raise HTTPException(HTTP_INSUFFICIENT_STORAGE, "Diet plan was not saved")
        return plan

    @app.delete("/nutrition/diet-plan", status_code=204)
    async def delete_diet_plan(request: Request) -> Response:
        """Remove the active plan."""
        _container(request).diet_plans.delete()
        return Response(status_code=204)

    @app.get("/nutrition/daily/{day}")
    async def daily_totals(day: dt.date, request: Request) -> DailyNutrition:
        """Return totals for one day."""
        return _container(request).analytics.daily_totals(day)

    @app.get("/nutrition/weekly")
    async def weekly_logs(request: Request) -> list[DailyNutrition]:
        """Return the seven days ending today."""
        return _container(request).analytics.weekly_logs()

    @app.get("/nutrition/weekly-summary")
    async def weekly_summary(request: Request) -> WeeklySummary:
        """Return the rolling weekly summary."""
        return _container(request).analytics.weekly_summary()

    @app.get("/nutrition/progress")
    async def today_progress(request: Request) -> NutritionProgress:
        """Return today's progress against the active plan."""
        progress = _container(request).analytics.today_progress()
        if progress is None:
            raise HTTPException(404, "No diet plan")
        return progress

    @app.get("/inventory/items")
    async def list_items(
        request: Request, category: InventoryCategory | None = None
    ) -> list[InventoryItem]:
        """List inventory items, optionally for one category."""
        inventory = _container(request).inventory
        if category is not None:
            return inventory.by_category()[category]
        return inventory.list_items()

    @app.post("/inventory/items", status_code=201)
    async def add_item(draft: InventoryDraft, request: Request) -> InventoryItem:
        """Add an item or top up one with the same name."""
        item = _container(request).inventory.add_item(draft)
        if item is None:
            raise HTTPException(HTTP_INSUFFICIENT_STORAGE, "Item was not saved")
        return item

    @app.post("/inventory/items/{item_id}/adjust")
    async def adjust_item(
        item_id: str, payload: AdjustQuantityRequest, request: Request
    ) -> InventoryItem | None:
        """Change an item's quantity; returns null once it is used up."""
        change = _container(request).inventory.update_quantity(
            item_id, payload.delta, payload.reason
        )
        _raise_for_outcome(change.outcome)
        return change.item

    @app.delete("/inventory/items/{item_id}", status_code=204)
    async def delete_item(item_id: str, request: Request) -> Response:
        """Delete an inventory item."""
        _raise_for_outcome(_container(request).inventory.delete_item(item_id))
        return Response(status_code=204)

    @app.get("/inventory/low-stock")
    async def low_stock(request: Request) -> list[SmartLowStockItem]:
        """Return items that will not last the week."""
        return _container(request).inventory.smart_low_stock_items()

    @app.get("/inventory/expiring")
    async def expiring(request: Request, days: int = 3) -> list[InventoryItem]:
        """Return items expiring within a number of days."""
        return _container(request).inventory.expiring_items(days)

    @app.get("/worldwide/{country_code}/dishes")
    async def worldwide_dishes(
        country_code: str,
        request: Request,
        month: int | None = None,
        year: int | None = None,
    ) -> list[CountryDish]:
        """Return dishes for a country, from cache when fresh."""
        state = _container(request)
        if state.dish_service is None:
            current_month, current_year = state.dish_cache.current_month_year()
            cached = state.dish_cache.lookup(
                country_code, month or current_month, year or current_year
            )
            if cached is None:
                raise HTTPException(503, "No dish source configured")
            return cached
        try:
            return await state.dish_service.get_dishes(country_code, month, year)
        except Exception:
            logger.exception("Dish source failed: country=%s", country_code)
            raise HTTPException(502, "Dish source failed") from None

    return app
