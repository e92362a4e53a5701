"""Daily, weekly and goal-progress views over nutrition logs."""

from dataclasses import dataclass
from datetime import date, timedelta

from smartchef.domain.nutrition import (
    DailyNutrition,
    DietPlan,
    NutrientBreakdown,
    NutritionInfo,
    NutritionLog,
    NutritionProgress,
    WeeklySummary,
    round_half_up,
)
from smartchef.services.clock import Clock
from smartchef.services.diet_plan import DietPlanStore
from smartchef.services.nutrition_logs import NutritionLogStore

WEEK_DAYS = 7


@dataclass
class NutritionAnalytics:
    """Computes derived nutrition views on demand; nothing is cached."""

    logs: NutritionLogStore
    diet_plans: DietPlanStore
    clock: Clock

    def today_date(self) -> date:
        """Return today's calendar date on the local clock."""
        return self.clock.now().date()

    def daily_totals(self, day: date) -> DailyNutrition:
        """Return totals for a day, zeroed when nothing was logged."""
        return aggregate_day(day, self.logs.list_by_date(day))

    def weekly_logs(self) -> list[DailyNutrition]:
        """Return the seven days ending today, oldest first."""
        today = self.today_date()
        start = today - timedelta(days=WEEK_DAYS - 1)
        logs = self.logs.list_by_range(start, today)
        return [
            aggregate_day(start + timedelta(days=offset), logs)
            for offset in range(WEEK_DAYS)
        ]

    def progress(self, consumed: NutritionInfo, goals: DietPlan) -> NutritionProgress:
        """Return progress of consumed nutrition against a plan."""
        return calculate_progress(consumed, goals)

    def today_progress(self) -> NutritionProgress | None:
        """Return today's progress against the current plan, if one is set."""
        plan = self.diet_plans.get()
        if plan is None:
            return None
        today = self.daily_totals(self.today_date())
        return calculate_progress(to_nutrition_info(today), plan)

    def weekly_summary(self) -> WeeklySummary:
        """Return averages and goal counts for the last seven days."""
        return summarize_week(self.weekly_logs(), self.diet_plans.get())


def aggregate_day(day: date, logs: list[NutritionLog]) -> DailyNutrition:
    """Sum the logs that fall on a given day."""
    meals = [log for log in logs if log.date == day]
    return DailyNutrition(
        date=day,
        total_calories=sum(log.nutrition.calories for log in meals),
        total_protein=sum(log.nutrition.protein for log in meals),
        total_carbs=sum(log.nutrition.carbs for log in meals),
        total_fat=sum(log.nutrition.fat for log in meals),
        total_fiber=sum(log.nutrition.fiber or 0 for log in meals),
        meals=meals,
    )


def to_nutrition_info(daily: DailyNutrition) -> NutritionInfo:
    """Convert a day's totals into consumed nutrition."""
    return NutritionInfo(
        calories=daily.total_calories,
        protein=daily.total_protein,
        carbs=daily.total_carbs,
        fat=daily.total_fat,
        fiber=daily.total_fiber,
    )


def calculate_progress(consumed: NutritionInfo, goals: DietPlan) -> NutritionProgress:
    """Compare consumption with goals; zero goals give zero percent."""
    targets = NutrientBreakdown(
        calories=goals.daily_calories,
        protein=goals.macros.protein,
        carbs=goals.macros.carbs,
        fat=goals.macros.fat,
    )
    eaten = NutrientBreakdown(
        calories=consumed.calories,
        protein=consumed.protein,
        carbs=consumed.carbs,
        fat=consumed.fat,
    )
    metrics = ("calories", "protein", "carbs", "fat")
    percentages = {
        name: _percent(getattr(eaten, name), getattr(targets, name))
        for name in metrics
    }
    remaining = {
        name: max(0.0, getattr(targets, name) - getattr(eaten, name))
        for name in metrics
    }
    return NutritionProgress(
        consumed=consumed,
        goals=goals,
        percentages=NutrientBreakdown(**percentages),
        remaining=NutrientBreakdown(**remaining),
        is_over_goal=consumed.calories > goals.daily_calories,
    )


def summarize_week(
    daily: list[DailyNutrition], plan: DietPlan | None
) -> WeeklySummary:
    """Reduce a run of days to averages over days with meals."""
    days_with_data = sum(1 for day in daily if day.meals)
    divisor = max(1, days_with_data)
    days_met_goal = 0
    if plan is not None:
        days_met_goal = sum(
            1 for day in daily if 0 < day.total_calories <= plan.daily_calories
        )
    return WeeklySummary(
        week_start=daily[0].date,
        week_end=daily[-1].date,
        daily_totals=daily,
        average_calories=_average([d.total_calories for d in daily], divisor),
        average_protein=_average([d.total_protein for d in daily], divisor),
        average_carbs=_average([d.total_carbs for d in daily], divisor),
        average_fat=_average([d.total_fat for d in daily], divisor),
        days_met_goal=days_met_goal,
        total_meals=sum(len(day.meals) for day in daily),
    )


def _average(values: list[float], divisor: int) -> int:
    return round_half_up(sum(values) / divisor)


def _percent(consumed: float, goal: float) -> float:
    if goal <= 0:
        return 0.0
    return consumed / goal * 100
