"""Rolling-window retention for append-only collections."""

from datetime import date, datetime, timedelta

from smartchef.domain.inventory import UsageRecord
from smartchef.domain.nutrition import NutritionLog

LOG_RETENTION_DAYS = 365
USAGE_RETENTION_DAYS = 90


def log_cutoff(today: date, days: int = LOG_RETENTION_DAYS) -> date:
    """Return the oldest log date that is still retained."""
    return today - timedelta(days=days)


def prune_logs(
    logs: list[NutritionLog], today: date, days: int = LOG_RETENTION_DAYS
) -> list[NutritionLog]:
    """Keep logs dated on or after the retention cutoff."""
    cutoff = log_cutoff(today, days)
    return [log for log in logs if log.date >= cutoff]


def prune_usage(
    records: list[UsageRecord], now: datetime, days: int = USAGE_RETENTION_DAYS
) -> list[UsageRecord]:
    """Keep usage records newer than the retention window."""
    cutoff = now - timedelta(days=days)
    return [record for record in records if record.date >= cutoff]
