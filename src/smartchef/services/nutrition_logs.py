"""Nutrition log collection with rolling retention."""

import logging
from dataclasses import dataclass
from datetime import date
from uuid import uuid4

from smartchef.domain.nutrition import NutritionLog
from smartchef.services.clock import Clock
from smartchef.services.retention import LOG_RETENTION_DAYS, prune_logs
from smartchef.services.storage import JsonStore, decode_list

NUTRITION_LOGS_KEY = "smartchef_nutrition_logs"

_logger = logging.getLogger(__name__)


def new_log_id() -> str:
    """Return a fresh nutrition log id."""
    return f"log_{uuid4().hex}"


@dataclass
class NutritionLogStore:
    """Stores cooked-meal logs as one JSON array."""

    kv: JsonStore
    clock: Clock
    retention_days: int = LOG_RETENTION_DAYS

    def append(self, entry: NutritionLog) -> bool:
        """Add a log, prune expired ones and persist; False means not logged."""
        logs = self.list_all()
        logs.append(entry)
        retained = prune_logs(logs, self.clock.now().date(), self.retention_days)
        if len(retained) < len(logs):
            _logger.info("Pruned %s expired nutrition logs", len(logs) - len(retained))
        saved = self._save(retained)
        if not saved:
            _logger.error("Nutrition log not persisted: id=%s", entry.id)
        return saved

    def list_all(self) -> list[NutritionLog]:
        """Return every stored log in insertion order."""
        return self.kv.read(NUTRITION_LOGS_KEY, decode_list(NutritionLog)) or []

    def list_by_date(self, day: date) -> list[NutritionLog]:
        """Return logs recorded for a calendar day."""
        return [log for log in self.list_all() if log.date == day]

    def list_by_range(self, start: date, end: date) -> list[NutritionLog]:
        """Return logs dated within an inclusive range."""
        return [log for log in self.list_all() if start <= log.date <= end]

    def remove(self, log_id: str) -> None:
        """Delete a log by id; unknown ids are ignored."""
        logs = self.list_all()
        remaining = [log for log in logs if log.id != log_id]
        if len(remaining) == len(logs):
            return
        self._save(remaining)

    def clear(self) -> None:
        """Drop every stored log."""
        self.kv.remove(NUTRITION_LOGS_KEY)

    def _save(self, logs: list[NutritionLog]) -> bool:
        return self.kv.write(NUTRITION_LOGS_KEY, [log.to_payload() for log in logs])
