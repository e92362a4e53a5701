"""Kitchen inventory and its usage ledger."""

import logging
import math
from dataclasses import dataclass, field
from datetime import timedelta
from enum import StrEnum
from uuid import uuid4

from smartchef.domain.inventory import (
    InventoryCategory,
    InventoryDraft,
    InventoryItem,
    SmartLowStockItem,
    UsageReason,
    UsageRecord,
)
from smartchef.services.clock import Clock
from smartchef.services.inventory_rules import LOW_STOCK_THRESHOLDS, SNACK_PATTERN
from smartchef.services.retention import USAGE_RETENTION_DAYS, prune_usage
from smartchef.services.storage import JsonStore, decode_list

INVENTORY_KEY = "smartchef_inventory"
USAGE_HISTORY_KEY = "smartchef_usage_history"

COUNTED_UNITS = frozenset({"pieces", "packets"})
RUNWAY_DAYS = 7
NO_USAGE_RUNWAY_DAYS = 30
DAILY_RATE_WINDOW_DAYS = 30

_logger = logging.getLogger(__name__)


class WriteOutcome(StrEnum):
    """Result of a write against an existing inventory item."""

    SAVED = "saved"
    NOT_FOUND = "not_found"
    NOT_PERSISTED = "not_persisted"


@dataclass(frozen=True)
class QuantityChange:
    """Outcome of adjusting an item's quantity.

    `item` is None when the item was used up and removed.
    """

    outcome: WriteOutcome
    item: InventoryItem | None = None


@dataclass
class RecipeDeduction:
    """Outcome of deducting a recipe's ingredients from inventory."""

    deducted: list[str] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)
    saved: bool = True


@dataclass
class UsageHistory:
    """Append-only consumption ledger keyed by item name."""

    kv: JsonStore
    clock: Clock
    retention_days: int = USAGE_RETENTION_DAYS

    def list_records(self) -> list[UsageRecord]:
        """Return stored usage records, oldest first."""
        return self.kv.read(USAGE_HISTORY_KEY, decode_list(UsageRecord)) or []

    def record(self, item_name: str, quantity: float, reason: UsageReason) -> bool:
        """Append a usage event and prune records past the retention window."""
        now = self.clock.now()
        records = self.list_records()
        records.append(
            UsageRecord(
                item_name=item_name.lower(),
                quantity=quantity,
                date=now,
                reason=reason,
            )
        )
        retained = prune_usage(records, now, self.retention_days)
        return self.kv.write(
            USAGE_HISTORY_KEY, [record.to_payload() for record in retained]
        )

    def weekly_usage_rate(self, item_name: str) -> float:
        """Return the quantity used over the last seven days."""
        recent = self._recent(item_name, days=7)
        return sum(record.quantity for record in recent)

    def daily_usage_rate(self, item_name: str) -> float:
        """Return average daily use over the span covered by the last 30 days."""
        recent = self._recent(item_name, days=DAILY_RATE_WINDOW_DAYS)
        if not recent:
            return 0.0
        total = sum(record.quantity for record in recent)
        elapsed = self.clock.now() - recent[0].date
        days_covered = math.ceil(elapsed / timedelta(days=1)) or 1
        return total / min(DAILY_RATE_WINDOW_DAYS, days_covered)

    def _recent(self, item_name: str, days: int) -> list[UsageRecord]:
        cutoff = self.clock.now() - timedelta(days=days)
        name = item_name.lower()
        return [
            record
            for record in self.list_records()
            if record.item_name == name and record.date >= cutoff
        ]


@dataclass
class InventoryStore:
    """CRUD over inventory items stored as one JSON array."""

    kv: JsonStore
    clock: Clock
    usage: UsageHistory

    def list_items(self) -> list[InventoryItem]:
        """Return all inventory items."""
        return self.kv.read(INVENTORY_KEY, decode_list(InventoryItem)) or []

    def get(self, item_id: str) -> InventoryItem | None:
        """Return an item by id, if present."""
        return next((item for item in self.list_items() if item.id == item_id), None)

    def add_item(self, draft: InventoryDraft) -> InventoryItem | None:
        """Add an item, merging into an existing one with the same name.

        Returns None when the inventory could not be persisted.
        """
        items = self.list_items()
        index = _find_by_name(items, draft.name)
        if index is not None:
            existing = items[index]
            changes: dict[str, object] = {
                "quantity": existing.quantity + draft.quantity
            }
            if draft.expiry_date is not None:
                changes["expiry_date"] = draft.expiry_date
            item = existing.model_copy(update=changes)
            items[index] = item
        else:
            item = InventoryItem(
                **draft.model_dump(),
                id=f"inv_{uuid4().hex}",
                added_at=self.clock.now(),
            )
            items.append(item)
        return item if self._save(items) else None

    def add_items(self, drafts: list[InventoryDraft]) -> list[InventoryItem]:
        """Add several items in order, returning the ones persisted."""
        added = [self.add_item(draft) for draft in drafts]
        return [item for item in added if item is not None]

    def update_item(self, item_id: str, **changes: object) -> InventoryItem | None:
        """Apply field changes to an item; id and added_at are kept.

        Returns None for an unknown id or when the change was not persisted.
        """
        items = self.list_items()
        index = _find_by_id(items, item_id)
        if index is None:
            return None
        changes.pop("id", None)
        changes.pop("added_at", None)
        payload = items[index].model_dump()
        payload.update(changes)
        updated = InventoryItem.model_validate(payload)
        items[index] = updated
        return updated if self._save(items) else None

    def update_quantity(
        self, item_id: str, delta: float, reason: UsageReason = UsageReason.MANUAL
    ) -> QuantityChange:
        """Adjust quantity; an emptied item is removed.

        Decreases reach the usage ledger only once the inventory is saved.
        """
        items = self.list_items()
        index = _find_by_id(items, item_id)
        if index is None:
            return QuantityChange(WriteOutcome.NOT_FOUND)
        item = items[index]
        quantity = max(0.0, item.quantity + delta)
        updated = None
        if quantity == 0:
            del items[index]
        else:
            updated = item.model_copy(update={"quantity": quantity})
            items[index] = updated
        if not self._save(items):
            return QuantityChange(WriteOutcome.NOT_PERSISTED)
        if delta < 0:
            self.usage.record(item.name, abs(delta), reason)
        return QuantityChange(WriteOutcome.SAVED, updated)

    def delete_item(self, item_id: str) -> WriteOutcome:
        """Delete an item by id."""
        items = self.list_items()
        index = _find_by_id(items, item_id)
        if index is None:
            return WriteOutcome.NOT_FOUND
        del items[index]
        if not self._save(items):
            return WriteOutcome.NOT_PERSISTED
        return WriteOutcome.SAVED

    def clear(self) -> None:
        """Remove every inventory item."""
        self.kv.remove(INVENTORY_KEY)

    def deduct_recipe_ingredients(self, ingredients: list[str]) -> RecipeDeduction:
        """Use up a portion of each inventory item matching a recipe ingredient."""
        items = self.list_items()
        result = RecipeDeduction()
        used: list[tuple[str, float]] = []
        for ingredient in ingredients:
            wanted = ingredient.lower().strip()
            if not wanted:
                continue
            index = next(
                (
                    i
                    for i, item in enumerate(items)
                    if wanted in item.name.lower() or item.name.lower() in wanted
                ),
                None,
            )
            if index is None:
                result.not_found.append(ingredient)
                continue
            item = items[index]
            amount = 1.0 if item.unit in COUNTED_UNITS else 0.5
            if item.quantity > amount:
                used.append((item.name, amount))
                items[index] = item.model_copy(
                    update={"quantity": item.quantity - amount}
                )
            else:
                used.append((item.name, item.quantity))
                del items[index]
            result.deducted.append(item.name)
        result.saved = self._save(items)
        if result.saved:
            for name, amount in used:
                self.usage.record(name, amount, UsageReason.RECIPE)
        return result

    def by_category(self) -> dict[InventoryCategory, list[InventoryItem]]:
        """Group items by category; every category is present."""
        grouped: dict[InventoryCategory, list[InventoryItem]] = {
            category: [] for category in InventoryCategory
        }
        for item in self.list_items():
            grouped[item.category].append(item)
        return grouped

    def ingredient_names(self) -> list[str]:
        """Return item names, e.g. for recipe generation prompts."""
        return [item.name for item in self.list_items()]

    def low_stock_items(self, threshold: float = 2) -> list[InventoryItem]:
        """Return items at or below a fixed quantity."""
        return [item for item in self.list_items() if item.quantity <= threshold]

    def smart_low_stock_items(self) -> list[SmartLowStockItem]:
        """Return items that will not last a week at their recent usage rate."""
        annotated = [self._annotate(item) for item in self.list_items()]
        return [item for item in annotated if item.is_low]

    def expiring_items(self, days: int = 3) -> list[InventoryItem]:
        """Return items expiring between today and `days` from now."""
        today = self.clock.now().date()
        horizon = today + timedelta(days=days)
        return [
            item
            for item in self.list_items()
            if item.expiry_date is not None and today <= item.expiry_date <= horizon
        ]

    def expired_items(self) -> list[InventoryItem]:
        """Return items whose expiry date has passed."""
        today = self.clock.now().date()
        return [
            item
            for item in self.list_items()
            if item.expiry_date is not None and item.expiry_date < today
        ]

    def _annotate(self, item: InventoryItem) -> SmartLowStockItem:
        weekly_usage = self.usage.weekly_usage_rate(item.name)
        daily_usage = self.usage.daily_usage_rate(item.name)
        if daily_usage > 0:
            days_remaining = math.floor(item.quantity / daily_usage)
            is_low = days_remaining < RUNWAY_DAYS
        elif SNACK_PATTERN.search(item.name) or (
            item.category is InventoryCategory.OTHER and item.quantity <= 1
        ):
            days_remaining = NO_USAGE_RUNWAY_DAYS
            is_low = False
        else:
            threshold = LOW_STOCK_THRESHOLDS[item.category]
            is_low = item.quantity <= threshold
            days_remaining = RUNWAY_DAYS if is_low else NO_USAGE_RUNWAY_DAYS
        return SmartLowStockItem(
            **item.model_dump(),
            days_remaining=days_remaining,
            weekly_usage=weekly_usage,
            is_low=is_low,
        )

    def _save(self, items: list[InventoryItem]) -> bool:
        saved = self.kv.write(INVENTORY_KEY, [item.to_payload() for item in items])
        if not saved:
            _logger.error("Inventory not persisted: items=%s", len(items))
        return saved


def _find_by_id(items: list[InventoryItem], item_id: str) -> int | None:
    return next((i for i, item in enumerate(items) if item.id == item_id), None)


def _find_by_name(items: list[InventoryItem], name: str) -> int | None:
    lowered = name.lower()
    return next(
        (i for i, item in enumerate(items) if item.name.lower() == lowered), None
    )
