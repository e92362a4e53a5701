"""Domain models for the kitchen inventory."""

import datetime as dt
from enum import StrEnum

from pydantic import Field

from smartchef.domain.models import CamelModel, UtcDatetime


class InventoryCategory(StrEnum):
    """Shelf an inventory item is grouped under."""

    PRODUCE = "Produce"
    DAIRY = "Dairy"
    PROTEINS = "Proteins"
    PANTRY = "Pantry"
    SPICES = "Spices"
    BEVERAGES = "Beverages"
    OTHER = "Other"


class UsageReason(StrEnum):
    """Why an inventory quantity went down."""

    MANUAL = "manual"
    RECIPE = "recipe"


class InventoryDraft(CamelModel):
    """Item details supplied by the user before an id is assigned."""

    name: str = Field(min_length=1)
    quantity: float = Field(ge=0)
    unit: str = "pieces"
    category: InventoryCategory = InventoryCategory.OTHER
    expiry_date: dt.date | None = None


class InventoryItem(InventoryDraft):
    """Represents an item stored in the user's kitchen."""

    id: str = Field(min_length=1)
    added_at: UtcDatetime


class SmartLowStockItem(InventoryItem):
    """Inventory item annotated with its projected runway."""

    days_remaining: int
    weekly_usage: float
    is_low: bool


class UsageRecord(CamelModel):
    """Consumption event, matched to inventory items by lower-cased name."""

    item_name: str
    quantity: float = Field(ge=0)
    date: UtcDatetime
    reason: UsageReason
