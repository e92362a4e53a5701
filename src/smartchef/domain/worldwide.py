"""Domain models for the monthly worldwide dishes feature."""

from enum import StrEnum

from pydantic import Field

from smartchef.domain.models import CamelModel, UtcDatetime


class DishCategory(StrEnum):
    """Why a dish is featured."""

    TRADITIONAL = "traditional"
    SEASONAL = "seasonal"
    TRENDING = "trending"
    POPULAR = "popular"


class Difficulty(StrEnum):
    """Cooking difficulty of a dish."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class CountryDish(CamelModel):
    """A dish suggested for a country and month."""

    id: str
    title: str
    country: str
    country_code: str
    category: DishCategory
    description: str
    difficulty: Difficulty
    prep_time: str
    cook_time: str
    tags: list[str] = Field(default_factory=list)
    seasonal_note: str | None = None


class WorldwideDishesCache(CamelModel):
    """Dishes fetched for one (country, month, year) and when they were fetched."""

    country_code: str
    month: int = Field(ge=1, le=12)
    year: int
    dishes: list[CountryDish]
    timestamp: UtcDatetime


def cache_key(country_code: str, month: int, year: int) -> str:
    """Return the storage key for a country's dishes in a given month."""
    return f"worldwide_{country_code}_{month}_{year}"
