"""Shelf-life, category and quantity heuristics for inventory items."""

import re
from datetime import date, timedelta

from smartchef.domain.inventory import InventoryCategory

# Checked in order; the first key contained in an item name wins.
SHELF_LIFE_DAYS: dict[str, int] = {
    # Produce
    "tomato": 7, "tomatoes": 7,
    "onion": 30, "onions": 30,
    "potato": 21, "potatoes": 21,
    "carrot": 14, "carrots": 14,
    "garlic": 30,
    "ginger": 21,
    "pepper": 10, "capsicum": 7, "bell pepper": 7, "shimla mirch": 7,
    "chili": 14, "green chili": 7,
    "lemon": 21, "lime": 21,
    "apple": 14, "apples": 14,
    "banana": 5, "bananas": 5,
    "orange": 14, "oranges": 14,
    "lettuce": 7,
    "spinach": 5, "palak": 5,
    "cabbage": 14,
    "cucumber": 7,
    "eggplant": 7, "brinjal": 7,
    "broccoli": 7,
    "cauliflower": 7,
    "beans": 7, "french beans": 7,
    "peas": 5,
    "corn": 5,
    "mango": 5, "mangoes": 5,
    "grapes": 7,
    "berries": 5, "strawberry": 5, "blueberry": 5,
    "melon": 7, "watermelon": 7,
    "coriander": 5, "cilantro": 5,
    "mint": 5,
    "curry leaves": 7,
    # Dairy
    "milk": 7,
    "cheese": 14,
    "yogurt": 14, "curd": 7, "dahi": 7,
    "butter": 30,
    "cream": 7,
    "paneer": 5,
    "ghee": 180,
    # Proteins
    "chicken": 2,
    "mutton": 2,
    "fish": 2,
    "egg": 21, "eggs": 21,
    "meat": 2,
    "beef": 2,
    "pork": 2,
    "shrimp": 2, "prawn": 2, "prawns": 2,
    "lamb": 2,
    "tofu": 7,
    # Pantry
    "rice": 365,
    "flour": 180, "atta": 90, "maida": 180,
    "sugar": 730,
    "oil": 180, "cooking oil": 180, "vegetable oil": 180, "olive oil": 180,
    "pasta": 365, "noodles": 365,
    "bread": 5, "bun": 3,
    "cereal": 180,
    "lentil": 365, "lentils": 365, "dal": 365,
    "chickpea": 365, "chickpeas": 365, "chana": 365,
    "soy sauce": 365,
    "vinegar": 730,
    "honey": 730,
    "jam": 180,
    "sauce": 180, "ketchup": 180, "mayonnaise": 90,
    # Spices
    "salt": 1825,
    "black pepper": 365, "kali mirch": 365,
    "turmeric": 365, "haldi": 365,
    "cumin": 365, "jeera": 365,
    "coriander powder": 365, "dhaniya": 365,
    "chili powder": 365, "red chili": 365,
    "garam masala": 180,
    "cinnamon": 365,
    "cardamom": 365, "elaichi": 365,
    "clove": 365,
    "bay leaf": 365,
    # Beverages
    "juice": 7,
    "soda": 90,
    "tea": 365,
    "coffee": 180,
}  # fmt: skip

CATEGORY_SHELF_LIFE_DAYS: dict[InventoryCategory, int] = {
    InventoryCategory.PRODUCE: 7,
    InventoryCategory.DAIRY: 7,
    InventoryCategory.PROTEINS: 2,
    InventoryCategory.PANTRY: 180,
    InventoryCategory.SPICES: 365,
    InventoryCategory.BEVERAGES: 30,
    InventoryCategory.OTHER: 30,
}

LOW_STOCK_THRESHOLDS: dict[InventoryCategory, float] = {
    InventoryCategory.PRODUCE: 2,
    InventoryCategory.DAIRY: 1,
    InventoryCategory.PROTEINS: 1,
    InventoryCategory.PANTRY: 1,
    InventoryCategory.SPICES: 1,
    InventoryCategory.BEVERAGES: 2,
    InventoryCategory.OTHER: 2,
}

PERISHABLE_CATEGORIES = frozenset(
    {
        InventoryCategory.PRODUCE,
        InventoryCategory.DAIRY,
        InventoryCategory.PROTEINS,
        InventoryCategory.BEVERAGES,
    }
)

# Single-serving foods that are never flagged as running low.
SNACK_PATTERN = re.compile(
    r"cake|vada|samosa|pakora|pakoda|bhaji|bhajji|puff|pastry|donut|brownie|"
    r"cookie|muffin|cupcake|croissant|sandwich|burger|pizza|wrap|roll|paratha|"
    r"puri|dosa|idli|uttapam|snack",
    re.IGNORECASE,
)

_CATEGORY_PATTERNS: list[tuple[InventoryCategory, re.Pattern[str]]] = [
    (
        InventoryCategory.PRODUCE,
        re.compile(
            r"tomato|onion|potato|carrot|garlic|ginger|pepper|chili|lemon|lime|"
            r"vegetable|fruit|apple|banana|orange|lettuce|spinach|cabbage|"
            r"cucumber|eggplant|brinjal|broccoli|cauliflower|beans|peas|corn|"
            r"mango|grape|berry|melon|coriander|mint|curry"
        ),
    ),
    (
        InventoryCategory.DAIRY,
        re.compile(r"milk|cheese|yogurt|curd|butter|cream|paneer|ghee|dairy"),
    ),
    (
        InventoryCategory.PROTEINS,
        re.compile(
            r"chicken|mutton|fish|egg|meat|beef|pork|shrimp|prawn|lamb|seafood|"
            r"tofu|protein"
        ),
    ),
    (
        InventoryCategory.SPICES,
        re.compile(
            r"salt|pepper|turmeric|cumin|coriander|chili powder|garam masala|"
            r"spice|cinnamon|cardamom|clove|bay leaf|oregano|basil|thyme|"
            r"paprika|saffron"
        ),
    ),
    (
        InventoryCategory.BEVERAGES,
        re.compile(r"water|juice|soda|tea|coffee|drink|cola|beverage"),
    ),
    (
        InventoryCategory.PANTRY,
        re.compile(
            r"rice|flour|sugar|oil|pasta|noodle|bread|cereal|lentil|dal|pulse|"
            r"bean|chickpea|soy sauce|vinegar|honey|jam|sauce|ketchup|mayonnaise"
        ),
    ),
]

_QUANTITY_PATTERN = re.compile(r"^([\d.]+)\s*(.*)$")


def suggested_expiry_date(
    name: str, category: InventoryCategory, today: date
) -> date:
    """Suggest an expiry date from the item name, else its category."""
    lowered = name.lower()
    for key, days in SHELF_LIFE_DAYS.items():
        if key in lowered:
            return today + timedelta(days=days)
    return today + timedelta(days=CATEGORY_SHELF_LIFE_DAYS[category])


def needs_expiry_date(category: InventoryCategory) -> bool:
    """Return True for categories worth tracking expiry for."""
    return category in PERISHABLE_CATEGORIES


def parse_quantity(text: str) -> tuple[float, str]:
    """Split text like "2.5 kg" into quantity and unit, defaulting to 1 piece."""
    match = _QUANTITY_PATTERN.match(text.strip())
    if not match:
        return 1.0, "pieces"
    try:
        quantity = float(match.group(1))
    except ValueError:
        quantity = 0.0
    return quantity or 1.0, match.group(2).strip() or "pieces"


def infer_category(name: str) -> InventoryCategory:
    """Guess an inventory category from an item name."""
    lowered = name.lower()
    for category, pattern in _CATEGORY_PATTERNS:
        if pattern.search(lowered):
            return category
    return InventoryCategory.OTHER
