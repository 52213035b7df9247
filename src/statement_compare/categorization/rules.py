"""Deterministic transaction categorization.

The PDF converter returns only a date, a free-text description and a signed
amount per row. Spending categories are inferred from the description with
ordered substring rules, so the same description always lands in the same
category.

The keyword tables are tuned for US checking-account exports (merchant
names as they appear on Wells Fargo style statements).
"""

from __future__ import annotations

from typing import Final

DEFAULT_CATEGORY: Final[str] = "shopping"
INCOME_CATEGORY: Final[str] = "income"

# Ordering matters: earlier categories win when a description matches several.
_KEYWORD_RULES: Final[list[tuple[str, tuple[str, ...]]]] = [
    (
        "food-dining",
        (
            "starbucks", "coffee", "mcdonald", "restaurant", "shake shack", "shakeshack",
            "tacos el gordo", "salad and go", "wingstop", "chick-fil-a", "raising canes",
            "papa chevos", "panda express", "buffalo wild", "popeyes", "filibertos", "kfc",
            "new asian fusion", "az pho grill", "pizza", "cafe", "bakery", "doordash",
            "grubhub", "uber eats", "subway", "chipotle", "taco bell", "dunkin",
        ),
    ),
    (
        "groceries",
        (
            "walmart", "safeway", "albertsons", "kroger", "whole foods", "trader joe",
            "sprouts", "winco", "costco", "aldi", "food city", "grocery", "supermarket",
        ),
    ),
    (
        "gas-transport",
        (
            "shell", "arco", "circle k", "chevron", "exxon", "quiktrip", "uber",
            "lyft", "autozone", "los perez tire", "clean freak", "ls bikemasters",
            "ace parking", "parking", "car wash", "auto parts", "oreilly", "advance auto",
            "napa auto", "fuel", "gas station",
        ),
    ),
    (
        "shopping",
        (
            "target", "barnes and noble", "dollartree", "dollar tr", "amazon",
            "gravitate smoke", "home depot", "lowes", "best buy", "macys", "macy's", "kohl",
            "tj maxx", "marshalls", "ebay", "etsy",
        ),
    ),
    (
        "subscriptions",
        (
            "apple.com", "netflix", "spotify", "hulu", "disney", "youtube", "peacock",
            "adobe", "anthropic", "dropbox", "x corp", "zoom", "slack", "notion",
            "progressive", "eos fitness", "hbo", "paramount",
        ),
    ),
    (
        "utilities",
        (
            "verizon", "centurylink", "t-mobile", "at&t", "comcast", "xfinity", "cox comm",
            "electric", "water", "utility", "internet", "southwest gas",
        ),
    ),
    (
        "health",
        (
            "pharmacy", "cvs", "walgreens", "hospital", "clinic", "dental", "medical",
            "doctor", "urgent care", "optometr", "health",
        ),
    ),
    (
        "income",
        (
            "upwork", "stripe", "paypal transfer", "atm cash deposit", "direct deposit",
            "payroll",
        ),
    ),
]

# Built-in taxonomy, in rule priority order.
CATEGORIES: Final[tuple[str, ...]] = tuple(category for category, _ in _KEYWORD_RULES)

CATEGORY_LABELS: Final[dict[str, str]] = {
    "food-dining": "Food & Dining",
    "groceries": "Groceries",
    "gas-transport": "Gas & Transport",
    "shopping": "Shopping",
    "subscriptions": "Subscriptions",
    "utilities": "Utilities",
    "health": "Health",
    "income": "Income",
}


def categorize(description: str | None) -> str:
    """Infer a category from the transaction description.

    Args:
        description: Raw transaction description from the converter.

    Returns:
        Category string from the CATEGORIES taxonomy; ``shopping`` when no
        rule matches.
    """
    text = (description or "").lower()

    # Frys Food stores carry fuel centers and pharmacies; always groceries.
    if "frys" in text:
        return "groceries"

    for category, keywords in _KEYWORD_RULES:
        if any(keyword in text for keyword in keywords):
            return category

    return DEFAULT_CATEGORY


def category_label(category: str) -> str:
    """Human label for a category (custom names are shown as-is)."""
    return CATEGORY_LABELS.get(category, category)


def get_available_categories() -> list[str]:
    return list(CATEGORIES)
