"""Transaction categorization utilities.

This module provides deterministic, local categorization of transactions based on
their descriptions. It is intentionally rule-based (no network calls) so the same
statement always produces the same breakdown.
"""

from .custom import CustomCategoryRegistry
from .rules import CATEGORIES, CATEGORY_LABELS, categorize, category_label, get_available_categories

__all__ = [
    "CATEGORIES",
    "CATEGORY_LABELS",
    "CustomCategoryRegistry",
    "categorize",
    "category_label",
    "get_available_categories",
]
