"""User-defined category labels.

Custom categories only widen the set of labels a user may pick when
re-labelling a transaction. They never take part in :func:`categorize`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from statement_compare.categorization.rules import CATEGORIES
from statement_compare.core.exceptions import CategoryError

logger = logging.getLogger(__name__)


class CustomCategoryRegistry:
    """Ordered set of extra category names, owned by whoever creates it."""

    def __init__(self, names: Iterable[str] | None = None) -> None:
        self._names: list[str] = []
        for name in names or ():
            self.add(name)

    def add(self, name: str) -> str:
        """Register a custom category and return its normalized name.

        Raises:
            CategoryError: If the name is empty or shadows a built-in category
        """
        cleaned = (name or "").strip()
        if not cleaned:
            raise CategoryError("API_001", {"reason": "empty"}, message="Category name cannot be empty")
        if cleaned.lower() in CATEGORIES:
            raise CategoryError(
                "API_001",
                {"reason": "builtin", "name": cleaned},
                message=f"'{cleaned}' is already a built-in category",
            )
        if cleaned not in self._names:
            self._names.append(cleaned)
            logger.info("Custom category added", extra={"category": cleaned})
        return cleaned

    def remove(self, name: str) -> bool:
        """Remove a custom category. Returns False when it was not registered."""
        cleaned = (name or "").strip()
        if cleaned not in self._names:
            return False
        self._names.remove(cleaned)
        logger.info("Custom category removed", extra={"category": cleaned})
        return True

    def names(self) -> list[str]:
        return list(self._names)

    def is_known(self, category: str) -> bool:
        """True for built-in categories and registered custom ones."""
        return category in CATEGORIES or category in self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)
