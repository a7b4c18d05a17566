from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, Mapping, Optional


class CategoryKey(str, Enum):
    """Attributes an accident can be filtered and colored by."""

    SEVERITY = "severity"
    WEATHER = "weather"
    LIGHTING = "lighting"
    BIKE_LANE = "bike_lane"


class FilterSelection:
    """Allowed labels per active category.

    Explanation:
    A category missing from the selection is inactive. Labels are OR-ed inside a category and
    categories are AND-ed. An active category with no allowed labels rejects every accident.
    """

    def __init__(self, allowed: Optional[Mapping[CategoryKey | str, Iterable[str]]] = None) -> None:
        """Create a selection.

        Args:
            allowed: Mapping of category (enum or its value) to the labels to keep.

        Raises:
            TypeError: If a label set is given as a plain string.
            ValueError: If a category name is unknown.
        """
        self._allowed: dict[CategoryKey, frozenset[str]] = {}
        for key, labels in (allowed or {}).items():
            if isinstance(labels, str):
                raise TypeError(f"Labels for {key} must be a collection of strings, not a string")
            self._allowed[CategoryKey(key)] = frozenset(labels)

    def allowed(self, category: CategoryKey) -> Optional[frozenset[str]]:
        """Allowed labels for a category, None if the category is inactive."""
        return self._allowed.get(category)

    def active_categories(self) -> list[CategoryKey]:
        return list(self._allowed)

    def with_category(self, category: CategoryKey, labels: Iterable[str]) -> FilterSelection:
        """Return a new selection with the category set to the given labels."""
        updated: dict[CategoryKey | str, Iterable[str]] = dict(self._allowed)
        updated[category] = labels
        return FilterSelection(updated)

    def without_category(self, category: CategoryKey) -> FilterSelection:
        """Return a new selection with the category deactivated."""
        return FilterSelection({k: v for k, v in self._allowed.items() if k != category})

    def items(self) -> Iterator[tuple[CategoryKey, frozenset[str]]]:
        return iter(self._allowed.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterSelection):
            return NotImplemented
        return self._allowed == other._allowed

    def __repr__(self) -> str:
        parts = ", ".join(f"{k.value}={sorted(v)}" for k, v in self._allowed.items())
        return f"FilterSelection({parts})"
