from typing import Iterable, List, NamedTuple, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ["Credit card"]
DEFAULT_SUBCATEGORIES = [
    "Store credit card",
    "General-purpose credit card or charge card",
]


class CategorySnapshot(NamedTuple):
    categories: Tuple[str, ...]
    subcategories: Tuple[str, ...]


class CategoryRegistry:
    """
    In-memory, append-only record of classification labels seen so far.

    The registry only biases future classification prompts, it does not
    enforce a taxonomy. It is not persisted and not locked: concurrent
    requests may lose an append, which is accepted.
    """

    def __init__(self, categories: Optional[Iterable[str]] = None,
                 subcategories: Optional[Iterable[str]] = None):
        self._categories: List[str] = []
        self._subcategories: List[str] = []
        for category in DEFAULT_CATEGORIES if categories is None else categories:
            if category and category not in self._categories:
                self._categories.append(category)
        for subcategory in DEFAULT_SUBCATEGORIES if subcategories is None else subcategories:
            if subcategory and subcategory not in self._subcategories:
                self._subcategories.append(subcategory)

    def snapshot(self) -> CategorySnapshot:
        return CategorySnapshot(tuple(self._categories), tuple(self._subcategories))

    def record_category(self, category: Optional[str], subcategory: Optional[str]) -> Optional[str]:
        """
        Record a classification's labels.

        A new category is appended; otherwise a new subcategory is appended.
        When the category is new the subcategory is NOT recorded, even if it
        is new as well (see DESIGN.md, open question on this behaviour).

        Returns "category", "subcategory" or None depending on what was added.
        """
        if category and category not in self._categories:
            self._categories.append(category)
            logger.info(f"Registered new category: {category}")
            return "category"
        elif subcategory and subcategory not in self._subcategories:
            self._subcategories.append(subcategory)
            logger.info(f"Registered new subcategory: {subcategory}")
            return "subcategory"
        return None
