# smartspend/services/categorizer.py
"""
Expense name -> Category.

Order of attempts:
  1. remote classifier (if configured); an exact, case-insensitive name
     from its answer wins, an unknown name goes straight to the default;
  2. if the remote call fails (or there is no classifier) -> keyword table;
  3. default category: first is_default, otherwise the first in the list.

resolve() always returns one of the categories it was given.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from smartspend.models.category import DEFAULT_EMOJI
from smartspend.models.records import Category
from smartspend.services.ai import ExpenseClassifier

log = logging.getLogger(__name__)

# Fixed order: earlier entries win. Keywords are lowercase substrings.
FALLBACK_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Food & Dining", (
        "coffee", "restaurant", "food", "pizza", "burger", "lunch", "dinner",
        "breakfast", "starbucks", "mcdonalds", "kfc", "subway", "meal", "snack",
        "cafe", "bar", "pub", "drink", "beer", "wine",
    )),
    ("Transportation", (
        "uber", "lyft", "taxi", "bus", "metro", "gas", "fuel", "parking",
        "train", "flight", "car", "toll", "highway", "transport",
    )),
    ("Shopping", (
        "amazon", "ebay", "shop", "store", "mall", "clothes", "clothing",
        "shoes", "electronics", "gadget", "phone", "laptop", "computer",
    )),
    ("Groceries", (
        "grocery", "supermarket", "walmart", "target", "costco", "milk",
        "bread", "vegetables", "fruits", "meat", "chicken", "fish",
    )),
    ("Utilities", (
        "electricity", "water", "gas bill", "internet", "phone bill",
        "cable", "wifi", "utility", "electric", "heating",
    )),
    ("Entertainment", (
        "movie", "cinema", "netflix", "spotify", "game", "concert",
        "theater", "show", "ticket", "entertainment", "streaming",
    )),
    ("Health & Medical", (
        "doctor", "hospital", "pharmacy", "medicine", "medical", "health",
        "dentist", "clinic", "prescription", "checkup",
    )),
    ("Travel", (
        "hotel", "flight", "airline", "vacation", "trip", "travel",
        "airbnb", "booking", "luggage", "visa", "passport",
    )),
)


def default_category(categories: Sequence[Category]) -> Category:
    if not categories:
        raise ValueError("no categories to choose from")
    for cat in categories:
        if cat.is_default:
            return cat
    return categories[0]


def keyword_category(expense_name: str, categories: Sequence[Category]) -> Optional[Category]:
    name = (expense_name or "").lower()
    by_name = {c.name: c for c in reversed(categories)}  # first occurrence wins
    for cat_name, keywords in FALLBACK_KEYWORDS:
        cat = by_name.get(cat_name)
        if cat is None:
            continue
        for kw in keywords:
            if kw in name:
                return cat
    return None


def fallback_categorize(expense_name: str, categories: Sequence[Category]) -> Category:
    return keyword_category(expense_name, categories) or default_category(categories)


def _first_line(text: str) -> str:
    lines = (text or "").strip().splitlines()
    return lines[0].strip() if lines else ""


class CategoryResolver:
    def __init__(self, classifier: Optional[ExpenseClassifier] = None) -> None:
        self.classifier = classifier

    @property
    def ai_enabled(self) -> bool:
        return self.classifier is not None

    async def resolve(self, expense_name: str, categories: Sequence[Category]) -> Category:
        if not categories:
            raise ValueError("no categories to choose from")

        if self.classifier is None:
            return fallback_categorize(expense_name, categories)

        try:
            answer = await self.classifier.classify_expense(expense_name, categories)
        except Exception as e:
            log.warning('classifier_failed expense="%s" err="%s"', expense_name, e)
            return fallback_categorize(expense_name, categories)

        suggested = _first_line(answer).lower()
        for cat in categories:
            if cat.name.lower() == suggested:
                return cat

        log.warning('classifier_unknown_category expense="%s" answer="%s"', expense_name, answer)
        return default_category(categories)

    async def suggest_emoji(self, category_name: str) -> str:
        if self.classifier is None:
            return DEFAULT_EMOJI
        try:
            emoji = (await self.classifier.suggest_emoji(category_name)).strip()
        except Exception as e:
            log.warning('emoji_suggest_failed category="%s" err="%s"', category_name, e)
            return DEFAULT_EMOJI
        if not emoji or len(emoji) > 4:
            return DEFAULT_EMOJI
        return emoji
