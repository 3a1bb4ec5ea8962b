# smartspend/services/matcher.py
# Free-text category name -> one of the user's categories.

from __future__ import annotations

from typing import Optional, Sequence

from smartspend.models.records import Category


def match_category(candidate: str, categories: Sequence[Category]) -> Optional[Category]:
    """
    1) exact, case-insensitive
    2) substring either way: «food» -> «Food & Dining», «Health & Medical stuff» -> «Health & Medical»
    First hit in list order wins. None means «not found», not an error.
    """
    want = (candidate or "").strip().lower()
    if not want:
        return None

    for cat in categories:
        if cat.name.lower() == want:
            return cat

    for cat in categories:
        have = cat.name.lower()
        if want in have or have in want:
            return cat
    return None
