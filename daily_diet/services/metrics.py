"""Aggregate counts and the in-diet streak record for a session."""

from __future__ import annotations

from typing import Iterable

from ..schemas.meal import MealMetrics
from .meal_store import MealStore


def longest_diet_streak(flags: Iterable[bool]) -> int:
    """Length of the longest run of consecutive ``True`` values.

    ``flags`` must already be in chronological order. A run still open when
    the sequence ends is a candidate too.
    """
    best = 0
    current = 0
    for in_diet in flags:
        if in_diet:
            current += 1
            continue
        best = max(best, current)
        current = 0
    return max(best, current)


def compute_metrics(store: MealStore, session_id: str) -> MealMetrics:
    total = store.count_by_session(session_id)
    in_diet = store.count_by_session(session_id, in_diet=True)
    history = store.list_chronological(session_id)
    return MealMetrics(
        total_meals=total,
        total_diet_meals=in_diet,
        total_non_diet_meals=total - in_diet,
        diet_sequence_record=longest_diet_streak(meal.in_diet for meal in history),
    )
