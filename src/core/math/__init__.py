"""
Core math modules

Календарная арифметика повторений: проверка совпадения даты с правилом
и пошаговая генерация дат.
"""

# Matching
from src.core.math.matching import (
    WEEKEND_DAYS,
    first_weekday_on_or_after,
    is_weekend,
    is_workday,
    nth_weekday_in_month,
    recurrence_repeats_on,
    rule_matches,
    weekday_is_nth_in,
    weekday_repeats_on,
)

# Stepping
from src.core.math.stepping import (
    earliest_at,
    ensure_iterable,
    first_occurrence,
    iter_occurrences,
    occurrence_at,
)

__all__ = [
    # Matching
    "WEEKEND_DAYS",
    "is_weekend",
    "is_workday",
    "first_weekday_on_or_after",
    "weekday_repeats_on",
    "recurrence_repeats_on",
    "nth_weekday_in_month",
    "weekday_is_nth_in",
    "rule_matches",
    # Stepping
    "ensure_iterable",
    "first_occurrence",
    "occurrence_at",
    "earliest_at",
    "iter_occurrences",
]
