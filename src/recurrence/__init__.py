"""Recurrence — повторяющиеся календарные события и их алгебра.

- Recurrence: старт, конец и одно правило; occurs_on и each_occurrence
- Составные предикаты: union / intersect / difference / complement
- load_recurrence: построение из сериализованного определения
"""

from .loader import load_recurrence, load_recurrence_json
from .predicate import (
    ComplementPredicate,
    CompositePredicate,
    DifferencePredicate,
    IntersectionPredicate,
    OccurrencePredicate,
    SymmetricDifferencePredicate,
    UnionPredicate,
)
from .recurrence import Recurrence, new_recurrence

__all__ = [
    # Leaf
    "Recurrence",
    "new_recurrence",
    # Predicates
    "OccurrencePredicate",
    "CompositePredicate",
    "UnionPredicate",
    "IntersectionPredicate",
    "DifferencePredicate",
    "ComplementPredicate",
    "SymmetricDifferencePredicate",
    # Loader
    "load_recurrence",
    "load_recurrence_json",
]
