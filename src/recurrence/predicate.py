"""Occurrence predicates — общий интерфейс и составные узлы.

Любой узел (Recurrence или составной) отвечает на occurs_on(date) -> bool
и поддерживает алгебру множеств:
- union (|, join)            — A OR B
- intersect (&)              — A AND B
- difference (-, diff)       — A AND NOT B
- complement (~)             — NOT A
- symmetric_difference (^)   — A XOR B

Составные узлы неизменяемы, ничего не вычисляют при построении и
вычисляют обоих потомков на каждой дате (без short-circuit). Дерево
ацикличное по построению: комбинатор оборачивает только уже готовые узлы,
поэтому одно подвыражение можно безопасно использовать в нескольких деревьях.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from src.core.dates import DateLike, normalize_date


class OccurrencePredicate(ABC):
    """Предикат повторения: occurs_on + операции над множествами."""

    @abstractmethod
    def occurs_on(self, value: DateLike) -> bool:
        """Происходит ли повторение в указанную дату."""

    # -------------------------------------------------------------------------
    # Алгебра
    # -------------------------------------------------------------------------

    def union(self, other: "OccurrencePredicate") -> "UnionPredicate":
        """(a.union(b)).occurs_on(d) ⇔ a.occurs_on(d) OR b.occurs_on(d)"""
        return UnionPredicate(self, _require_predicate(other))

    def intersect(self, other: "OccurrencePredicate") -> "IntersectionPredicate":
        """(a.intersect(b)).occurs_on(d) ⇔ a.occurs_on(d) AND b.occurs_on(d)"""
        return IntersectionPredicate(self, _require_predicate(other))

    def difference(self, other: "OccurrencePredicate") -> "DifferencePredicate":
        """Порядок важен: (a.difference(b)).occurs_on(d) ⇔ a AND NOT b"""
        return DifferencePredicate(self, _require_predicate(other))

    def complement(self) -> "ComplementPredicate":
        """occurs_on инвертируется"""
        return ComplementPredicate(self)

    def symmetric_difference(self, other: "OccurrencePredicate") -> "SymmetricDifferencePredicate":
        """Ровно один из двух предикатов"""
        return SymmetricDifferencePredicate(self, _require_predicate(other))

    join = union
    diff = difference

    def __or__(self, other):
        if not isinstance(other, OccurrencePredicate):
            return NotImplemented
        return self.union(other)

    def __and__(self, other):
        if not isinstance(other, OccurrencePredicate):
            return NotImplemented
        return self.intersect(other)

    def __sub__(self, other):
        if not isinstance(other, OccurrencePredicate):
            return NotImplemented
        return self.difference(other)

    def __xor__(self, other):
        if not isinstance(other, OccurrencePredicate):
            return NotImplemented
        return self.symmetric_difference(other)

    def __invert__(self):
        return self.complement()

    def __contains__(self, value: DateLike) -> bool:
        return self.occurs_on(value)

    # -------------------------------------------------------------------------
    # Перебор в конечном окне
    # -------------------------------------------------------------------------

    def occurrences_between(self, first: DateLike, last: DateLike) -> Iterator[date]:
        """
        Даты из [first, last], на которые приходится повторение.

        Ленивый перебор по дням. Окно конечно, поэтому работает и для
        составных предикатов, которые each_occurrence не поддерживают.

        Args:
            first: Начало окна (включительно)
            last: Конец окна (включительно)

        Yields:
            Даты в возрастающем порядке
        """
        day = normalize_date(first)
        end = normalize_date(last)
        while day <= end:
            if self.occurs_on(day):
                yield day
            day += timedelta(days=1)


def _require_predicate(other) -> OccurrencePredicate:
    if not isinstance(other, OccurrencePredicate):
        raise TypeError(f"expected an occurrence predicate, got {type(other).__name__}")
    return other


# =============================================================================
# СОСТАВНЫЕ УЗЛЫ
# =============================================================================


@dataclass(frozen=True)
class CompositePredicate(OccurrencePredicate):
    """Базовый составной узел с одним или двумя потомками."""

    def occurs_on(self, value: DateLike) -> bool:
        return self.evaluate(normalize_date(value))

    @abstractmethod
    def evaluate(self, day: date) -> bool:
        """Булева комбинация результатов потомков на нормализованной дате."""


@dataclass(frozen=True)
class UnionPredicate(CompositePredicate):
    left: OccurrencePredicate
    right: OccurrencePredicate

    def evaluate(self, day: date) -> bool:
        a = self.left.occurs_on(day)
        b = self.right.occurs_on(day)
        return a or b


@dataclass(frozen=True)
class IntersectionPredicate(CompositePredicate):
    left: OccurrencePredicate
    right: OccurrencePredicate

    def evaluate(self, day: date) -> bool:
        a = self.left.occurs_on(day)
        b = self.right.occurs_on(day)
        return a and b


@dataclass(frozen=True)
class DifferencePredicate(CompositePredicate):
    left: OccurrencePredicate
    right: OccurrencePredicate

    def evaluate(self, day: date) -> bool:
        a = self.left.occurs_on(day)
        b = self.right.occurs_on(day)
        return a and not b


@dataclass(frozen=True)
class SymmetricDifferencePredicate(CompositePredicate):
    left: OccurrencePredicate
    right: OccurrencePredicate

    def evaluate(self, day: date) -> bool:
        return self.left.occurs_on(day) != self.right.occurs_on(day)


@dataclass(frozen=True)
class ComplementPredicate(CompositePredicate):
    operand: OccurrencePredicate

    def evaluate(self, day: date) -> bool:
        return not self.operand.occurs_on(day)
