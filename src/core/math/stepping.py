"""
Stepping — Пошаговая генерация дат повторения

Ленивая, монотонно возрастающая последовательность дат для правила.
k-я дата вычисляется от якоря (start или первый weekday ≥ start), а не от
предыдущей даты, поэтому clamp дня месяца не накапливается.

Шаг по единицам (n = interval):
- day:     якорь + k·n дней
- week:    якорь + k·n недель
- weekday: первый weekday ≥ start + k·n недель
- month:   якорь + relativedelta(months=k·n), день = min(день start, дней в месяце)
- year:    якорь + k·n лет, месяц и день сохраняются

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждая следующая дата строго больше предыдущей (иначе NonAdvancingStep)
2. nth-weekday и weekend/workday правила не итерируются (UnsupportedIteration)
3. 29 февраля + n лет в невисокосный год — фатальная ошибка шага
4. С границей until шаг за её пределы не вычисляется
"""

from datetime import date, timedelta
from typing import Iterator, Optional

from dateutil.relativedelta import relativedelta

from src.core.domain.rules import (
    ITERABLE_UNITS,
    NthWeekdayRule,
    RepetitionRule,
    Unit,
    Weekday,
)
from src.core.errors import NonAdvancingStep, UnsupportedIteration
from src.core.math.matching import first_weekday_on_or_after


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def ensure_iterable(rule: RepetitionRule) -> None:
    """
    Проверка, что для правила определён алгоритм шага.

    Raises:
        UnsupportedIteration: nth-weekday правило или weekend/workday
    """
    if isinstance(rule, NthWeekdayRule):
        raise UnsupportedIteration(
            f"iteration is not supported for nth weekday of {rule.period.value} rules"
        )
    if rule.unit not in ITERABLE_UNITS:
        raise UnsupportedIteration(f"iteration is not supported for unit {rule.unit.value}")


# =============================================================================
# ШАГ
# =============================================================================


def first_occurrence(rule: RepetitionRule, start: date) -> date:
    """Первая дата последовательности: start или первый weekday ≥ start"""
    if isinstance(rule.unit, Weekday):
        return first_weekday_on_or_after(start, rule.unit)
    return start


def occurrence_at(rule: RepetitionRule, anchor: date, k: int) -> date:
    """
    k-я дата последовательности (k = 0 — сам якорь).

    Args:
        rule: Итерируемое правило (EveryRule | EveryNthRule)
        anchor: Первая дата последовательности (см. first_occurrence)
        k: Номер шага (≥ 0)

    Returns:
        Дата k-го шага

    Raises:
        UnsupportedIteration: year-шаг попал на 29 февраля невисокосного года

    Examples:
        >>> occurrence_at(EveryRule(unit="month"), date(2008, 1, 31), 1)
        datetime.date(2008, 2, 29)
        >>> occurrence_at(EveryRule(unit="month"), date(2008, 1, 31), 2)
        datetime.date(2008, 3, 31)
    """
    unit = rule.unit
    steps = k * rule.interval

    if unit == Unit.DAY:
        return anchor + timedelta(days=steps)
    if unit == Unit.WEEK or isinstance(unit, Weekday):
        return anchor + timedelta(weeks=steps)
    if unit == Unit.MONTH:
        return anchor + relativedelta(months=steps)
    if unit == Unit.YEAR:
        shifted = anchor + relativedelta(years=steps)
        # relativedelta переносит 29 февраля на 28-е; такой шаг не допускается
        if shifted.day != anchor.day:
            raise UnsupportedIteration(
                f"yearly step from {anchor.isoformat()} lands on a nonexistent date "
                f"in {shifted.year}"
            )
        return shifted

    raise UnsupportedIteration(f"iteration is not supported for unit {unit.value}")


def earliest_at(rule: RepetitionRule, anchor: date, k: int) -> date:
    """
    Нижняя граница k-й даты, вычисляемая без ошибок шага.

    Для day/week совпадает с occurrence_at; для month — 1-е число
    месяца шага, для year — 1 января года шага.
    """
    steps = k * rule.interval
    if rule.unit == Unit.MONTH:
        return anchor + relativedelta(months=steps, day=1)
    if rule.unit == Unit.YEAR:
        return date(anchor.year + steps, 1, 1)
    return occurrence_at(rule, anchor, k)


# =============================================================================
# ГЕНЕРАТОР
# =============================================================================


def _generate(rule: RepetitionRule, start: date, until: Optional[date]) -> Iterator[date]:
    anchor = first_occurrence(rule, start)
    previous = None
    k = 0

    while True:
        if until is not None and earliest_at(rule, anchor, k) > until:
            return

        current = occurrence_at(rule, anchor, k)
        if previous is not None and current <= previous:
            raise NonAdvancingStep(
                f"step did not advance: {previous.isoformat()} -> {current.isoformat()}"
            )
        if until is not None and current > until:
            return

        yield current
        previous = current
        k += 1


def iter_occurrences(
    rule: RepetitionRule, start: date, until: Optional[date] = None
) -> Iterator[date]:
    """
    Ленивая последовательность дат повторения.

    Проверка итерируемости выполняется сразу, при вызове, а не при первом next().
    Каждый вызов возвращает независимый курсор.

    Args:
        rule: Правило повторения
        start: Стартовая дата
        until: Конечная дата включительно (None — бесконечно)

    Returns:
        Iterator[date], возрастающий строго

    Raises:
        UnsupportedIteration: Правило не итерируется
    """
    ensure_iterable(rule)
    return _generate(rule, start, until)
