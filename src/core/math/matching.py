"""
Matching — Проверка совпадения даты с одним правилом повторения

Чистые функции без состояния. Границы start/end здесь не проверяются:
это делает Recurrence.occurs_on до вызова matching.

Алгоритмы по единицам:
- day:     (candidate − start) mod n == 0
- week:    (candidate − start) mod 7n == 0
- month:   тот же день месяца И месяцев прошло ≡ 0 mod n (без clamp);
           месяцы считаются с учётом лет (months_between), а не как
           разность номеров месяцев: при n, не делящем 12, иначе
           occurs_on расходился бы с each_occurrence
- year:    тот же день и месяц И лет прошло ≡ 0 mod n
- weekday: тот же день недели; при n > 1 недель от первого такого дня
           начиная со start ≡ 0 mod n (недели считаются от start, не от epoch)
- weekend: суббота/воскресенье; workday — отрицание
"""

from datetime import date, timedelta

from src.core.dates import DAYS_PER_WEEK, days_between, days_in_month, months_between
from src.core.domain.rules import (
    LAST,
    EveryNthRule,
    EveryRule,
    NthWeekdayRule,
    Period,
    RepetitionRule,
    Unit,
    Weekday,
)

WEEKEND_DAYS = frozenset({Weekday.SATURDAY, Weekday.SUNDAY})


# =============================================================================
# ВЫХОДНЫЕ / РАБОЧИЕ ДНИ
# =============================================================================


def is_weekend(candidate: date) -> bool:
    """Суббота или воскресенье"""
    return Weekday.of(candidate) in WEEKEND_DAYS


def is_workday(candidate: date) -> bool:
    """Понедельник..пятница"""
    return not is_weekend(candidate)


# =============================================================================
# WEEKDAY-ЯКОРЬ
# =============================================================================


def first_weekday_on_or_after(start: date, weekday: Weekday) -> date:
    """
    Первая дата ≥ start, приходящаяся на weekday.

    Examples:
        >>> first_weekday_on_or_after(date(2008, 8, 1), Weekday.WEDNESDAY)  # пятница → среда
        datetime.date(2008, 8, 6)
    """
    offset = (weekday.index - start.weekday()) % DAYS_PER_WEEK
    return start + timedelta(days=offset)


def weekday_repeats_on(start: date, candidate: date, weekday: Weekday, n: int = 1) -> bool:
    """
    Совпадение с "каждый n-й weekday" начиная со start.

    Args:
        start: Стартовая дата повторения
        candidate: Проверяемая дата (≥ start)
        weekday: Целевой день недели
        n: Интервал в неделях

    Returns:
        True если candidate — weekday и номер недели от якоря кратен n
    """
    if Weekday.of(candidate) != weekday:
        return False
    if n == 1:
        return True

    anchor = first_weekday_on_or_after(start, weekday)
    weeks = days_between(anchor, candidate) // DAYS_PER_WEEK
    return weeks % n == 0


# =============================================================================
# ИНТЕРВАЛЬНЫЕ ЕДИНИЦЫ
# =============================================================================


def recurrence_repeats_on(start: date, candidate: date, unit, n: int = 1) -> bool:
    """
    Совпадение candidate с правилом "каждую n-ю единицу unit" от start.

    Args:
        start: Стартовая дата
        candidate: Проверяемая дата
        unit: Unit (day/week/month/year/weekend/workday) или Weekday
        n: Интервал (≥ 1)

    Returns:
        True если candidate попадает на повторение

    Raises:
        ValueError: Если n < 1 или unit неизвестен
    """
    if n < 1:
        raise ValueError(f"interval must be positive, got {n}")

    if isinstance(unit, Weekday):
        return weekday_repeats_on(start, candidate, unit, n)

    if unit == Unit.DAY:
        return days_between(start, candidate) % n == 0
    if unit == Unit.WEEK:
        return days_between(start, candidate) % (n * DAYS_PER_WEEK) == 0
    if unit == Unit.MONTH:
        # Точное совпадение дня месяца: 31-е никогда не совпадёт с 30-дневным месяцем.
        # Прошедшие месяцы включают годы: каждый 5-й месяц от 2008-01 попадает на 2009-04
        return start.day == candidate.day and months_between(start, candidate) % n == 0
    if unit == Unit.YEAR:
        return (
            start.day == candidate.day
            and start.month == candidate.month
            and (candidate.year - start.year) % n == 0
        )
    if unit == Unit.WEEKEND:
        return is_weekend(candidate)
    if unit == Unit.WORKDAY:
        return is_workday(candidate)

    raise ValueError(f"invalid recurrence type {unit!r}")


# =============================================================================
# NTH WEEKDAY OF PERIOD
# =============================================================================


def nth_weekday_in_month(ordinal: int, weekday: Weekday, candidate: date) -> bool:
    """
    Является ли candidate ordinal-м weekday своего месяца.

    Каждый weekday встречается ровно один раз в каждом 7-дневном окне,
    начиная с 1-го числа:
    - ordinal = k: 7(k−1) < day ≤ 7k
    - ordinal = LAST: day > days_in_month − 7

    Examples:
        >>> nth_weekday_in_month(1, Weekday.THURSDAY, date(2008, 9, 4))
        True
        >>> nth_weekday_in_month(LAST, Weekday.THURSDAY, date(2008, 9, 25))
        True
    """
    if Weekday.of(candidate) != weekday:
        return False

    if ordinal == LAST:
        return candidate.day > days_in_month(candidate.year, candidate.month) - DAYS_PER_WEEK

    return DAYS_PER_WEEK * (ordinal - 1) < candidate.day <= DAYS_PER_WEEK * ordinal


def weekday_is_nth_in(ordinal: int, period: Period, weekday: Weekday, candidate: date) -> bool:
    """Диспетчер по периоду (поддерживается только month)"""
    if period == Period.MONTH:
        return nth_weekday_in_month(ordinal, weekday, candidate)
    raise ValueError(f"unsupported period {period!r}")


# =============================================================================
# ДИСПЕТЧЕР ПО ПРАВИЛУ
# =============================================================================


def rule_matches(rule: RepetitionRule, start: date, candidate: date) -> bool:
    """
    Совпадение candidate с правилом (без проверки границ start/end).

    Args:
        rule: EveryRule | EveryNthRule | NthWeekdayRule
        start: Стартовая дата повторения
        candidate: Проверяемая дата

    Returns:
        True если правило срабатывает на candidate
    """
    if isinstance(rule, NthWeekdayRule):
        return weekday_is_nth_in(rule.ordinal, rule.period, rule.weekday, candidate)
    if isinstance(rule, (EveryRule, EveryNthRule)):
        return recurrence_repeats_on(start, candidate, rule.unit, rule.interval)

    raise TypeError(f"unknown rule type {type(rule).__name__}")
