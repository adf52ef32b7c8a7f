"""Recurrence — листовой узел: стартовая дата, конечная дата и одно правило.

Примеры:

    Recurrence("epoch", every_other="day")                  # каждый второй день
    Recurrence("epoch", every_nth="day", interval=10)       # каждый 10-й день
    Recurrence("epoch", every_first="wednesday", of="month")  # первая среда месяца
    Recurrence("epoch", every_last="thursday", of="month")    # последний четверг месяца
    Recurrence((2008, 1, 7), every="week")                  # 2008-01-07 — понедельник
    Recurrence((2008, 1, 4), {"every": "month"})            # 4-е число каждого месяца

Опции можно передать словарём, именованными аргументами или готовым RuleSpec.
"""

import logging
from datetime import date
from itertools import islice
from typing import Any, Iterator, Mapping, Optional, Union

from src.core.dates import DateLike, normalize_date
from src.core.domain.rule_spec import RuleSpec
from src.core.domain.rules import RepetitionRule, Weekday, WeekdayFormat
from src.core.math.matching import rule_matches
from src.core.math.stepping import iter_occurrences
from src.recurrence.predicate import OccurrencePredicate

logger = logging.getLogger(__name__)


class Recurrence(OccurrencePredicate):
    """Повторение с началом start_date, необязательным концом end_date и правилом.

    Неизменяемо после конструирования. end_date раньше start_date даёт пустое
    повторение, а не ошибку.

    Attributes:
        start_date: Стартовая дата (все даты раньше — не повторения)
        end_date: Конечная дата включительно или None
        rule: EveryRule | EveryNthRule | NthWeekdayRule
    """

    __slots__ = ("_start_date", "_end_date", "_rule", "_spec")

    def __init__(
        self,
        start: DateLike,
        options: Optional[Union[Mapping[str, Any], RuleSpec]] = None,
        **kwargs: Any,
    ):
        """
        Args:
            start: Стартовая дата в любой форме normalize_date
            options: Опции правила (словарь или RuleSpec)
            **kwargs: Опции правила именованными аргументами (дополняют options)

        Raises:
            InvalidDateArgument: start или until не являются датой
            MissingRepeatModifier, InvalidRecurrenceType, MissingPeriod,
            MissingInterval, ...: ошибки грамматики правила
        """
        start_date = normalize_date(start)

        if isinstance(options, RuleSpec):
            if kwargs:
                raise TypeError("keyword options cannot be combined with a RuleSpec")
            spec = options
        else:
            merged = dict(options or {})
            merged.update(kwargs)
            spec = RuleSpec.from_options(merged)

        rule = spec.build_rule()
        end_date = normalize_date(spec.until) if spec.until is not None else None

        object.__setattr__(self, "_start_date", start_date)
        object.__setattr__(self, "_end_date", end_date)
        object.__setattr__(self, "_rule", rule)
        object.__setattr__(self, "_spec", spec)

        logger.debug(
            "Recurrence created: start=%s end=%s rule=%r", start_date, end_date, rule
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return (
            f"Recurrence(start_date={self._start_date!r}, end_date={self._end_date!r}, "
            f"rule={self._rule!r})"
        )

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def start_date(self) -> date:
        return self._start_date

    @property
    def end_date(self) -> Optional[date]:
        return self._end_date

    @property
    def rule(self) -> RepetitionRule:
        return self._rule

    @property
    def spec(self) -> RuleSpec:
        """Исходные опции правила."""
        return self._spec

    @property
    def interval(self) -> int:
        """Интервал правила; для nth-weekday правил — 1."""
        return getattr(self._rule, "interval", 1)

    def starting_weekday(self, fmt: Union[str, WeekdayFormat] = WeekdayFormat.LONG) -> str:
        """
        День недели стартовой даты.

        Args:
            fmt: 'long' ('tuesday') или 'short' ('tue')

        Returns:
            Имя дня недели

        Raises:
            ValueError: Неизвестный формат

        Examples:
            >>> Recurrence((2008, 1, 1), every="day").starting_weekday()
            'tuesday'
            >>> Recurrence((2008, 1, 1), every="day").starting_weekday("short")
            'tue'
        """
        try:
            fmt = WeekdayFormat(fmt)
        except ValueError:
            raise ValueError(f"invalid weekday format {fmt!r}") from None

        weekday = Weekday.of(self._start_date)
        return weekday.value if fmt == WeekdayFormat.LONG else weekday.short

    # -------------------------------------------------------------------------
    # Предикат
    # -------------------------------------------------------------------------

    def within_bounds(self, day: date) -> bool:
        """start_date ≤ day ≤ end_date (если end_date задан)."""
        if day < self._start_date:
            return False
        return self._end_date is None or day <= self._end_date

    def occurs_on(self, value: DateLike) -> bool:
        """
        Происходит ли повторение в указанную дату.

        Учитывается только дата; время суток отбрасывается.

        Args:
            value: Дата в любой форме normalize_date

        Returns:
            True если дата в границах и совпадает с правилом

        Raises:
            InvalidDateArgument: value не является датой
        """
        day = normalize_date(value)
        if not self.within_bounds(day):
            return False
        return rule_matches(self._rule, self._start_date, day)

    # -------------------------------------------------------------------------
    # Итерация
    # -------------------------------------------------------------------------

    def each_occurrence(self) -> Iterator[date]:
        """
        Бесконечная ленивая последовательность дат повторения начиная со start_date.

        end_date не учитывается: ограничивать потребление должен вызывающий код
        (break, islice) или occurrences().

        Для month-правил день месяца ограничивается длиной месяца, опорным
        остаётся день start_date: 2008-01-31 → 01-31, 02-29, 03-31, 04-30.

        Returns:
            Независимый курсор; каждый вызов начинает заново

        Raises:
            UnsupportedIteration: nth-weekday или weekend/workday правило
        """
        return self._iterate(None)

    def __iter__(self) -> Iterator[date]:
        return self.each_occurrence()

    def occurrences(self, limit: Optional[int] = None) -> Iterator[date]:
        """
        each_occurrence, ограниченный end_date и (необязательно) числом дат.

        Шаг за end_date не вычисляется, поэтому ошибка шага за границей
        (например, 29 февраля в невисокосном году) не поднимается.

        Args:
            limit: Максимальное число дат (None — без ограничения)

        Returns:
            Iterator[date]; бесконечен, если нет ни end_date, ни limit
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        iterator = self._iterate(self._end_date)
        if limit is not None:
            iterator = islice(iterator, limit)
        return iterator

    def _iterate(self, until: Optional[date]) -> Iterator[date]:
        iterator = iter_occurrences(self._rule, self._start_date, until)
        logger.debug(
            "Iteration started: start=%s until=%s rule=%r", self._start_date, until, self._rule
        )
        return iterator


def new_recurrence(start: DateLike, options: Mapping[str, Any]) -> Recurrence:
    """Recurrence(start, options) в функциональной форме."""
    return Recurrence(start, options)
