"""
Rules — Модели правил повторения (RepetitionRule)

Immutable Pydantic модели для трёх видов правил:
- EveryRule(unit) — каждый день/неделю/месяц/год/weekday/weekend/workday
- EveryNthRule(unit, interval) — каждый n-й день/неделю/месяц/год/weekday
- NthWeekdayRule(ordinal, weekday, period) — n-й (или последний) weekday месяца

Недопустимая комбинация unit/weekday/period — ошибка конструирования
(ValidationError), а не условие, обнаруживаемое при первом запросе.
"""

from datetime import date
from enum import Enum
from typing import Final, FrozenSet, Literal, Union

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class Unit(str, Enum):
    """Календарная единица повторения"""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    WEEKEND = "weekend"
    WORKDAY = "workday"


class Weekday(str, Enum):
    """
    День недели.

    Порядок членов совпадает с date.weekday(): MONDAY = 0 ... SUNDAY = 6.
    """

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def index(self) -> int:
        """Номер дня недели в нумерации date.weekday()"""
        return _WEEKDAY_ORDER.index(self)

    @property
    def short(self) -> str:
        """Короткое имя ('wed')"""
        return self.value[:3]

    @classmethod
    def of(cls, value: date) -> "Weekday":
        """День недели для даты"""
        return _WEEKDAY_ORDER[value.weekday()]


_WEEKDAY_ORDER: Final = tuple(Weekday)


class Period(str, Enum):
    """Период для nth-weekday правил (пока только месяц)"""

    MONTH = "month"


class WeekdayFormat(str, Enum):
    """Формат имени дня недели"""

    LONG = "long"
    SHORT = "short"


# =============================================================================
# ДОПУСТИМЫЕ ЕДИНИЦЫ
# =============================================================================

# Маркер "последний" для ordinal
LAST: Final[int] = -1

# Максимальный ordinal: в месяце не больше пяти одинаковых weekday
MAX_ORDINAL: Final[int] = 5

CALENDAR_UNITS: Final[FrozenSet[Unit]] = frozenset(
    {Unit.DAY, Unit.WEEK, Unit.MONTH, Unit.YEAR}
)

# every: все календарные единицы, weekend/workday и любой weekday
EVERY_UNITS: Final[FrozenSet[Union[Unit, Weekday]]] = frozenset(Unit) | frozenset(Weekday)

# every_other / every_third / every_nth: без weekend/workday
INTERVAL_UNITS: Final[FrozenSet[Union[Unit, Weekday]]] = CALENDAR_UNITS | frozenset(Weekday)

# Единицы, для которых определён алгоритм шага итерации
ITERABLE_UNITS: Final[FrozenSet[Union[Unit, Weekday]]] = INTERVAL_UNITS


# =============================================================================
# RULE MODELS
# =============================================================================


class EveryRule(BaseModel):
    """
    Every(unit): каждую единицу.

    Для weekday — каждый такой день недели начиная со start_date.
    """

    kind: Literal["every"] = "every"
    unit: Union[Unit, Weekday] = Field(..., description="Единица повторения")

    model_config = {"frozen": True}

    @property
    def interval(self) -> int:
        return 1


class EveryNthRule(BaseModel):
    """
    EveryNth(unit, n): каждую n-ю единицу.

    every_other = interval 2, every_third = interval 3.
    weekend/workday с интервалом не поддерживаются.
    """

    kind: Literal["every_nth"] = "every_nth"
    unit: Union[Unit, Weekday] = Field(..., description="Единица повторения")
    interval: int = Field(..., ge=1, description="Интервал повторения (≥ 1)")

    model_config = {"frozen": True}

    @field_validator("unit")
    @classmethod
    def validate_interval_unit(cls, v: Union[Unit, Weekday]) -> Union[Unit, Weekday]:
        """weekend/workday недопустимы для интервальных правил"""
        if v not in INTERVAL_UNITS:
            raise ValueError(f"unit {v.value} cannot repeat with an interval")
        return v


class NthWeekdayRule(BaseModel):
    """
    NthWeekdayOfPeriod(ordinal, weekday, period): n-й weekday периода.

    ordinal: 1..5 или LAST (-1).
    """

    kind: Literal["nth_weekday"] = "nth_weekday"
    ordinal: int = Field(..., description="Номер вхождения weekday в периоде (LAST = -1)")
    weekday: Weekday = Field(..., description="День недели")
    period: Period = Field(Period.MONTH, description="Период (month)")

    model_config = {"frozen": True}

    @field_validator("ordinal")
    @classmethod
    def validate_ordinal(cls, v: int) -> int:
        """ordinal ∈ {1..MAX_ORDINAL} ∪ {LAST}"""
        if v != LAST and not 1 <= v <= MAX_ORDINAL:
            raise ValueError(f"ordinal must be 1..{MAX_ORDINAL} or LAST ({LAST}), got {v}")
        return v

    @property
    def is_last(self) -> bool:
        return self.ordinal == LAST


RepetitionRule = Union[EveryRule, EveryNthRule, NthWeekdayRule]
