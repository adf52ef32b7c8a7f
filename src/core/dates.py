"""
Dates — Нормализация дат и календарная арифметика

Единственный допустимый способ превращения внешнего представления даты
во внутренний тип (datetime.date). Все границы API вызывают normalize_date
сразу; внутренняя логика никогда не работает с частичными датами и временем суток.

Поддерживаемые формы:
- date
- datetime (время суток отбрасывается)
- ISO-подобная строка ('2008-08-27', '2008-10-1')
- тройка (year, month, day) — tuple или list
- именованные константы: 'epoch' (1970-01-01), 'today' / 'now'
"""

import calendar
from datetime import date, datetime
from typing import Final, Tuple, Union

from dateutil import parser as date_parser

from src.core.errors import InvalidDateArgument

DateLike = Union[date, datetime, str, Tuple[int, int, int], list]


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

EPOCH: Final[date] = date(1970, 1, 1)

DAYS_PER_WEEK: Final[int] = 7

MONTHS_PER_YEAR: Final[int] = 12

# Значения по умолчанию для недостающих полей в строке ('2008' → 2008-01-01)
_PARSE_DEFAULT: Final[datetime] = datetime(EPOCH.year, EPOCH.month, EPOCH.day)


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def _named_date(name: str):
    key = name.strip().lower()
    if key == "epoch":
        return EPOCH
    if key in ("today", "now"):
        return date.today()
    return None


def _date_from_string(text: str) -> date:
    named = _named_date(text)
    if named is not None:
        return named

    if not text.strip():
        raise InvalidDateArgument("invalid date string ''")

    try:
        return date_parser.parse(text, default=_PARSE_DEFAULT).date()
    except (ValueError, OverflowError) as e:
        raise InvalidDateArgument(f"invalid date string {text!r}: {e}") from e


def _date_from_triple(parts) -> date:
    if len(parts) != 3 or not all(
        isinstance(p, int) and not isinstance(p, bool) for p in parts
    ):
        raise InvalidDateArgument(f"invalid date triple {parts!r}, expected (year, month, day)")

    try:
        return date(*parts)
    except ValueError as e:
        raise InvalidDateArgument(f"invalid date triple {parts!r}: {e}") from e


def normalize_date(value: DateLike) -> date:
    """
    Конверсия внешнего представления даты → datetime.date.

    Args:
        value: date, datetime, строка, тройка (Y, m, d) или имя
            ('epoch', 'today', 'now')

    Returns:
        Календарная дата без времени суток

    Raises:
        InvalidDateArgument: Если форма аргумента не поддерживается,
            строка не разбирается или дата не существует (например, 2009-02-29)

    Examples:
        >>> normalize_date('2008-10-1')
        datetime.date(2008, 10, 1)
        >>> normalize_date((2008, 8, 27))
        datetime.date(2008, 8, 27)
        >>> normalize_date('epoch')
        datetime.date(1970, 1, 1)
    """
    # datetime: подкласс date, проверяется первым
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return _date_from_string(value)
    if isinstance(value, (tuple, list)):
        return _date_from_triple(value)

    raise InvalidDateArgument(f"invalid date format {value!r}")


# =============================================================================
# КАЛЕНДАРНАЯ АРИФМЕТИКА
# =============================================================================


def days_in_month(year: int, month: int) -> int:
    """
    Количество дней в месяце (пролептический григорианский календарь).

    Args:
        year: Год
        month: Месяц 1..12

    Returns:
        28..31
    """
    return calendar.monthrange(year, month)[1]


def days_between(earlier: date, later: date) -> int:
    """Целое число дней от earlier до later (может быть отрицательным)."""
    return (later - earlier).days


def months_between(earlier: date, later: date) -> int:
    """Число календарных месяцев от earlier до later, без учёта дня месяца."""
    return (later.year - earlier.year) * MONTHS_PER_YEAR + (later.month - earlier.month)
