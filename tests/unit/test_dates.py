"""
Тесты для нормализации дат и календарной арифметики

Проверяет:
1. Все поддерживаемые формы аргумента даты
2. Отбрасывание времени суток
3. InvalidDateArgument для неверных форм и несуществующих дат
4. days_in_month / days_between / months_between
"""

from datetime import date, datetime

import pytest

from src.core.dates import (
    EPOCH,
    days_between,
    days_in_month,
    months_between,
    normalize_date,
)
from src.core.errors import InvalidDateArgument, RecurrenceError


# =============================================================================
# NORMALIZE DATE
# =============================================================================


class TestNormalizeDate:
    """Тесты для normalize_date"""

    def test_date_unchanged(self) -> None:
        """date возвращается как есть"""
        assert normalize_date(date(2008, 8, 27)) == date(2008, 8, 27)

    def test_datetime_time_discarded(self) -> None:
        """datetime → только дата"""
        result = normalize_date(datetime(2008, 8, 27, 23, 59, 59))
        assert result == date(2008, 8, 27)
        assert type(result) is date

    def test_iso_string(self) -> None:
        """Строка yyyy-mm-dd"""
        assert normalize_date("2008-08-27") == date(2008, 8, 27)

    def test_string_without_zero_padding(self) -> None:
        """Строка без ведущих нулей ('2008-10-1')"""
        assert normalize_date("2008-10-1") == date(2008, 10, 1)

    def test_string_with_time(self) -> None:
        """Время в строке отбрасывается"""
        assert normalize_date("2008-08-27T15:30:00") == date(2008, 8, 27)

    def test_tuple(self) -> None:
        """Тройка (Y, m, d)"""
        assert normalize_date((2008, 8, 27)) == date(2008, 8, 27)

    def test_list(self) -> None:
        """Список [Y, m, d]"""
        assert normalize_date([2008, 1, 31]) == date(2008, 1, 31)

    def test_epoch(self) -> None:
        """'epoch' → 1970-01-01"""
        assert normalize_date("epoch") == date(1970, 1, 1)
        assert normalize_date("EPOCH") == EPOCH

    def test_today_and_now(self) -> None:
        """'today' / 'now' → текущая дата"""
        before = date.today()
        today = normalize_date("today")
        now = normalize_date("now")
        after = date.today()

        assert before <= today <= after
        assert before <= now <= after

    @pytest.mark.parametrize(
        "value",
        [
            12345,
            3.5,
            None,
            {"year": 2008},
            "",
            "   ",
            "homersimpson",
            (2008, 8),
            (2008, 8, 27, 1),
            ("2008", "8", "27"),
            (True, 1, 1),
        ],
    )
    def test_invalid_shapes(self, value) -> None:
        """Неподдерживаемые формы → InvalidDateArgument"""
        with pytest.raises(InvalidDateArgument):
            normalize_date(value)

    def test_nonexistent_triple(self) -> None:
        """29 февраля невисокосного года"""
        with pytest.raises(InvalidDateArgument, match="invalid date triple"):
            normalize_date((2009, 2, 29))

    def test_error_is_recurrence_error(self) -> None:
        """InvalidDateArgument — RecurrenceError и ValueError"""
        with pytest.raises(RecurrenceError):
            normalize_date(object())
        with pytest.raises(ValueError):
            normalize_date(object())


# =============================================================================
# CALENDAR ARITHMETIC
# =============================================================================


class TestCalendarArithmetic:
    """Тесты для days_in_month / days_between / months_between"""

    def test_days_in_month(self) -> None:
        assert days_in_month(2008, 1) == 31
        assert days_in_month(2008, 2) == 29
        assert days_in_month(2009, 2) == 28
        assert days_in_month(1900, 2) == 28
        assert days_in_month(2000, 2) == 29
        assert days_in_month(2008, 4) == 30

    def test_days_between(self) -> None:
        assert days_between(date(2008, 8, 1), date(2008, 8, 8)) == 7
        assert days_between(date(2008, 8, 8), date(2008, 8, 1)) == -7

    def test_months_between_across_years(self) -> None:
        """Год учитывается, день месяца — нет"""
        assert months_between(date(2008, 1, 28), date(2008, 11, 1)) == 10
        assert months_between(date(2008, 11, 30), date(2009, 2, 1)) == 3
