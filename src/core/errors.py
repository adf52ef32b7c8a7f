"""
Errors — Таксономия ошибок recurrence

Все ошибки валидации поднимаются синхронно при конструировании (fail fast),
никогда не откладываются до первого запроса.

Иерархия:
- RecurrenceError (ValueError)
  * InvalidDateArgument — нераспознаваемый или неверной формы аргумент даты
  * MissingRepeatModifier — нет ни одного известного ключевого слова повтора
  * AmbiguousRepeatModifier — указано более одного ключевого слова повтора
  * UnknownRuleOption — неизвестный ключ в опциях правила
  * InvalidRecurrenceType — единица недопустима для ключевого слова
  * MissingPeriod — nth-weekday правило без `of`
  * MissingInterval — every_nth правило без `interval`
  * InvalidInterval — interval < 1
  * UnsupportedIteration — итерация для правила без алгоритма шага
- NonAdvancingStep (AssertionError) — нарушение внутреннего инварианта итерации
"""


class RecurrenceError(ValueError):
    """Базовая ошибка библиотеки."""


class InvalidDateArgument(RecurrenceError):
    """Аргумент даты неверной формы или строка не разбирается как дата."""


class MissingRepeatModifier(RecurrenceError):
    """В опциях правила нет ни одного известного ключевого слова повтора."""


class AmbiguousRepeatModifier(RecurrenceError):
    """В опциях правила указано несколько ключевых слов повтора одновременно."""


class UnknownRuleOption(RecurrenceError):
    """В опциях правила есть ключи, которые грамматика не знает."""


class InvalidRecurrenceType(RecurrenceError):
    """Единица (unit/weekday/period) недопустима для выбранного ключевого слова."""


class MissingPeriod(RecurrenceError):
    """Правило nth-weekday-of-period требует `of`."""


class MissingInterval(RecurrenceError):
    """Правило every_nth требует `interval`."""


class InvalidInterval(RecurrenceError):
    """Интервал должен быть положительным целым."""


class UnsupportedIteration(RecurrenceError):
    """
    Итерация запрошена для правила без определённого алгоритма шага.

    Поднимается при запросе итерации (each_occurrence), а не при
    конструировании: occurs_on для таких правил работает.
    """


class NonAdvancingStep(AssertionError):
    """
    Шаг итерации не продвинул дату вперёд.

    Нарушение внутреннего инварианта (баг), а не условие, под которое
    вызывающий код должен проектироваться. Намеренно не наследует
    RecurrenceError.
    """
