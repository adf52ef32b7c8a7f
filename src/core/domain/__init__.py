"""
Domain models and value objects.

Contains the repetition rule models (Every, EveryNth, NthWeekday) and the
RuleSpec grammar that builds them from options.
"""

from src.core.domain.rule_spec import (
    INTERVAL_KEYWORDS,
    KNOWN_OPTIONS,
    ORDINAL_KEYWORDS,
    REPEAT_KEYWORDS,
    RuleSpec,
    parse_rule_options,
)
from src.core.domain.rules import (
    CALENDAR_UNITS,
    EVERY_UNITS,
    INTERVAL_UNITS,
    ITERABLE_UNITS,
    LAST,
    MAX_ORDINAL,
    EveryNthRule,
    EveryRule,
    NthWeekdayRule,
    Period,
    RepetitionRule,
    Unit,
    Weekday,
    WeekdayFormat,
)

__all__ = [
    # Enums
    "Unit",
    "Weekday",
    "Period",
    "WeekdayFormat",
    # Unit tables
    "LAST",
    "MAX_ORDINAL",
    "CALENDAR_UNITS",
    "EVERY_UNITS",
    "INTERVAL_UNITS",
    "ITERABLE_UNITS",
    # Rule models
    "EveryRule",
    "EveryNthRule",
    "NthWeekdayRule",
    "RepetitionRule",
    # Grammar
    "RuleSpec",
    "parse_rule_options",
    "REPEAT_KEYWORDS",
    "INTERVAL_KEYWORDS",
    "ORDINAL_KEYWORDS",
    "KNOWN_OPTIONS",
]
