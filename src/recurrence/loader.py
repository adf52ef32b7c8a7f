"""Loader — построение Recurrence из сериализованного определения.

Определение приходит из JSON/YAML конфигурации:

    {"start": "2008-01-31", "every": "month", "until": "2008-12-31"}

Сначала проверяется контракт recurrence_definition (jsonschema), затем
RuleSpec проверяет семантику правила.
"""

import json
import logging
from typing import Any, Dict, Mapping

from src.core.contracts import validate_recurrence_definition
from src.recurrence.recurrence import Recurrence

logger = logging.getLogger(__name__)


def _jsonable(data: Mapping[str, Any]) -> Dict[str, Any]:
    # Кортежи из Python-кода приводятся к спискам, как после json.loads
    return {k: list(v) if isinstance(v, tuple) else v for k, v in data.items()}


def load_recurrence(data: Mapping[str, Any]) -> Recurrence:
    """
    Определение повторения → Recurrence.

    Args:
        data: Словарь с ключом start и опциями правила

    Returns:
        Recurrence

    Raises:
        jsonschema.ValidationError: Документ не соответствует контракту
        RecurrenceError: Семантическая ошибка даты или правила
    """
    document = _jsonable(data)
    validate_recurrence_definition(document)

    options = {k: v for k, v in document.items() if k != "start"}
    recurrence = Recurrence(document["start"], options)
    logger.debug("Loaded recurrence definition: %s", document)
    return recurrence


def load_recurrence_json(text: str) -> Recurrence:
    """JSON-строка → Recurrence (см. load_recurrence)."""
    return load_recurrence(json.loads(text))
