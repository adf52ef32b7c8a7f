"""
Contract Validation Module

Модуль для валидации JSON контрактов конфигурации повторений.
"""

from .validators import (
    RECURRENCE_DEFINITION,
    ContractValidator,
    RecurrenceDefinitionValidator,
    SchemaLoader,
    get_schema_loader,
    validate_recurrence_definition,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "RecurrenceDefinitionValidator",
    # Functions
    "get_schema_loader",
    "validate_recurrence_definition",
    # Schema names
    "RECURRENCE_DEFINITION",
]
