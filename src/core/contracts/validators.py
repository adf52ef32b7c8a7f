"""
JSON Schema Contract Validators

Валидация сериализованных определений повторений (JSON/YAML конфигурация)
по JSON Schema (Draft 2020-12).

Схемы поставляются вместе с пакетом (src/core/contracts/schema/*.json) и
читаются через importlib.resources, поэтому не зависят от расположения
исходников на диске. Ни одна схема не читается при импорте: загрузчик
создаётся при первом обращении, схема читается и компилируется при первой
валидации.

Схемы:
- recurrence_definition.json — {"start": ..., <ключ повтора>: ..., ...}

Контракт проверяет форму документа. Семантику (существование даты,
допустимость единицы для ключевого слова) дополнительно проверяет
RuleSpec при построении Recurrence.
"""

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator

SCHEMA_PACKAGE = "src.core.contracts"
SCHEMA_DIRECTORY = "schema"

RECURRENCE_DEFINITION = "recurrence_definition"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema из ресурсов пакета.

    Загруженные схемы кэшируются; meta-валидация выполняется один раз
    на схему.
    """

    def __init__(self, package: str = SCHEMA_PACKAGE, directory: str = SCHEMA_DIRECTORY):
        self._package = package
        self._directory = directory
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self):
        """Каталог схем как importlib.resources Traversable."""
        return resources.files(self._package).joinpath(self._directory)

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка схемы по имени.

        Args:
            schema_name: Имя схемы без расширения (например, 'recurrence_definition')

        Returns:
            Схема как dict

        Raises:
            FileNotFoundError: Схема не найдена в ресурсах пакета
            ValueError: Схема не проходит meta-валидацию
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        resource = self.schema_dir.joinpath(f"{schema_name}.json")
        if not resource.is_file():
            raise FileNotFoundError(
                f"Schema {schema_name}.json not found in {self._package}/{self._directory}"
            )

        schema = json.loads(resource.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER: Optional[SchemaLoader] = None


def get_schema_loader() -> SchemaLoader:
    """Общий загрузчик, создаётся при первом вызове."""
    global _SCHEMA_LOADER
    if _SCHEMA_LOADER is None:
        _SCHEMA_LOADER = SchemaLoader()
    return _SCHEMA_LOADER


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор документа по одной схеме.

    Схема загружается и компилируется при первой проверке, а не в конструкторе.
    """

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self._loader = loader
        self._validator: Optional[Draft202012Validator] = None

    @property
    def schema(self) -> Dict[str, Any]:
        return self.validator.schema

    @property
    def validator(self) -> Draft202012Validator:
        if self._validator is None:
            loader = self._loader or get_schema_loader()
            self._validator = Draft202012Validator(loader.load_schema(self.schema_name))
        return self._validator

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Документ не соответствует схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        """Все ошибки валидации документа."""
        return self.validator.iter_errors(data)


class RecurrenceDefinitionValidator(ContractValidator):
    """Валидатор контракта recurrence_definition."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__(RECURRENCE_DEFINITION, loader)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


@lru_cache(maxsize=None)
def _recurrence_definition_validator() -> RecurrenceDefinitionValidator:
    return RecurrenceDefinitionValidator()


def validate_recurrence_definition(data: Dict[str, Any]) -> None:
    """
    Валидация сериализованного определения повторения.

    Args:
        data: Документ {"start": ..., <опции правила>}

    Raises:
        jsonschema.ValidationError: Документ не соответствует контракту
    """
    _recurrence_definition_validator().validate(data)
