"""
Tests for JSON Schema Contract Validators

Комплексное тестирование контракта recurrence_definition:
- Валидность самой схемы
- Валидация правильных определений
- Детекция нарушений required / oneOf / additionalProperties
- Детекция нарушений enum и minimum
- Интеграция с Recurrence (load_recurrence)
"""

import json
from datetime import date

import pytest
from jsonschema import Draft202012Validator, ValidationError

from src.core.contracts import (
    RECURRENCE_DEFINITION,
    ContractValidator,
    RecurrenceDefinitionValidator,
    SchemaLoader,
    get_schema_loader,
    validate_recurrence_definition,
)
from src.core.domain import EveryNthRule, NthWeekdayRule, Unit
from src.core.errors import InvalidDateArgument, MissingPeriod, RecurrenceError
from src.recurrence import Recurrence, load_recurrence, load_recurrence_json


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_definition():
    """Валидное определение для тестирования."""
    return {"start": "2008-01-31", "every": "month", "until": "2008-12-31"}


@pytest.fixture
def validator():
    return RecurrenceDefinitionValidator()


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем"""

    def test_schema_shipped_with_package(self) -> None:
        """Схема лежит в ресурсах пакета src.core.contracts"""
        loader = SchemaLoader()
        assert loader.schema_dir.joinpath("recurrence_definition.json").is_file()

    def test_schema_is_valid(self) -> None:
        """Схема проходит meta-валидацию Draft 2020-12"""
        schema = SchemaLoader().load_schema(RECURRENCE_DEFINITION)
        Draft202012Validator.check_schema(schema)

    def test_schema_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema(RECURRENCE_DEFINITION) is loader.load_schema(
            RECURRENCE_DEFINITION
        )

    def test_shared_loader(self) -> None:
        assert get_schema_loader() is get_schema_loader()

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("no_such_contract")

    def test_missing_directory_fails_only_on_load(self) -> None:
        """Отсутствующий каталог схем не ломает конструирование"""
        loader = SchemaLoader(directory="no_such_directory")
        validator = ContractValidator(RECURRENCE_DEFINITION, loader)
        with pytest.raises(FileNotFoundError):
            validator.validate({"start": "epoch", "every": "day"})

    def test_validator_loads_lazily(self) -> None:
        """Схема читается при первой проверке, а не в конструкторе"""
        loader = SchemaLoader()
        validator = RecurrenceDefinitionValidator(loader)
        assert RECURRENCE_DEFINITION not in loader._schemas
        assert validator.is_valid({"start": "epoch", "every": "day"})
        assert RECURRENCE_DEFINITION in loader._schemas
        assert validator.schema["title"] == "Recurrence definition"


# =============================================================================
# VALID DOCUMENTS
# =============================================================================


class TestValidDefinitions:
    """Валидные определения"""

    def test_fixture_valid(self, valid_definition) -> None:
        validate_recurrence_definition(valid_definition)

    @pytest.mark.parametrize(
        "document",
        [
            {"start": "epoch", "every": "weekend"},
            {"start": [2008, 8, 1], "every_other": "day"},
            {"start": "2008-01-28", "every_nth": "month", "interval": 10},
            {"start": "epoch", "every_first": "thursday", "of": "month"},
            {"start": "epoch", "every_last": "friday", "of": "month"},
            {"start": "2001-09-21", "every_third": "year"},
        ],
    )
    def test_valid(self, validator, document) -> None:
        assert validator.is_valid(document)


# =============================================================================
# CONTRACT VIOLATIONS
# =============================================================================


class TestContractViolations:
    """Нарушения контракта → jsonschema.ValidationError"""

    def test_missing_start(self) -> None:
        with pytest.raises(ValidationError):
            validate_recurrence_definition({"every": "day"})

    def test_missing_keyword(self) -> None:
        with pytest.raises(ValidationError):
            validate_recurrence_definition({"start": "epoch"})

    def test_two_keywords(self) -> None:
        with pytest.raises(ValidationError):
            validate_recurrence_definition({"start": "epoch", "every": "day", "every_other": "week"})

    def test_unknown_key(self, valid_definition) -> None:
        valid_definition["untill"] = "2009-01-01"
        with pytest.raises(ValidationError):
            validate_recurrence_definition(valid_definition)

    def test_interval_minimum(self) -> None:
        with pytest.raises(ValidationError):
            validate_recurrence_definition({"start": "epoch", "every_nth": "day", "interval": 0})

    def test_invalid_unit(self) -> None:
        with pytest.raises(ValidationError):
            validate_recurrence_definition({"start": "epoch", "every": "homersimpson"})

    def test_interval_keyword_rejects_weekend(self) -> None:
        with pytest.raises(ValidationError):
            validate_recurrence_definition({"start": "epoch", "every_other": "weekend"})

    def test_invalid_date_shape(self) -> None:
        with pytest.raises(ValidationError):
            validate_recurrence_definition({"start": [2008, 8], "every": "day"})
        with pytest.raises(ValidationError):
            validate_recurrence_definition({"start": "", "every": "day"})

    def test_iter_errors_reports_all(self, validator) -> None:
        errors = list(validator.iter_errors({"every": "homersimpson", "interval": 0}))
        assert len(errors) >= 2


# =============================================================================
# LOAD RECURRENCE
# =============================================================================


class TestLoadRecurrence:
    """Построение Recurrence из определения"""

    def test_load(self, valid_definition) -> None:
        r = load_recurrence(valid_definition)
        assert isinstance(r, Recurrence)
        assert r.start_date == date(2008, 1, 31)
        assert r.end_date == date(2008, 12, 31)
        assert r.occurs_on("2008-03-31")
        assert not r.occurs_on("2009-01-31")

    def test_load_tuple_start(self) -> None:
        """Кортеж приводится к списку перед проверкой контракта"""
        r = load_recurrence({"start": (2008, 1, 28), "every_nth": "month", "interval": 10})
        assert r.rule == EveryNthRule(unit=Unit.MONTH, interval=10)
        assert r.occurs_on((2008, 11, 28))

    def test_load_nth_weekday(self) -> None:
        r = load_recurrence({"start": "epoch", "every_second": "thursday", "of": "month"})
        assert isinstance(r.rule, NthWeekdayRule)
        assert r.occurs_on("2008-09-11")

    def test_contract_checked_first(self) -> None:
        with pytest.raises(ValidationError):
            load_recurrence({"start": "epoch", "every": "day", "extra": 1})

    def test_nonexistent_start(self) -> None:
        """Форма валидна, дата не существует"""
        with pytest.raises(InvalidDateArgument):
            load_recurrence({"start": "2009-02-29", "every": "day"})

    def test_nth_weekday_without_period(self) -> None:
        """of не обязателен в контракте, но обязателен для nth-weekday"""
        with pytest.raises(MissingPeriod):
            load_recurrence({"start": "epoch", "every_first": "thursday"})

    def test_semantic_errors_are_recurrence_errors(self) -> None:
        with pytest.raises(RecurrenceError):
            load_recurrence({"start": [2009, 2, 29], "every": "day"})

    def test_load_json(self) -> None:
        text = json.dumps({"start": [2008, 8, 1], "every": "week", "until": "2008-08-31"})
        r = load_recurrence_json(text)
        assert list(r.occurrences()) == [date(2008, 8, d) for d in (1, 8, 15, 22, 29)]
