"""
JSON Schema Contract Validators

Валидация сериализованных fixed-point значений против формального
JSON Schema контракта fixed_point.json (value, scale, rep, radix).

Схема поставляется внутри пакета (contracts/schema/) и дублирует правила
FixedPointRecord: int32 scale, допустимые rep/radix и диапазон value по rep.
Контракт нужен потребителям, которые читают JSON без pydantic.
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from fixed_point.core.domain.record import FixedPointRecord

SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов с кэшем и meta-валидацией.

    Args:
        schema_dir: Директория со схемами (по умолчанию схемы пакета)
    """

    def __init__(self, schema_dir: Path | None = None):
        self.schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        if not self.schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self.schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка схемы по имени без расширения (например, 'fixed_point').

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-валидацию
        """
        if schema_name not in self._schemas:
            schema_path = self.schema_dir / f"{schema_name}.json"
            if not schema_path.is_file():
                raise FileNotFoundError(f"Schema not found: {schema_path}")

            schema = json.loads(schema_path.read_text(encoding="utf-8"))
            try:
                Draft202012Validator.check_schema(schema)
            except jsonschema.SchemaError as e:
                raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e.message}") from e

            self._schemas[schema_name] = schema
        return self._schemas[schema_name]


# Загрузчик схем пакета (общий кэш)
_PACKAGE_SCHEMAS = SchemaLoader()


# =============================================================================
# FIXED POINT VALIDATOR
# =============================================================================


class FixedPointValidator:
    """
    Валидатор контракта fixed_point.

    Args:
        schema_dir: Альтернативная директория со схемой fixed_point.json
    """

    SCHEMA_NAME = "fixed_point"

    def __init__(self, schema_dir: Path | None = None):
        loader = _PACKAGE_SCHEMAS if schema_dir is None else SchemaLoader(schema_dir)
        self._validator = Draft202012Validator(loader.load_schema(self.SCHEMA_NAME))

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация JSON-совместимых данных.

        Raises:
            jsonschema.ValidationError: Наиболее релевантное нарушение схемы
        """
        self._validator.validate(data)

    def validate_record(self, record: FixedPointRecord) -> None:
        """Валидация записи в её JSON форме (model_dump(mode="json"))."""
        self.validate(record.model_dump(mode="json"))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_fixed_point(data: Dict[str, Any] | FixedPointRecord) -> None:
    """
    Валидация сериализованного fixed-point значения.

    Args:
        data: JSON-совместимый dict или FixedPointRecord

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    validator = FixedPointValidator()
    if isinstance(data, FixedPointRecord):
        validator.validate_record(data)
    else:
        validator.validate(data)
