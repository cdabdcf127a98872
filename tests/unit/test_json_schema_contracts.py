"""
Tests for JSON Schema Contract Validators and FixedPointRecord

Комплексное тестирование сериализации fixed-point значений:
- Валидность самой схемы
- Валидация правильных данных
- Детекция нарушений required полей, типов, enum и диапазона rep
- Pydantic модель FixedPointRecord (frozen, валидация value по rep)
- Интеграция: FixedPoint → record → JSON → record → FixedPoint
"""

import pytest
from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from fixed_point.core.contracts import (
    SCHEMA_DIR,
    FixedPointValidator,
    SchemaLoader,
    validate_fixed_point,
)
from fixed_point.core.domain import (
    Binary64,
    Decimal32,
    Decimal64,
    FixedPoint,
    FixedPointRecord,
    Radix,
    Rep,
    Scale,
    ScaledInteger,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_fixed_point():
    """Валидное сериализованное значение (1.23 как Decimal32)."""
    return {
        "value": 123,
        "scale": -2,
        "rep": "int32",
        "radix": 10,
    }


# =============================================================================
# TESTS - SCHEMA LOADING
# =============================================================================


def test_schema_loader_loads_schema():
    """Проверка загрузки схемы."""
    loader = SchemaLoader()
    schema = loader.load_schema("fixed_point")
    assert schema["title"] == "fixed_point"
    assert set(schema["required"]) == {"value", "scale", "rep", "radix"}


def test_schema_loader_caches_schemas():
    """Проверка кэширования схем."""
    loader = SchemaLoader()

    schema1 = loader.load_schema("fixed_point")
    schema2 = loader.load_schema("fixed_point")

    # Должен вернуть тот же объект (кэш)
    assert schema1 is schema2


def test_schema_loader_raises_on_missing_schema():
    """Проверка ошибки при отсутствующей схеме."""
    loader = SchemaLoader()

    with pytest.raises(FileNotFoundError):
        loader.load_schema("non_existent_schema")


def test_schema_loader_raises_on_missing_directory(tmp_path):
    """Проверка ошибки при отсутствующей директории схем."""
    with pytest.raises(RuntimeError, match="Schema directory not found"):
        SchemaLoader(tmp_path / "missing")


def test_schema_loader_rejects_invalid_schema(tmp_path):
    """Невалидная JSON Schema отклоняется meta-валидацией."""
    (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")
    loader = SchemaLoader(tmp_path)

    with pytest.raises(ValueError, match="Invalid JSON Schema"):
        loader.load_schema("broken")


# =============================================================================
# TESTS - FIXED POINT CONTRACT
# =============================================================================


def test_validator_accepts_valid_data(valid_fixed_point):
    """Валидация правильного значения."""
    validator = FixedPointValidator()
    validator.validate(valid_fixed_point)  # Не должно выбросить исключение


def test_validate_function(valid_fixed_point):
    """Проверка функции validate_fixed_point."""
    validate_fixed_point(valid_fixed_point)


def test_rejects_missing_required_field(valid_fixed_point):
    """Валидация отклоняет данные без обязательных полей."""
    data = valid_fixed_point.copy()
    del data["scale"]

    with pytest.raises(ValidationError) as exc_info:
        validate_fixed_point(data)
    assert "'scale' is a required property" in str(exc_info.value)


def test_rejects_wrong_type(valid_fixed_point):
    """Значение должно быть целым."""
    data = valid_fixed_point.copy()
    data["value"] = "123"

    with pytest.raises(ValidationError) as exc_info:
        validate_fixed_point(data)
    assert "is not of type 'integer'" in str(exc_info.value)


def test_rejects_unknown_radix(valid_fixed_point):
    """Основание только 2 или 10."""
    data = valid_fixed_point.copy()
    data["radix"] = 8

    with pytest.raises(ValidationError):
        validate_fixed_point(data)


def test_rejects_unknown_rep(valid_fixed_point):
    """Rep только int32 или int64."""
    data = valid_fixed_point.copy()
    data["rep"] = "int16"

    with pytest.raises(ValidationError):
        validate_fixed_point(data)


def test_rejects_value_outside_int32(valid_fixed_point):
    """Value должно помещаться в объявленный rep."""
    data = valid_fixed_point.copy()
    data["value"] = 2**31

    with pytest.raises(ValidationError):
        validate_fixed_point(data)


def test_accepts_large_value_for_int64(valid_fixed_point):
    """Для int64 тот же value допустим."""
    data = valid_fixed_point.copy()
    data["value"] = 2**31
    data["rep"] = "int64"

    validate_fixed_point(data)


def test_rejects_scale_outside_int32(valid_fixed_point):
    """Scale — int32."""
    data = valid_fixed_point.copy()
    data["scale"] = 2**31

    with pytest.raises(ValidationError):
        validate_fixed_point(data)


def test_rejects_additional_properties(valid_fixed_point):
    """Лишние поля запрещены."""
    data = valid_fixed_point.copy()
    data["precision"] = 9

    with pytest.raises(ValidationError):
        validate_fixed_point(data)


def test_validator_reads_custom_schema_dir(tmp_path, valid_fixed_point):
    """Валидатор принимает альтернативную директорию схемы."""
    (tmp_path / "fixed_point.json").write_text(
        (SCHEMA_DIR / "fixed_point.json").read_text(encoding="utf-8"), encoding="utf-8"
    )
    validator = FixedPointValidator(schema_dir=tmp_path)
    validator.validate(valid_fixed_point)

    with pytest.raises(ValidationError):
        validator.validate({**valid_fixed_point, "radix": 3})


def test_validator_requires_schema_in_custom_dir(tmp_path):
    """Пустая директория схем — FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        FixedPointValidator(schema_dir=tmp_path)


# =============================================================================
# TESTS - PYDANTIC RECORD
# =============================================================================


def test_record_from_value():
    """FixedPoint → FixedPointRecord."""
    record = Decimal32(1.23, Scale(-2)).to_record()
    assert record == FixedPointRecord(value=123, scale=-2, rep=Rep.INT32, radix=Radix.BASE_10)


def test_record_is_frozen():
    """Запись неизменяема."""
    record = Decimal32(1, Scale(0)).to_record()
    with pytest.raises(PydanticValidationError):
        record.value = 2


def test_record_rejects_value_outside_rep():
    """Pydantic модель проверяет диапазон rep."""
    with pytest.raises(PydanticValidationError, match="does not fit int32"):
        FixedPointRecord(value=2**31, scale=0, rep=Rep.INT32, radix=Radix.BASE_10)


def test_record_rejects_scale_outside_int32():
    with pytest.raises(PydanticValidationError):
        FixedPointRecord(value=1, scale=2**31, rep=Rep.INT64, radix=Radix.BASE_10)


def test_from_record_on_base_picks_concrete_type():
    """FixedPoint.from_record выбирает тип по (rep, radix)."""
    record = FixedPointRecord(value=-3, scale=-1, rep=Rep.INT64, radix=Radix.BASE_2)
    restored = FixedPoint.from_record(record)
    assert type(restored) is Binary64
    assert restored.get() == -1.5
    assert isinstance(restored.scale, Scale)


def test_from_record_on_concrete_type_checks_parameters():
    """Конкретный тип отклоняет запись с другими rep/radix."""
    record = Decimal32(1, Scale(0)).to_record()
    assert type(Decimal32.from_record(record)) is Decimal32

    with pytest.raises(TypeError, match="does not match Decimal64"):
        Decimal64.from_record(record)


# =============================================================================
# TESTS - INTEGRATION
# =============================================================================


def test_record_json_passes_contract():
    """model_dump(mode='json') соответствует JSON Schema."""
    value = Decimal64(ScaledInteger(-(2**40), Scale(-6)))
    validate_fixed_point(value.to_record().model_dump(mode="json"))


def test_record_passes_contract_directly():
    """validate_fixed_point принимает FixedPointRecord."""
    record = Binary64(ScaledInteger(-5, Scale(3))).to_record()
    validate_fixed_point(record)
    FixedPointValidator().validate_record(record)


def test_json_round_trip_preserves_representation():
    """FixedPoint → JSON → FixedPoint сохраняет (value, scale) и тип."""
    original = Binary64(ScaledInteger(12345, Scale(-7)))
    payload = original.to_record().model_dump_json()

    restored = FixedPoint.from_record(FixedPointRecord.model_validate_json(payload))

    assert type(restored) is Binary64
    assert (restored.value, restored.scale) == (original.value, original.scale)
    assert restored.exact_equals(original)
