"""
FixedPointRecord — Сериализуемая запись fixed-point значения

Immutable Pydantic модель: пара (value, scale) плюс статическое объявление
rep и radix. Соответствует JSON контракту fixed_point.
"""

from pydantic import BaseModel, Field, model_validator

from fixed_point.core.domain.scale import SCALE_MAX, SCALE_MIN, Radix, Rep


class FixedPointRecord(BaseModel):
    """
    Запись fixed-point значения для хранения и передачи.

    Immutable модель (frozen=True). Восстановление значения —
    FixedPoint.from_record(record).
    """

    value: int = Field(..., description="Целое представление")
    scale: int = Field(..., ge=SCALE_MIN, le=SCALE_MAX, description="Scale (int32)")
    rep: Rep = Field(..., description="Тип представления (int32/int64)")
    radix: Radix = Field(..., description="Основание (2/10)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_value_fits_rep(self) -> "FixedPointRecord":
        """Проверка, что value помещается в объявленный rep."""
        if not self.rep.contains(self.value):
            raise ValueError(
                f"value {self.value} does not fit {self.rep.value} "
                f"[{self.rep.min_value}, {self.rep.max_value}]"
            )
        return self
