"""
Contract Validation Module

Модуль для валидации JSON контрактов сериализованных fixed-point значений.
"""

from .validators import (
    SCHEMA_DIR,
    FixedPointValidator,
    SchemaLoader,
    validate_fixed_point,
)

__all__ = [
    "SCHEMA_DIR",
    # Classes
    "SchemaLoader",
    "FixedPointValidator",
    # Functions
    "validate_fixed_point",
]
