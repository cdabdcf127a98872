"""
fixed_point — Fixed-point decimal/binary number type

Точная арифметика с ограниченной точностью для колонок аналитических
данных (денежные суммы, налоговые таблицы, идентификаторы с дробной частью):

    from fixed_point import Decimal32, Scale

    price = Decimal32(1.23, Scale(-2))   # value=123, scale=-2
    total = price + Decimal32(2.5, Scale(-1))
"""

# Domain первым: math импортирует domain.scale
from fixed_point.core.domain import (
    SCALE_MAX,
    SCALE_MIN,
    Binary32,
    Binary64,
    Decimal32,
    Decimal64,
    FixedPoint,
    FixedPointRecord,
    Radix,
    Rep,
    Scale,
    ScaledInteger,
    fixed_point_type,
    negate,
    print_rep,
)
from fixed_point.core.math import (
    FixedPointOverflowError,
    addition_overflow,
    division_overflow,
    multiplication_overflow,
    subtraction_overflow,
)
from fixed_point.core.config import (
    FixedPointConfig,
    get_config,
    overflow_checks,
    set_config,
)

__version__ = "0.1.0"

__all__ = [
    # Units
    "SCALE_MIN",
    "SCALE_MAX",
    "Scale",
    "Radix",
    "Rep",
    "negate",
    "print_rep",
    # Value type
    "FixedPoint",
    "ScaledInteger",
    "Decimal32",
    "Decimal64",
    "Binary32",
    "Binary64",
    "fixed_point_type",
    "FixedPointRecord",
    # Overflow
    "FixedPointOverflowError",
    "addition_overflow",
    "subtraction_overflow",
    "multiplication_overflow",
    "division_overflow",
    # Config
    "FixedPointConfig",
    "get_config",
    "set_config",
    "overflow_checks",
]
