"""
Domain models and value objects.

Contains the strong Scale wrapper, Radix/Rep enumerations, the FixedPoint
value type with its concrete instantiations, and the serialisable record.
"""

from fixed_point.core.domain.scale import (
    SCALE_MAX,
    SCALE_MIN,
    Radix,
    Rep,
    Scale,
    negate,
    print_rep,
    require_scale,
)
from fixed_point.core.domain.record import FixedPointRecord
from fixed_point.core.domain.value import (
    Binary32,
    Binary64,
    Decimal32,
    Decimal64,
    FixedPoint,
    ScaledInteger,
    fixed_point_type,
)

__all__ = [
    # Units
    "SCALE_MIN",
    "SCALE_MAX",
    "Scale",
    "Radix",
    "Rep",
    "negate",
    "print_rep",
    "require_scale",
    # Value type
    "FixedPoint",
    "ScaledInteger",
    "Decimal32",
    "Decimal64",
    "Binary32",
    "Binary64",
    "fixed_point_type",
    # Serialization
    "FixedPointRecord",
]
