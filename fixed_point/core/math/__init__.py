"""
Core math modules для fixed-point

Shift, предикаты переполнения и рендеринг над целым представлением.
"""

# Shift primitives
from fixed_point.core.math.shift import (
    left_shift,
    right_shift,
    shift,
    truncate_div,
)

# Overflow predicates
from fixed_point.core.math.overflow import (
    OVERFLOW_PREDICATES,
    FixedPointOverflowError,
    addition_overflow,
    check_overflow,
    construction_overflow,
    division_overflow,
    fit_to_rep,
    multiplication_overflow,
    shift_to_rep,
    subtraction_overflow,
    wrap_to_rep,
)

# Rendering
from fixed_point.core.math.rendering import render, to_exact_string

__all__ = [
    # Shift
    "left_shift",
    "right_shift",
    "shift",
    "truncate_div",
    # Overflow — Exceptions
    "FixedPointOverflowError",
    # Overflow — Predicates
    "OVERFLOW_PREDICATES",
    "addition_overflow",
    "subtraction_overflow",
    "multiplication_overflow",
    "division_overflow",
    "construction_overflow",
    # Overflow — Policy
    "check_overflow",
    "fit_to_rep",
    "shift_to_rep",
    "wrap_to_rep",
    # Rendering
    "render",
    "to_exact_string",
]
