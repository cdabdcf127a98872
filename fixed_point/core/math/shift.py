"""
Shift — Применение и снятие scale в заданном основании

Shift переводит число между "математической" величиной и целым
представлением fixed-point значения:
- right_shift: v / radix^scale (scale > 0)
- left_shift:  v * radix^(-scale) (scale < 0)
- shift: диспетчер по знаку scale

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление выполняется в арифметике операнда: int → усечение к нулю,
   float → обычное деление float
2. Результат имеет тип исходного значения (int остаётся int, float — float)
3. Float вход сдвигается в float-арифметике, усечение к Rep — забота вызывающего
4. Float сдвиг определён для любого int32 scale: выход за диапазон float
   даёт ±inf, исчезновение порядка даёт ±0.0 (как IEEE pow)
5. Целый right shift на scale >= bit_length(value) даёт 0 без вычисления
   radix^scale
"""

import math
from numbers import Integral
from typing import Final, TypeVar

from fixed_point.core.domain.scale import Radix, Scale, require_scale

Number = TypeVar("Number", int, float)

# 10^300 ещё представимо во float: десятичный сдвиг идёт шагами не длиннее
_DECIMAL_FLOAT_STEP: Final[int] = 300


# =============================================================================
# ЦЕЛОЧИСЛЕННОЕ ДЕЛЕНИЕ
# =============================================================================


def truncate_div(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с усечением к нулю (как в two's complement железе).

    Python `//` округляет к минус бесконечности, поэтому знак
    восстанавливается отдельно.

    Args:
        numerator: Делимое
        denominator: Делитель

    Returns:
        trunc(numerator / denominator)

    Raises:
        ZeroDivisionError: Если denominator == 0

    Examples:
        >>> truncate_div(7, 2)
        3
        >>> truncate_div(-7, 2)
        -3
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


# =============================================================================
# SHIFT PRIMITIVES
# =============================================================================


def _check_value(value: Number) -> None:
    if isinstance(value, bool) or not isinstance(value, (Integral, float)):
        raise TypeError(
            f"shift supports integral and float values, got {type(value).__name__}"
        )


def _scale_float(value: float, exponent: int, radix: Radix) -> float:
    """
    value * radix^exponent в float-арифметике без построения radix^exponent.

    Returns:
        Результат; ±inf при переполнении float, ±0.0 при исчезновении порядка

    Examples:
        >>> _scale_float(1.0, -400, Radix.BASE_10)
        0.0
        >>> _scale_float(-1.5, 400, Radix.BASE_10)
        -inf
    """
    if value == 0.0 or not math.isfinite(value):
        return value

    if radix == Radix.BASE_2:
        try:
            return math.ldexp(value, exponent)
        except OverflowError:
            return math.copysign(math.inf, value)

    while abs(exponent) > _DECIMAL_FLOAT_STEP:
        step = _DECIMAL_FLOAT_STEP if exponent > 0 else -_DECIMAL_FLOAT_STEP
        value *= 10.0**step
        exponent -= step
        if value == 0.0 or math.isinf(value):
            return value

    if exponent >= 0:
        return value * 10**exponent
    return value / 10**-exponent


def right_shift(value: Number, scale: Scale, radix: Radix) -> Number:
    """
    Деление на radix^scale (используется при положительном scale).

    Args:
        value: int или float
        scale: Положительный Scale
        radix: Основание

    Returns:
        value / radix^scale в арифметике типа value

    Raises:
        ValueError: Если scale <= 0
    """
    require_scale(scale)
    _check_value(value)
    if scale <= 0:
        raise ValueError(f"right_shift requires positive scale, got {scale}")

    if isinstance(value, float):
        return _scale_float(value, -scale, radix)
    value = int(value)
    # radix^scale >= 2^scale > |value|
    if scale >= abs(value).bit_length():
        return 0
    return truncate_div(value, int(radix) ** scale)


def left_shift(value: Number, scale: Scale, radix: Radix) -> Number:
    """
    Умножение на radix^(-scale) (используется при отрицательном scale).

    Args:
        value: int или float
        scale: Отрицательный Scale
        radix: Основание

    Returns:
        value * radix^(-scale) в арифметике типа value

    Raises:
        ValueError: Если scale >= 0
    """
    require_scale(scale)
    _check_value(value)
    if scale >= 0:
        raise ValueError(f"left_shift requires negative scale, got {scale}")

    if isinstance(value, float):
        return _scale_float(value, -scale, radix)
    value = int(value)
    if value == 0:
        return 0
    return value * int(radix) ** -scale


def shift(value: Number, scale: Scale, radix: Radix) -> Number:
    """
    Применение scale к значению.

    Алгоритм:
        scale == 0 → value
        scale >  0 → right_shift(value, scale)
        scale <  0 → left_shift(value, scale)

    Examples:
        >>> shift(1.5, Scale(-1), Radix.BASE_2)
        3.0
        >>> shift(123, Scale(1), Radix.BASE_10)
        12
        >>> shift(-123, Scale(1), Radix.BASE_10)
        -12
    """
    require_scale(scale)
    if scale == 0:
        _check_value(value)
        return value
    if scale > 0:
        return right_shift(value, scale, radix)
    return left_shift(value, scale, radix)
