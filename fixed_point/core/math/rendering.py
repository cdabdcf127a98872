"""
Rendering — Текстовое представление fixed-point значения

Два режима:
- render: через float (get()), для отладки; теряет точность за 2^53
- to_exact_string: точные десятичные цифры без float, для BASE_10 и BASE_2

Длина точной записи ограничена тем же лимитом, что и str(int)
(sys.get_int_max_str_digits()): при scale порядка миллионов запись
не строится, а отклоняется ValueError.
"""

import math
import sys

from fixed_point.core.domain.scale import Radix, Scale, require_scale


def render(value: float, format_spec: str = "") -> str:
    """
    Отладочное представление уже восстановленного float.

    Args:
        value: Результат get()
        format_spec: Спецификация format() (пустая → repr float)
    """
    if not format_spec:
        return repr(value)
    return format(value, format_spec)


def _check_digits(digits: int) -> None:
    limit = sys.get_int_max_str_digits()
    if limit and digits > limit:
        raise ValueError(
            f"exact rendering needs {digits} digits, above the integer string "
            f"conversion limit {limit}; use sys.set_int_max_str_digits() to increase it"
        )


def to_exact_string(value: int, scale: Scale, radix: Radix) -> str:
    """
    Точная десятичная запись value * radix^scale.

    Для отрицательного scale в BASE_2 используется тождество
    v / 2^n == v * 5^n / 10^n, поэтому запись всегда конечна.
    Нули положительного scale в BASE_10 дописываются текстом.

    Args:
        value: Целое представление
        scale: Scale значения
        radix: Основание

    Returns:
        Строка без экспоненты, без лишних нулей в дробной части

    Raises:
        ValueError: Если запись длиннее sys.get_int_max_str_digits()

    Examples:
        >>> to_exact_string(123, Scale(-2), Radix.BASE_10)
        '1.23'
        >>> to_exact_string(-3, Scale(-1), Radix.BASE_2)
        '-1.5'
        >>> to_exact_string(7, Scale(2), Radix.BASE_10)
        '700'
    """
    require_scale(scale)
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    digits_after_point = -scale

    if radix == Radix.BASE_2:
        # Лишние множители 2 сокращаются с 2^n знаменателя
        shared = min((magnitude & -magnitude).bit_length() - 1, max(digits_after_point, 0))
        magnitude >>= shared
        digits_after_point -= shared

        if digits_after_point <= 0:
            bits = magnitude.bit_length() - digits_after_point
            _check_digits(math.ceil(bits * math.log10(2)) + 1)
            return f"{sign}{magnitude << -digits_after_point}"

        _check_digits(len(str(magnitude)) + math.ceil(digits_after_point * math.log10(5)) + 1)
        numerator = magnitude * 5**digits_after_point
    else:
        if digits_after_point <= 0:
            _check_digits(len(str(magnitude)) - digits_after_point)
            return f"{sign}{magnitude}{'0' * -digits_after_point}"

        _check_digits(max(len(str(magnitude)), digits_after_point + 1))
        numerator = magnitude

    digits = str(numerator).rjust(digits_after_point + 1, "0")
    integer_part = digits[:-digits_after_point]
    fraction_part = digits[-digits_after_point:].rstrip("0")

    if not fraction_part:
        return f"{sign}{integer_part}"
    return f"{sign}{integer_part}.{fraction_part}"
