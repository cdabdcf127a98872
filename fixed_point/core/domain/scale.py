"""
Scale, Radix, Rep — Единицы представления fixed-point значения

Единственный допустимый способ задать:
- scale (знаковый int32 показатель степени основания)
- radix (основание: BASE_2 или BASE_10)
- rep (ширина целого представления: int32 или int64)

ЗАПРЕЩЕНО передавать обычный int там, где ожидается Scale: такая ошибка
молча даёт неверный результат, поэтому Scale — отдельный номинальный тип.
"""

from enum import Enum, IntEnum
from typing import Any, Final


# =============================================================================
# ГРАНИЦЫ INT32 (для самого scale)
# =============================================================================

SCALE_MIN: Final[int] = -(1 << 31)
SCALE_MAX: Final[int] = (1 << 31) - 1


# =============================================================================
# SCALE
# =============================================================================


class Scale(int):
    """
    Строго типизированный scale (int32).

    Создаётся только явно: Scale(-2). Обычный int не является Scale,
    поэтому функции, принимающие scale, отклоняют его (TypeError).
    Наружу Scale ведёт себя как int: арифметика над scale возвращает int.

    Examples:
        >>> Scale(-2)
        Scale(-2)
        >>> Scale(3) + 1
        4
    """

    __slots__ = ()

    def __new__(cls, value: int = 0) -> "Scale":
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"Scale must be constructed from int, got {type(value).__name__}"
            )

        if not SCALE_MIN <= value <= SCALE_MAX:
            raise ValueError(
                f"Scale {value} outside int32 range [{SCALE_MIN}, {SCALE_MAX}]"
            )

        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"Scale({int(self)})"

    def __str__(self) -> str:
        return str(int(self))


def negate(scale: Scale) -> Scale:
    """
    Scale с противоположным знаком.

    Args:
        scale: Исходный scale

    Returns:
        Scale(-scale)
    """
    return Scale(-require_scale(scale))


def require_scale(scale: Any, name: str = "scale") -> Scale:
    """
    Проверка, что передан именно Scale, а не обычный int.

    Args:
        scale: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        scale без изменений

    Raises:
        TypeError: Если scale не является Scale
    """
    if not isinstance(scale, Scale):
        raise TypeError(
            f"{name} must be a Scale (use Scale({scale!r})), got {type(scale).__name__}"
        )
    return scale


# =============================================================================
# RADIX
# =============================================================================


class Radix(IntEnum):
    """Основание, в котором интерпретируется scale"""

    BASE_2 = 2
    BASE_10 = 10


# =============================================================================
# REP
# =============================================================================


class Rep(str, Enum):
    """Целочисленный тип представления (только знаковые 32/64 бит)"""

    INT32 = "int32"
    INT64 = "int64"

    @property
    def bits(self) -> int:
        """Ширина в битах"""
        return 32 if self is Rep.INT32 else 64

    @property
    def min_value(self) -> int:
        """Минимальное представимое значение (two's complement)"""
        return -(1 << (self.bits - 1))

    @property
    def max_value(self) -> int:
        """Максимальное представимое значение (two's complement)"""
        return (1 << (self.bits - 1)) - 1

    def contains(self, value: int) -> bool:
        """True если value помещается в rep"""
        return self.min_value <= value <= self.max_value


def print_rep(rep: Rep) -> str:
    """
    Короткое имя типа представления для сообщений и отладки.

    Examples:
        >>> print_rep(Rep.INT32)
        'int32'
    """
    if isinstance(rep, Rep):
        return rep.value
    return "unknown type"
