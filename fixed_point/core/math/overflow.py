"""
Overflow — Предикаты переполнения целого представления

Модуль решает, переполнит ли операция над уже выровненными значениями
представления выбранный Rep. Предикаты ничего не предотвращают, они только
отвечают на вопрос; решение принимает check_overflow согласно конфигурации:
- overflow_check включён: FixedPointOverflowError
- overflow_check выключен: wrap (two's complement), как в железе

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Предикат истинен тогда и только тогда, когда точный результат
   (в неограниченных целых) лежит вне [MIN, MAX]
2. Деление в предикатах усекается к нулю (two's complement семантика)
3. Выравнивание scale делает только right shift и не переполняется;
   left shift при конструировании покрыт construction_overflow
"""

import logging
from typing import Callable, Final

from fixed_point.core.config import get_config
from fixed_point.core.domain.scale import Radix, Rep, Scale, print_rep
from fixed_point.core.math.shift import shift, truncate_div

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FixedPointOverflowError(ArithmeticError):
    """
    Переполнение целого представления fixed-point значения.

    Возникает только при включённой проверке переполнения
    (FixedPointConfig.overflow_check). Сообщение содержит имя Rep.
    """

    def __init__(self, rep: Rep, operation: str, lhs: int, rhs: int | None = None):
        self.rep = rep
        self.operation = operation
        self.lhs = lhs
        self.rhs = rhs
        operands = f"{lhs}" if rhs is None else f"{lhs}, {rhs}"
        super().__init__(
            f"fixed_point overflow of underlying representation type {print_rep(rep)} "
            f"({operation}: {operands})"
        )


# =============================================================================
# ПРЕДИКАТЫ
# =============================================================================


def addition_overflow(rep: Rep, lhs: int, rhs: int) -> bool:
    """
    Переполнит ли lhs + rhs тип rep.

    Examples:
        >>> addition_overflow(Rep.INT32, 2**31 - 1, 1)
        True
        >>> addition_overflow(Rep.INT32, -(2**31), -1)
        True
    """
    if rhs > 0:
        return lhs > rep.max_value - rhs
    return lhs < rep.min_value - rhs


def subtraction_overflow(rep: Rep, lhs: int, rhs: int) -> bool:
    """Переполнит ли lhs - rhs тип rep."""
    if rhs > 0:
        return lhs < rep.min_value + rhs
    return lhs > rep.max_value + rhs


def division_overflow(rep: Rep, lhs: int, rhs: int) -> bool:
    """
    Переполнит ли lhs / rhs тип rep.

    Единственный случай в two's complement: MIN / -1.
    Деление на ноль предикатом не покрывается.
    """
    return lhs == rep.min_value and rhs == -1


def multiplication_overflow(rep: Rep, lhs: int, rhs: int) -> bool:
    """
    Переполнит ли lhs * rhs тип rep.

    Алгоритм:
        rhs >  0: lhs > MAX / rhs  или  lhs < MIN / rhs
        rhs < -1: lhs > MIN / rhs  или  lhs < MAX / rhs
        иначе (rhs ∈ {-1, 0}): rhs == -1 и lhs == MIN

    Деление усекается к нулю.
    """
    min_value = rep.min_value
    max_value = rep.max_value

    if rhs > 0:
        return lhs > truncate_div(max_value, rhs) or lhs < truncate_div(min_value, rhs)
    elif rhs < -1:
        return lhs > truncate_div(min_value, rhs) or lhs < truncate_div(max_value, rhs)
    else:
        return rhs == -1 and lhs == min_value


def construction_overflow(rep: Rep, value: int) -> bool:
    """Не помещается ли уже сдвинутое значение в rep (конструирование)."""
    return not rep.contains(value)


# =============================================================================
# WRAP И ПРИМЕНЕНИЕ ПОЛИТИКИ
# =============================================================================


def wrap_to_rep(rep: Rep, value: int) -> int:
    """
    Two's complement wrap значения в диапазон rep.

    Examples:
        >>> wrap_to_rep(Rep.INT32, 2**31)
        -2147483648
        >>> wrap_to_rep(Rep.INT32, -1)
        -1
    """
    modulus = 1 << rep.bits
    return (value - rep.min_value) % modulus + rep.min_value


OVERFLOW_PREDICATES: Final[dict[str, Callable[[Rep, int, int], bool]]] = {
    "addition": addition_overflow,
    "subtraction": subtraction_overflow,
    "multiplication": multiplication_overflow,
    "division": division_overflow,
}


def check_overflow(rep: Rep, operation: str, lhs: int, rhs: int) -> None:
    """
    Проверка переполнения бинарной операции согласно конфигурации.

    Args:
        rep: Тип представления
        operation: "addition" | "subtraction" | "multiplication" | "division"
        lhs: Левый операнд (выровненное значение представления)
        rhs: Правый операнд (выровненное значение представления)

    Raises:
        FixedPointOverflowError: Если проверка включена и операция переполняет rep
        KeyError: Если operation неизвестна
    """
    predicate = OVERFLOW_PREDICATES[operation]
    if get_config().overflow_check and predicate(rep, lhs, rhs):
        raise FixedPointOverflowError(rep, operation, lhs, rhs)


def fit_to_rep(rep: Rep, value: int, operation: str) -> int:
    """
    Приведение точного результата к rep.

    При включённой проверке значение вне rep — ошибка (для операций,
    проверенных предикатами, сюда приходит только помещающийся результат).
    При выключенной — wrap с DEBUG-записью в лог.

    Raises:
        FixedPointOverflowError: Если проверка включена и value вне rep
    """
    if rep.contains(value):
        return value
    return _overflowed(rep, operation, value, wrap_to_rep(rep, value))


def shift_to_rep(rep: Rep, value: int, scale: Scale, radix: Radix) -> int:
    """
    Shift целого входа конструктора и приведение к rep.

    Left shift на k >= rep.bits разрядов ненулевого значения заведомо
    выходит из rep: |value| * radix^k >= 2^bits. radix^k кратно 2^k,
    поэтому wrap такого результата равен 0 и radix^k не вычисляется.

    Raises:
        FixedPointOverflowError: Если проверка включена и результат вне rep

    Examples:
        >>> shift_to_rep(Rep.INT32, 123, Scale(1), Radix.BASE_10)
        12
    """
    if value == 0:
        return 0
    if -scale >= rep.bits:
        return _overflowed(rep, "construction", value, 0)
    return fit_to_rep(rep, shift(value, scale, radix), "construction")


def _overflowed(rep: Rep, operation: str, value: int, wrapped: int) -> int:
    if get_config().overflow_check:
        raise FixedPointOverflowError(rep, operation, value)

    logger.debug(
        "%s overflowed %s: %d wrapped to %d", operation, print_rep(rep), value, wrapped
    )
    return wrapped
