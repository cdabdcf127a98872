"""
FixedPoint — Число с фиксированной точкой (десятичное или двоичное)

Значение — пара (value, scale) с параметрами типа rep и radix:
    величина = value * radix^scale

rep и radix задаются на уровне конкретного типа (Decimal32, Decimal64,
Binary32, Binary64), scale — у каждого значения. Операнды бинарных
операций обязаны иметь одинаковые rep и radix, scale может отличаться.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. value всегда помещается в rep
2. Сложение, вычитание и сравнение выравнивают к большему scale,
   усекая более точный операнд (никогда не выравнивают вниз)
3. Умножение складывает scale, деление вычитает
4. Конструирование из float: сдвиг в float-арифметике, затем усечение к нулю
5. Значения неизменяемы; составное присваивание перепривязывает имя
"""

import math
from dataclasses import dataclass
from numbers import Integral, Real
from operator import index
from typing import Any, ClassVar, Final

from fixed_point.core.domain.record import FixedPointRecord
from fixed_point.core.domain.scale import Radix, Rep, Scale, negate, require_scale
from fixed_point.core.math.overflow import check_overflow, fit_to_rep, shift_to_rep
from fixed_point.core.math.rendering import render, to_exact_string
from fixed_point.core.math.shift import shift, truncate_div


# =============================================================================
# SCALED INTEGER
# =============================================================================


@dataclass(frozen=True)
class ScaledInteger:
    """
    Уже сдвинутое представление: value устанавливается как есть, без shift.

    Используется арифметикой для построения результатов.
    """

    value: int
    scale: Scale

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, Integral):
            raise TypeError(
                f"ScaledInteger value must be integral, got {type(self.value).__name__}"
            )
        object.__setattr__(self, "value", index(self.value))
        require_scale(self.scale)


# Реестр конкретных типов: (rep, radix) → класс
_TYPES: dict[tuple[Rep, Radix], type["FixedPoint"]] = {}

# Граница int конверсии совпадает с диапазоном float
_INT_CONVERSION_BITS: Final[int] = 1024


# =============================================================================
# FIXED POINT
# =============================================================================


class FixedPoint:
    """
    Базовый (абстрактный) fixed-point тип.

    Конкретный тип объявляется с параметрами класса:

        class Decimal32(FixedPoint, rep=Rep.INT32, radix=Radix.BASE_10):
            ...

    Конструирование:
        Decimal32(1.23, Scale(-2))               # shift → value=123
        Decimal32(ScaledInteger(123, Scale(-2))) # без shift
        Decimal32()                              # value=0, scale=0
    """

    rep: ClassVar[Rep]
    radix: ClassVar[Radix]

    __slots__ = ("_value", "_scale")

    # Неявное выравнивание по lossy __eq__ нетранзитивно — хэш невозможен
    __hash__ = None  # type: ignore[assignment]

    def __init_subclass__(cls, rep: Rep | None = None, radix: Radix | None = None, **kwargs: Any):
        super().__init_subclass__(**kwargs)

        if rep is None and radix is None:
            return

        if not isinstance(rep, Rep):
            raise TypeError(
                f"Unsupported representation type {rep!r}: expected Rep.INT32 or Rep.INT64"
            )
        if not isinstance(radix, Radix):
            raise TypeError(
                f"Unsupported radix {radix!r}: expected Radix.BASE_2 or Radix.BASE_10"
            )

        cls.rep = rep
        cls.radix = radix
        _TYPES.setdefault((rep, radix), cls)

    def __init__(self, value: int | float | ScaledInteger = 0, scale: Scale | None = None):
        cls = type(self)
        if not hasattr(cls, "rep"):
            raise TypeError(
                f"{cls.__name__} is abstract: declare rep and radix or use "
                f"Decimal32/Decimal64/Binary32/Binary64"
            )

        if isinstance(value, ScaledInteger):
            if scale is not None:
                raise TypeError("scale must not be passed together with ScaledInteger")
            if not cls.rep.contains(value.value):
                raise ValueError(
                    f"ScaledInteger value {value.value} does not fit {cls.rep.value}"
                )
            installed, scale = value.value, value.scale
        else:
            scale = Scale(0) if scale is None else require_scale(scale)
            installed = _shift_to_rep(value, scale, cls.rep, cls.radix)

        object.__setattr__(self, "_value", installed)
        object.__setattr__(self, "_scale", scale)

    @classmethod
    def from_scaled_integer(cls, scaled: ScaledInteger) -> "FixedPoint":
        """Конструирование из уже сдвинутого представления."""
        if not isinstance(scaled, ScaledInteger):
            raise TypeError(f"expected ScaledInteger, got {type(scaled).__name__}")
        return cls(scaled)

    # -------------------------------------------------------------------------
    # Immutability
    # -------------------------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (ScaledInteger(self._value, self._scale),))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def value(self) -> int:
        """Целое представление."""
        return self._value

    @property
    def scale(self) -> Scale:
        """Scale значения."""
        return self._scale

    # -------------------------------------------------------------------------
    # Conversion out
    # -------------------------------------------------------------------------

    def to_numeric(self, target: type = float) -> int | float:
        """
        Восстановление величины value * radix^scale в типе target.

        Для float величина вне диапазона float даёт ±inf, слишком малая — 0.0.
        Для int результат точный, но ограничен диапазоном float (< 2^1024).

        Args:
            target: int (результат усекается к нулю) или float

        Raises:
            TypeError: Если target не int и не float
            OverflowError: Если target int и |результат| >= 2^1024
        """
        if target is not int and target is not float:
            raise TypeError(
                f"Unsupported conversion target {target!r}: expected int or float"
            )
        if target is int and self._value != 0 and self._scale >= _INT_CONVERSION_BITS:
            self._raise_int_overflow()

        result = shift(target(self._value), negate(self._scale), self.radix)
        if target is int and abs(result).bit_length() > _INT_CONVERSION_BITS:
            self._raise_int_overflow()
        return result

    def _raise_int_overflow(self) -> None:
        raise OverflowError(
            f"{self!r} is too large to convert to int (limit 2**{_INT_CONVERSION_BITS})"
        )

    def get(self) -> float:
        """Величина как float (для отладки и рендеринга)."""
        return self.to_numeric(float)

    def __int__(self) -> int:
        return self.to_numeric(int)

    def __float__(self) -> float:
        return self.to_numeric(float)

    def __bool__(self) -> bool:
        return self._value != 0

    # -------------------------------------------------------------------------
    # Alignment
    # -------------------------------------------------------------------------

    def _is_compatible(self, other: Any) -> bool:
        return (
            isinstance(other, FixedPoint)
            and hasattr(type(other), "rep")
            and other.rep is self.rep
            and other.radix is self.radix
        )

    def _rescale(self, target_scale: int) -> int:
        """Right shift value к большему (или равному) scale."""
        difference = target_scale - self._scale
        if difference == 0:
            return self._value
        # radix^difference больше любого значения rep
        if difference >= self.rep.bits:
            return 0
        return shift(self._value, Scale(difference), self.radix)

    def _align(self, other: "FixedPoint") -> tuple[int, int, Scale]:
        scale = max(self._scale, other._scale)
        return self._rescale(scale), other._rescale(scale), scale

    def _install(self, value: int, scale: int, operation: str) -> "FixedPoint":
        return type(self)(ScaledInteger(fit_to_rep(self.rep, value, operation), Scale(scale)))

    # -------------------------------------------------------------------------
    # Binary algebra
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "FixedPoint":
        if not self._is_compatible(other):
            return NotImplemented
        lhs, rhs, scale = self._align(other)
        check_overflow(self.rep, "addition", lhs, rhs)
        return self._install(lhs + rhs, scale, "addition")

    def __sub__(self, other: Any) -> "FixedPoint":
        if not self._is_compatible(other):
            return NotImplemented
        lhs, rhs, scale = self._align(other)
        check_overflow(self.rep, "subtraction", lhs, rhs)
        return self._install(lhs - rhs, scale, "subtraction")

    def __mul__(self, other: Any) -> "FixedPoint":
        if not self._is_compatible(other):
            return NotImplemented
        check_overflow(self.rep, "multiplication", self._value, other._value)
        return self._install(
            self._value * other._value, self._scale + other._scale, "multiplication"
        )

    def __truediv__(self, other: Any) -> "FixedPoint":
        if not self._is_compatible(other):
            return NotImplemented
        if other._value == 0:
            raise ZeroDivisionError(f"{type(self).__name__} division by zero")
        check_overflow(self.rep, "division", self._value, other._value)
        return self._install(
            truncate_div(self._value, other._value),
            self._scale - other._scale,
            "division",
        )

    def __eq__(self, other: Any) -> bool:
        """
        Сравнение после выравнивания к большему scale.

        Lossy: младшие разряды более точного операнда отбрасываются,
        поэтому 1.23 (scale -2) == 1.2 (scale -1). Точное сравнение —
        exact_equals.
        """
        if not self._is_compatible(other):
            return NotImplemented
        lhs, rhs, _ = self._align(other)
        return lhs == rhs

    def exact_equals(self, other: "FixedPoint") -> bool:
        """
        Точное сравнение: True если представляемые рациональные числа равны.

        Raises:
            TypeError: Если rep или radix различаются
        """
        if not self._is_compatible(other):
            raise TypeError(
                f"cannot compare {type(self).__name__} with {type(other).__name__}"
            )

        if self._scale == other._scale:
            return self._value == other._value
        if self._value == 0 or other._value == 0:
            return self._value == other._value

        coarse, fine = (self, other) if self._scale > other._scale else (other, self)
        difference = coarse._scale - fine._scale
        # radix^difference больше любого значения rep
        if difference >= self.rep.bits:
            return False
        return coarse._value * int(self.radix) ** difference == fine._value

    def increment(self) -> "FixedPoint":
        """
        Увеличение на одну единицу представления (аналог ++x).

        value растёт на 1, scale не меняется, т.е. прибавляется radix^scale.
        Значение неизменяемо: x = x.increment().
        """
        return self + type(self)(ScaledInteger(1, self._scale))

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_record(self) -> FixedPointRecord:
        """Сериализуемая запись (value, scale, rep, radix)."""
        return FixedPointRecord(
            value=self._value, scale=int(self._scale), rep=self.rep, radix=self.radix
        )

    @classmethod
    def from_record(cls, record: FixedPointRecord) -> "FixedPoint":
        """
        Восстановление значения из записи.

        На абстрактном FixedPoint возвращает экземпляр конкретного типа,
        соответствующего (rep, radix) записи.

        Raises:
            TypeError: Если rep/radix записи не совпадают с типом cls
        """
        if hasattr(cls, "rep"):
            if (cls.rep, cls.radix) != (record.rep, record.radix):
                raise TypeError(
                    f"record ({record.rep.value}, base {int(record.radix)}) "
                    f"does not match {cls.__name__}"
                )
            target = cls
        else:
            target = fixed_point_type(record.rep, record.radix)
        return target(ScaledInteger(record.value, Scale(record.scale)))

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def to_exact_string(self) -> str:
        """Точная десятичная запись без перехода через float."""
        return to_exact_string(self._value, self._scale, self.radix)

    def __str__(self) -> str:
        return render(self.get())

    def __format__(self, format_spec: str) -> str:
        return render(self.get(), format_spec)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value={self._value}, scale={self._scale!r})"


# =============================================================================
# CONSTRUCTION HELPERS
# =============================================================================


def _shift_to_rep(value: Any, scale: Scale, rep: Rep, radix: Radix) -> int:
    """
    Shift скалярного входа, усечение к нулю и приведение к rep.

    Вещественные входы (float, Fraction, numpy.float32 и т.п.) приводятся
    к float и сдвигаются в float-арифметике.

    Raises:
        TypeError: Если value не integral и не вещественное
        ValueError: Если value NaN/Inf или сдвиг вышел за диапазон float
        FixedPointOverflowError: Если проверка включена и результат вне rep
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a supported construction value")

    if isinstance(value, Integral):
        return shift_to_rep(rep, index(value), scale, radix)

    if isinstance(value, Real):
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"value must be a valid float (not NaN/Inf), got {value}")
        shifted = shift(value, scale, radix)
        if not math.isfinite(shifted):
            raise ValueError(f"shifting {value} by {scale} is not finite")
        return fit_to_rep(rep, math.trunc(shifted), "construction")

    raise TypeError(
        f"Unsupported construction value type {type(value).__name__}: "
        f"expected integral or real"
    )


def fixed_point_type(rep: Rep, radix: Radix) -> type[FixedPoint]:
    """
    Конкретный fixed-point тип для пары (rep, radix).

    Examples:
        >>> fixed_point_type(Rep.INT32, Radix.BASE_10)
        <class 'fixed_point.core.domain.value.Decimal32'>
    """
    try:
        return _TYPES[(Rep(rep), Radix(radix))]
    except (KeyError, ValueError):
        raise TypeError(
            f"Unsupported fixed_point parameters: rep={rep!r}, radix={radix!r}"
        ) from None


# =============================================================================
# КОНКРЕТНЫЕ ТИПЫ
# =============================================================================


class Decimal32(FixedPoint, rep=Rep.INT32, radix=Radix.BASE_10):
    """Десятичный fixed-point на int32."""

    __slots__ = ()


class Decimal64(FixedPoint, rep=Rep.INT64, radix=Radix.BASE_10):
    """Десятичный fixed-point на int64."""

    __slots__ = ()


class Binary32(FixedPoint, rep=Rep.INT32, radix=Radix.BASE_2):
    """Двоичный fixed-point на int32."""

    __slots__ = ()


class Binary64(FixedPoint, rep=Rep.INT64, radix=Radix.BASE_2):
    """Двоичный fixed-point на int64."""

    __slots__ = ()
