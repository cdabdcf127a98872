"""
Конфигурация арифметики fixed-point

Единственный параметр — проверка переполнения представления:
- overflow_check=True: переполнение Rep → FixedPointOverflowError
- overflow_check=False: молчаливый wrap (two's complement)

По умолчанию проверка следует за __debug__ интерпретатора: включена в
обычном запуске и выключена под `python -O`.

Два уровня:
- set_config: конфигурация процесса (видна всем потокам и задачам)
- overflow_checks: временная замена в текущем контексте (contextvars),
  не влияет на другие потоки и asyncio задачи
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixedPointConfig:
    """Конфигурация арифметики fixed-point."""

    overflow_check: bool = __debug__


_CONFIG = FixedPointConfig()

# Замена конфигурации внутри overflow_checks (None — действует _CONFIG)
_OVERRIDE: ContextVar[FixedPointConfig | None] = ContextVar(
    "fixed_point_config_override", default=None
)


def get_config() -> FixedPointConfig:
    """Конфигурация, действующая в текущем контексте."""
    override = _OVERRIDE.get()
    return _CONFIG if override is None else override


def set_config(config: FixedPointConfig) -> FixedPointConfig:
    """
    Установка конфигурации процесса.

    Замены overflow_checks, активные в каком-либо контексте, продолжают
    действовать там до выхода из блока.

    Args:
        config: Новая конфигурация

    Returns:
        Предыдущая конфигурация процесса (для восстановления)
    """
    global _CONFIG

    if not isinstance(config, FixedPointConfig):
        raise TypeError(
            f"config must be FixedPointConfig, got {type(config).__name__}"
        )

    previous = _CONFIG
    _CONFIG = config
    logger.debug("fixed_point config changed: %s -> %s", previous, config)
    return previous


@contextmanager
def overflow_checks(enabled: bool) -> Iterator[FixedPointConfig]:
    """
    Временное включение/выключение проверки переполнения в текущем контексте.

    Examples:
        >>> with overflow_checks(False):
        ...     pass  # арифметика внутри блока делает wrap
    """
    config = replace(get_config(), overflow_check=enabled)
    token = _OVERRIDE.set(config)
    logger.debug("fixed_point overflow checks set to %s in current context", enabled)
    try:
        yield config
    finally:
        _OVERRIDE.reset(token)
