"""
Тесты конфигурации арифметики

Проверяет:
1. Значение по умолчанию следует за __debug__
2. set_config возвращает предыдущую конфигурацию
3. overflow_checks восстанавливает конфигурацию даже при исключении
4. overflow_checks действует только в текущем контексте
"""

import contextvars
import dataclasses

import pytest

from fixed_point.core.config import FixedPointConfig, get_config, overflow_checks, set_config


class TestFixedPointConfig:
    """Тесты FixedPointConfig"""

    def test_default_follows_debug(self) -> None:
        assert FixedPointConfig().overflow_check is __debug__

    def test_frozen(self) -> None:
        config = FixedPointConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.overflow_check = False  # type: ignore[misc]


class TestConfigSwitching:
    """Тесты переключения конфигурации процесса"""

    def test_set_config_returns_previous(self) -> None:
        original = get_config()
        previous = set_config(FixedPointConfig(overflow_check=False))
        try:
            assert previous is original
            assert get_config().overflow_check is False
        finally:
            set_config(original)
        assert get_config() is original

    def test_set_config_rejects_other_types(self) -> None:
        with pytest.raises(TypeError, match="FixedPointConfig"):
            set_config({"overflow_check": False})  # type: ignore[arg-type]

    def test_context_manager_restores(self) -> None:
        original = get_config()
        with overflow_checks(not original.overflow_check) as config:
            assert config.overflow_check is not original.overflow_check
            assert get_config() is config
        assert get_config() is original

    def test_context_manager_restores_on_error(self) -> None:
        original = get_config()
        with pytest.raises(RuntimeError):
            with overflow_checks(False):
                raise RuntimeError("boom")
        assert get_config() is original

    def test_override_is_context_local(self) -> None:
        """Другой контекст (поток, задача) видит конфигурацию процесса"""
        original = get_config()
        with overflow_checks(not original.overflow_check):
            assert contextvars.Context().run(get_config) is original
            assert contextvars.copy_context().run(get_config) is not original

    def test_nested_blocks_restore_in_order(self) -> None:
        original = get_config()
        with overflow_checks(False) as outer:
            with overflow_checks(True) as inner:
                assert get_config() is inner
            assert get_config() is outer
        assert get_config() is original

    def test_override_wins_over_process_config(self) -> None:
        original = get_config()
        with overflow_checks(False):
            previous = set_config(FixedPointConfig(overflow_check=True))
            try:
                assert get_config().overflow_check is False
            finally:
                set_config(previous)
        assert get_config() is original
