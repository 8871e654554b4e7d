from __future__ import annotations

from typing import Iterable

from cli.config import load_config
from collectors.system import build_default_system_collector
from collectors.thermal import build_default_thermal_collector
from settings import get_settings


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    config_path = tmp_path / "smtp.json"

    monkeypatch.setenv("HOSTWATCH_CONFIG_PATH", str(config_path))
    monkeypatch.setenv("HOSTWATCH_TEMPERATURE_COMMAND", "osx-cpu-temp")
    monkeypatch.setenv("HOSTWATCH_FAN_COMMAND", "sensors -A")
    monkeypatch.setenv("HOSTWATCH_COMMAND_TIMEOUT", "3")
    monkeypatch.setenv("HOSTWATCH_CPU_SAMPLE_INTERVAL", "0")
    monkeypatch.setenv("HOSTWATCH_DISK_PATH", "/var")
    monkeypatch.setenv("HOSTWATCH_SMTP_TIMEOUT", "7.5")

    caches = (
        get_settings,
        build_default_thermal_collector,
        build_default_system_collector,
    )
    _clear_caches(caches)

    try:
        thermal = build_default_thermal_collector()
        system = build_default_system_collector()
        cli_config = load_config()

        assert thermal.temperature_command == "osx-cpu-temp"
        assert thermal.fan_command == "sensors -A"
        assert thermal.timeout == 3.0
        assert system.cpu_sample_interval == 0.0
        assert system.disk_path == "/var"
        assert cli_config.config_path == config_path
        assert cli_config.smtp_timeout == 7.5
    finally:
        _clear_caches(caches)


def test_invalid_numbers_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("HOSTWATCH_COMMAND_TIMEOUT", "soon")
    monkeypatch.setenv("HOSTWATCH_CPU_SAMPLE_INTERVAL", "-1")
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.command_timeout == 10.0
        assert settings.cpu_sample_interval == 0.5
        assert settings.log_level == "DEBUG"
        assert settings.config_path == "config.json"
    finally:
        get_settings.cache_clear()


def test_unknown_log_level_env_falls_back_to_info(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    get_settings.cache_clear()

    try:
        assert get_settings().log_level == "INFO"
    finally:
        get_settings.cache_clear()
