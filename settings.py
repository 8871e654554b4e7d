from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache


_CONFIG_PATH_ENV = "HOSTWATCH_CONFIG_PATH"
_TEMPERATURE_COMMAND_ENV = "HOSTWATCH_TEMPERATURE_COMMAND"
_FAN_COMMAND_ENV = "HOSTWATCH_FAN_COMMAND"
_COMMAND_TIMEOUT_ENV = "HOSTWATCH_COMMAND_TIMEOUT"
_CPU_SAMPLE_INTERVAL_ENV = "HOSTWATCH_CPU_SAMPLE_INTERVAL"
_DISK_PATH_ENV = "HOSTWATCH_DISK_PATH"
_SMTP_TIMEOUT_ENV = "HOSTWATCH_SMTP_TIMEOUT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    config_path: str
    temperature_command: str
    fan_command: str
    command_timeout: float
    cpu_sample_interval: float
    disk_path: str
    smtp_timeout: float
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_float_env(name: str, default: float, allow_zero: bool = False) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    if parsed > 0 or (allow_zero and parsed == 0):
        return parsed
    return default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    candidate = candidate.upper()
    if not isinstance(logging.getLevelName(candidate), int):
        return default
    return candidate


@lru_cache
def get_settings() -> Settings:
    return Settings(
        config_path=_read_str_env(_CONFIG_PATH_ENV, "config.json"),
        temperature_command=_read_str_env(_TEMPERATURE_COMMAND_ENV, "sensors"),
        fan_command=_read_str_env(_FAN_COMMAND_ENV, "sensors"),
        command_timeout=_read_float_env(_COMMAND_TIMEOUT_ENV, 10.0),
        cpu_sample_interval=_read_float_env(_CPU_SAMPLE_INTERVAL_ENV, 0.5, allow_zero=True),
        disk_path=_read_str_env(_DISK_PATH_ENV, "/"),
        smtp_timeout=_read_float_env(_SMTP_TIMEOUT_ENV, 30.0),
        log_level=_read_log_level("INFO"),
    )
