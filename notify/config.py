from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from models.schemas import SMTPConfig

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """The SMTP configuration file is missing, unreadable or malformed."""


def load_smtp_config(path: Path) -> SMTPConfig:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"could not read config file {path}: file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"could not read config file {path}: {exc}") from exc

    try:
        config = SMTPConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(f"could not parse config file {path}: {exc}") from exc

    logger.debug("SMTP configuration loaded", extra={"config_path": str(path), "smtp_host": config.smtp_host})
    return config


def save_smtp_config(config: SMTPConfig, path: Path) -> None:
    """Write ``config`` in the shape ``load_smtp_config`` reads."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = config.model_dump(mode="json")
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
