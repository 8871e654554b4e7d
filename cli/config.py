from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from settings import get_settings


@dataclass(frozen=True)
class CLIConfig:
    config_path: Path
    smtp_timeout: float


def load_config(config_path: Optional[Path] = None) -> CLIConfig:
    settings = get_settings()
    path = config_path if config_path is not None else Path(settings.config_path)
    return CLIConfig(
        config_path=path.expanduser(),
        smtp_timeout=settings.smtp_timeout,
    )
