"""Configuration management for taskcal."""

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

TASKCAL_HOME = Path(os.environ.get("TASKCAL_HOME", Path.home() / "taskcal"))
CONFIG_FILE = TASKCAL_HOME / "config" / "taskcal.conf"
DATA_DIR = TASKCAL_HOME / "data"

BACKENDS = ("file", "supabase")


@dataclass
class Config:
    """taskcal configuration."""

    backend: str = "file"
    tasks_file: str = ""
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_table: str = "tasks"
    timezone: str = "UTC"

    @property
    def tasks_path(self) -> Path:
        if self.tasks_file:
            return Path(self.tasks_file).expanduser()
        return DATA_DIR / "tasks.json"

    def zone(self) -> ZoneInfo:
        """Configured timezone, falling back to UTC."""
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone '{self.timezone}', using UTC")
            return ZoneInfo("UTC")

    def now(self) -> datetime:
        """Naive wall-clock time in the configured timezone."""
        return datetime.now(self.zone()).replace(tzinfo=None)

    def today(self) -> date:
        return self.now().date()


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from unquoted values."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from taskcal.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "backend":
                value = value.lower()
                if value not in BACKENDS:
                    raise ValueError(f"Unknown backend '{value}' (expected one of {', '.join(BACKENDS)})")
                config.backend = value
            case "tasks_file":
                config.tasks_file = value
            case "supabase_url":
                config.supabase_url = value.rstrip("/")
            case "supabase_key":
                config.supabase_key = value
            case "supabase_table":
                config.supabase_table = value or "tasks"
            case "timezone":
                config.timezone = value
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
