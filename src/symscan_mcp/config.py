"""Settings read from environment variables."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "console"
DEFAULT_MAX_FILE_SIZE = 500 * 1024  # 500KB
DEFAULT_MAX_FILES = 500


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the server and file tools."""
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT     # "console" | "json"
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_files: int = DEFAULT_MAX_FILES

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from SYMSCAN_* variables, falling back to defaults."""
        env = os.environ if environ is None else environ

        log_format = env.get("SYMSCAN_LOG_FORMAT", DEFAULT_LOG_FORMAT).lower()
        if log_format not in ("console", "json"):
            logger.warning("invalid_setting", name="SYMSCAN_LOG_FORMAT", value=log_format)
            log_format = DEFAULT_LOG_FORMAT

        return cls(
            log_level=env.get("SYMSCAN_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            log_format=log_format,
            max_file_size=_int_setting(env, "SYMSCAN_MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE),
            max_files=_int_setting(env, "SYMSCAN_MAX_FILES", DEFAULT_MAX_FILES),
        )


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("invalid_setting", name=name, value=raw)
        return default
    if value <= 0:
        logger.warning("invalid_setting", name=name, value=raw)
        return default
    return value
