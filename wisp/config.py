"""Environment driven settings.

Settings are read from the environment on each call so that a process
(or a test) can change them without re-importing the package:

- WISP_LOG_LEVEL: level for the JSONL log sink (default: INFO)
- WISP_LOG_PATH: JSONL log file; unset disables the file sink
"""

import os

from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class WispSettings(BaseModel):
    """Runtime settings for wisp."""

    log_level: str = Field(default="INFO", description="Level for the JSONL log sink")
    log_path: str | None = Field(default=None, description="JSONL log file (None disables file logging)")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level


def load_settings() -> WispSettings:
    """Build settings from WISP_* environment variables.

    Raises:
        pydantic.ValidationError: An environment value is invalid
    """
    values: dict[str, str] = {}
    if level := os.environ.get("WISP_LOG_LEVEL"):
        values["log_level"] = level
    if path := os.environ.get("WISP_LOG_PATH"):
        values["log_path"] = path
    return WispSettings(**values)
