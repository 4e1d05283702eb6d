# locator_resolver/utils/config.py
from __future__ import annotations

import functools
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------- Enums ----------

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# ---------- Settings ----------

class Settings(BaseSettings):
    """
    Central configuration for locator resolution.

    Values load in this order of precedence:
      1) Environment variables
      2) .env file in project root
      3) Defaults below
    """

    # ---- Resolution ----
    DEFAULT_SELECTOR: str = Field(default="css", description="Selector used when none is named or detected")
    IGNORE_HIDDEN_ELEMENTS: bool = Field(default=False, description="Default for the `visible` filter")
    SELECTORS_FILE: Optional[Path] = Field(default=None, description="YAML file with extra selector definitions")

    # ---- Logging ----
    LOG_LEVEL: LogLevel = Field(default=LogLevel.INFO)
    LOG_TO_FILE: bool = Field(default=False)
    LOG_FILE: Path = Field(default=Path("./locator-resolver.log"))
    COLORIZED_OUTPUT: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore unknown envs to keep things flexible
    )

    @field_validator("DEFAULT_SELECTOR")
    @classmethod
    def _selector_non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("DEFAULT_SELECTOR cannot be empty")
        return v

    @field_validator("SELECTORS_FILE", "LOG_FILE", mode="before")
    @classmethod
    def _coerce_to_path(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, Path):
            return v
        return Path(str(v))

    @field_validator("SELECTORS_FILE", "LOG_FILE", mode="after")
    @classmethod
    def _absolutize(cls, v: Optional[Path]):
        if v is None:
            return v
        return v if v.is_absolute() else Path.cwd() / v


# --------- Public accessor (memoized) ---------

@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache settings once per process.
    Call `get_settings.cache_clear()` if you need to reload after changing env.
    """
    return Settings()
