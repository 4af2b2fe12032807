from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import normalize_level_name, normalize_format_name

class Settings(BaseSettings):
    """
    Logger settings loaded from environment.
    """

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "text"
    LOG_TO_STDOUT: bool = True
    LOG_COLOR: bool = False
    LOG_DIR: Path = Path("/var/log/chainlogger")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5

    # Name of the stdlib logger that receives transformed entries
    LOGGER_NAME: str = "chainlogger"

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_LEVEL environment variable value to uppercase.

        Runs before the Literal check (mode="before"), so `LOG_LEVEL=debug`
        is accepted and stored as "DEBUG", the spelling the logging module
        expects for level names.
        """
        return normalize_level_name(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return normalize_format_name(v)

    # --- Settings config ---
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

# Settings are read from the environment once per process; tests call
# get_settings.cache_clear() after changing environment variables.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
