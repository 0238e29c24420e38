from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional
import logging


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False
    LOG_FILE: Optional[str] = None

    # Preference store
    DATABASE_URL: str = "sqlite:///./activutils.db"
    UNIT_SYSTEM_KEY: str = "CurrentUnitSystem"

    # Host overrides
    LOCALE: Optional[str] = None
    TIMEZONE: Optional[str] = None

    # Localization catalogs
    LOCALE_DIR: Optional[str] = None
    LOCALE_DOMAIN: str = "activutils"

    # Validators

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """
        Accept any case, reject names the logging module does not know
        """
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("LOCALE", "TIMEZONE", "LOG_FILE", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Properties
    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    # Config
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )


# Global instance
settings = Settings()
