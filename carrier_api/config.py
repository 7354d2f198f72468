# carrier_api/config.py
"""Service settings, read from environment variables and an optional .env file."""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FMCSA_BASE_URL = "https://mobile.fmcsa.dot.gov/qc/services/carriers/docket-number"
# Web key the service has always shipped with; set FMCSA_WEB_KEY to override it
DEFAULT_FMCSA_WEB_KEY = "cdc33e44d693a3a58451898d4ec9df862c65b954"

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    port: int = Field(default=3000, gt=0, lt=65536, validation_alias="PORT")
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    environment: str = Field(default="production", validation_alias="APP_ENV")
    fmcsa_base_url: str = Field(default=DEFAULT_FMCSA_BASE_URL, validation_alias="FMCSA_BASE_URL")
    fmcsa_web_key: str = Field(default=DEFAULT_FMCSA_WEB_KEY, validation_alias="FMCSA_WEB_KEY")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.strip().upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_VALID_LOG_LEVELS)}, got '{v}'")
        return upper

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("fmcsa_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("fmcsa_web_key")
    @classmethod
    def strip_web_key(cls, v: str) -> str:
        return v.strip()

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Settings for the running process, built once."""
    return Settings()
