# config/settings.py
import logging
import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from util.constants import ExternalURIs
from util.enums import Environment
from util.errors import ConfigurationError

_log = logging.getLogger("config.settings")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    # Required, in the order they are reported when missing
    CF_API_KEY: str = Field(..., validation_alias="CF_API_KEY")
    CF_API_EMAIL: str = Field(..., validation_alias="CF_API_EMAIL")
    TARGET_DIRECTORY: str = Field(..., validation_alias="TARGET_DIRECTORY")
    CF_API_ACCOUNT_ID: str = Field(..., validation_alias="CF_API_ACCOUNT_ID")
    CF_KV_NAMESPACE: str = Field(..., validation_alias="CF_KV_NAMESPACE")

    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")

    # Cloudflare API
    CF_API_BASE_URL: str = Field(
        default=ExternalURIs.CLOUDFLARE_API, validation_alias="CF_API_BASE_URL"
    )
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=30.0, validation_alias="HTTP_TIMEOUT_SECONDS"
    )

    # Logging knobs
    LOGGER_NAME: str = "workers-kv-sync"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="kv-sync.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")


def load_settings(use_dotenv: Optional[bool] = None) -> Settings:
    """
    Read the environment once and validate all of it.

    Every missing or invalid variable ends up in a single ConfigurationError,
    so the operator sees the whole list instead of fixing them one run at a time.
    """
    if use_dotenv is None:
        use_dotenv = os.getenv("APP_ENV", Environment.DEV.value) == Environment.DEV.value
    if use_dotenv:
        load_dotenv()

    try:
        return Settings()
    except ValidationError as e:
        missing: list[str] = []
        invalid: list[str] = []
        for err in e.errors():
            loc = ".".join(str(x) for x in err.get("loc", []))
            if err.get("type") == "missing":
                missing.append(loc)
            else:
                invalid.append(f"{loc}: {err.get('msg', '')}")
        _log.debug("settings.invalid missing=%d invalid=%d", len(missing), len(invalid))
        raise ConfigurationError(missing, invalid) from e
