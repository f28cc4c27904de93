from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "{message} | {extra}"
)


class Settings(BaseSettings):
    log_level: str = Field(default="INFO")
    log_format: str = Field(default=DEFAULT_LOG_FORMAT)
    replace_quotes: bool = Field(default=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        if v == "":
            return "INFO"
        return v.upper()

    model_config = SettingsConfigDict(
        env_prefix="ERRCTX_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )
