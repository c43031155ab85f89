from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Server settings, read from DICE_FORGE_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="DICE_FORGE_", str_strip_whitespace=True)

    server_name: str = Field("dice-forge", description="Name the MCP server reports to clients")
    log_level: LogLevel = Field("WARNING", description="Root logging level (logs go to stderr)")

    @field_validator("server_name", mode="before")
    @classmethod
    def blank_name_uses_default(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return "dice-forge"
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_case_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value
