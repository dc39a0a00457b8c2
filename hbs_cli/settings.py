from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HBS_", case_sensitive=False)

    output: Path | None = None
    extension: str = "html"
    debug: bool = False
    file_mode: int = 0o644

    @field_validator("file_mode", mode="before")
    @classmethod
    def _parse_octal(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return int(value, 8)
            except ValueError as e:
                raise ValueError(f"Invalid octal mode: {value!r}") from e
        return value
