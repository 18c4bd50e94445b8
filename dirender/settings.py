from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DIRENDER_", case_sensitive=False)

    vars_file: str = "_vars.yml"
    template_ext: str = ".tmpl"
    max_workers: int | None = Field(default=None, ge=1)
    file_mode: int = 0o644
    encoding: str = "utf-8"
    strict_undefined: bool = True

    @field_validator("template_ext")
    @classmethod
    def _normalize_ext(cls, value: str) -> str:
        value = value.strip()
        if value and not value.startswith("."):
            value = f".{value}"
        return value

    @field_validator("file_mode", mode="before")
    @classmethod
    def _parse_octal_mode(cls, value: object) -> object:
        # Environment values are octal strings such as "0644".
        if isinstance(value, str):
            try:
                return int(value.strip(), 8)
            except ValueError as e:
                raise ValueError(f"Invalid octal mode: {value!r}") from e
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
