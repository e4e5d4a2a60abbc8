"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

import pendulum
from pendulum.tz.exceptions import InvalidTimezone
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Blog3 application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    debug: bool = False
    expose_docs: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///data/db/blog3.db"

    # Site
    page_root: str = ""
    timezone: str = "UTC"
    recent_posts_limit: int = Field(default=10, ge=1, le=100)

    # Paths
    assets_dir: Path = Path("./assets")

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    # Editor auth
    basic_auth_user: str | None = None
    basic_auth_password: str | None = None
    basic_auth_realm: str = "blog3"

    @field_validator("page_root")
    @classmethod
    def normalize_page_root(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            pendulum.timezone(v)
        except InvalidTimezone as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    @property
    def basic_auth_enabled(self) -> bool:
        return self.basic_auth_user is not None and self.basic_auth_password is not None

    def route(self, child: str) -> str:
        """Prefix a path with the configured page root."""
        return self.page_root + child

    def validate_runtime_security(self) -> None:
        """Validate security-critical production settings."""
        if self.debug:
            return

        violations: list[str] = []
        if (self.basic_auth_user is None) != (self.basic_auth_password is None):
            violations.append("BASIC_AUTH_USER and BASIC_AUTH_PASSWORD must be set together")
        if self.basic_auth_password is not None and len(self.basic_auth_password) < 12:
            violations.append(
                "BASIC_AUTH_PASSWORD must be overridden with a strong value (>=12 chars)"
            )

        if violations:
            joined = "; ".join(violations)
            raise ValueError(f"Insecure production configuration: {joined}")
