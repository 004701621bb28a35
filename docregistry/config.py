"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docregistry.services.path_service import normalize_namespace


class Settings(BaseSettings):
    """docregistry settings."""

    model_config = SettingsConfigDict(
        env_prefix="DOCREGISTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    debug: bool = False
    expose_docs: bool = False

    # Content
    content_dir: Path = Path("./content")
    default_namespace: str = "v2_0"
    strict: bool = True
    validate_links_on_load: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)

    @field_validator("default_namespace")
    @classmethod
    def namespace_must_be_nonblank(cls, v: str) -> str:
        """Reject empty namespaces and normalize ``v2.0`` to ``v2_0``."""
        _ = cls
        if not v.strip():
            raise ValueError("default_namespace must not be empty")
        return normalize_namespace(v)
