"""Application settings and configuration management."""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings

from ..core.ordering import IntegerKeyMode

DEFAULT_DOCS_URL = (
    "https://github.com/leanprover-community/mathlib4_docs/archive/refs/heads/master.zip"
)


def default_data_dir() -> Path:
    """Per-user data directory, following XDG_DATA_HOME when set."""
    base = os.environ.get("XDG_DATA_HOME")
    root = Path(base) if base else Path.home() / ".local" / "share"
    return root / "decl-index"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = Field(default="Declaration Index")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000)
    workers: int = Field(default=1)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")  # json or console

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    # Corpus
    data_dir: Path = Field(default_factory=default_data_dir)
    docs_dir: Optional[Path] = Field(default=None)  # defaults to <data_dir>/docs_archive
    docs_url: str = Field(default=DEFAULT_DOCS_URL)
    skip_update: bool = Field(default=False)
    force_update: bool = Field(default=False)
    snapshot_path: Optional[Path] = Field(default=None)  # bypasses the corpus entirely
    download_timeout: float = Field(default=300.0)

    # Search
    integer_key_mode: IntegerKeyMode = Field(default=IntegerKeyMode.EXACT)

    # Static files
    serve_docs: bool = Field(default=True)

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def corpus_dir(self) -> Path:
        """Directory the docs archive is unpacked into."""
        return self.docs_dir or self.data_dir / "docs_archive"


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
