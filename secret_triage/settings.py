"""Application settings loaded from environment variables and .env file."""

import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .models import Blacklists

DEFAULT_BLACKLIST_EXTENSIONS = [
    ".exe", ".dll", ".so", ".dylib", ".bin", ".class", ".jar", ".pyc",
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".ico", ".tif", ".tiff", ".psd", ".svg",
    ".mp3", ".mp4", ".mov", ".avi", ".wav", ".flac", ".ogg",
    ".ttf", ".otf", ".woff", ".woff2", ".eot",
    ".zip", ".gz", ".tgz", ".bz2", ".xz", ".7z", ".rar", ".tar",
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
]

DEFAULT_BLACKLIST_PATHS = [
    "node_modules/", "vendor/", "bower_components/", ".git/", ".hg/",
    "jquery", "bootstrap", "min.js", "min.css",
]


class Settings(BaseSettings):
    """Settings for repository triage."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_tokens: Annotated[list[str], NoDecode] = []
    blacklist_extensions: Annotated[list[str], NoDecode] = DEFAULT_BLACKLIST_EXTENSIONS
    blacklist_paths: Annotated[list[str], NoDecode] = DEFAULT_BLACKLIST_PATHS
    maximum_file_size: int = 256  # KB
    maximum_repository_size: int = 5_120  # KB
    clone_timeout: int = 10  # seconds
    temp_dir: Path = Path(tempfile.gettempdir()) / "secret-triage"
    entropy_threshold: float = 5.0
    github_events_url: str = "https://api.github.com/events?per_page=100"
    api_timeout: float | None = 30.0

    @field_validator("github_tokens", "blacklist_extensions", "blacklist_paths", mode="before")
    @classmethod
    def _split_commas(cls, value):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @property
    def blacklists(self) -> Blacklists:
        return Blacklists.from_lists(self.blacklist_extensions, self.blacklist_paths)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
