"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_URL_PREFIX = "git@github.com:metaborg"
DEFAULT_MANIFEST_NAME = "repo.properties"


class Settings(BaseSettings):
    """Settings loaded from ``DEVENV_*`` environment variables or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="DEVENV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    log_level: str = "INFO"
    json_logs: bool = False

    # Workspace
    root_dir: str | None = None  # defaults to the current working directory
    manifest_name: str = DEFAULT_MANIFEST_NAME
    url_prefix: str = DEFAULT_URL_PREFIX

    # Git
    git_executable: str = "git"
    transport: str = "ssh"  # "ssh" | "https"
    print_command_line: bool = True

    # Failure policy: stop at the first failing repository unless set
    keep_going: bool = False

    @property
    def root_path(self) -> Path:
        return Path(self.root_dir).expanduser().resolve() if self.root_dir else Path.cwd()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
