"""Data and output directory configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env

APP_DIR_NAME: Final[str] = "bankmerge"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"
DEFAULT_OUTPUT_DIRNAME: Final[str] = "result"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    output_dir: Path
    http_cache_filename: str = HTTP_CACHE_FILENAME
    changelog_path: Path | None = None

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.http_cache_filename

    def ensure_output_dir(self) -> Path:
        output_dir = self.output_dir.expanduser().resolve()
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = optional_env("BANKMERGE_DATA_DIR")
    env_output = optional_env("BANKMERGE_OUTPUT_DIR")
    env_changelog = optional_env("BANKMERGE_CHANGELOG_PATH")
    return StorageConfig(
        data_dir=Path(env_dir) if env_dir else _default_data_dir(),
        output_dir=Path(env_output) if env_output else Path.cwd() / DEFAULT_OUTPUT_DIRNAME,
        changelog_path=Path(env_changelog) if env_changelog else None,
    )
