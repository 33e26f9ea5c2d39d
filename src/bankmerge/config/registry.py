"""Canonical registry location configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env

DEFAULT_BASE_URL: Final[str] = (
    "https://raw.githubusercontent.com/guibranco/BancosBrasileiros/main/data/bancos.json"
)


@dataclass(frozen=True, slots=True)
class BaseRegistryConfig:
    """Where the canonical registry is read from; a local path wins over the URL."""

    path: Path | None = None
    url: str = DEFAULT_BASE_URL


def get_base_registry_config() -> BaseRegistryConfig:
    env_path = optional_env("BANKMERGE_BASE_PATH")
    return BaseRegistryConfig(
        path=Path(env_path) if env_path else None,
        url=optional_env("BANKMERGE_BASE_URL") or DEFAULT_BASE_URL,
    )


def parse_base_location(value: str) -> BaseRegistryConfig:
    """Interpret a CLI ``--base`` value as either an HTTP(S) URL or a local path."""

    if value.startswith(("http://", "https://")):
        return BaseRegistryConfig(url=value)
    return BaseRegistryConfig(path=Path(value))
