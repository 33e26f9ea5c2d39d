"""Canonical registry loader (local ``bancos.json`` or its published URL)."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from bankmerge.adapters.http_resilience import ResilientClient
from bankmerge.config.http_resilience import ResilienceConfig, registry_resilience_config
from bankmerge.config.registry import BaseRegistryConfig, get_base_registry_config
from bankmerge.domain.ports.persistence import CanonicalStoreUnavailableError

from .schema import parse_registry

if TYPE_CHECKING:
    from collections.abc import Callable

    from bankmerge.domain.model import Participant

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class JsonRegistryStore:
    config: BaseRegistryConfig = field(default_factory=get_base_registry_config)
    resilience: ResilienceConfig = field(default_factory=registry_resilience_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    @property
    def location(self) -> str:
        return str(self.config.path) if self.config.path is not None else self.config.url

    def load(self) -> list[Participant]:
        try:
            participants = parse_registry(self._read())
        except (OSError, httpx.HTTPError, ValidationError, ValueError) as exc:
            msg = f"Unable to load the canonical registry from {self.location}"
            raise CanonicalStoreUnavailableError(msg) from exc
        log.info("Loaded %d participants from %s", len(participants), self.location)
        return participants

    def _read(self) -> bytes:
        if self.config.path is not None:
            return self.config.path.read_bytes()
        return asyncio.run(self._download())

    async def _download(self) -> bytes:
        async with self.client_factory(self.resilience) as client:
            response = await client.get(self.config.url)
            response.raise_for_status()
            return response.content
