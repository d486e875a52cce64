"""Document sources for published resource schemas."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, cast

from schemagen.adapters.http_resilience import RateLimit, ResilienceConfig, ResilientClient
from schemagen.domain.errors import InvalidReferenceError

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from schemagen.domain.references import JsonValue

log = getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(slots=True)
class LocalSchemaDocumentSource:
    """Read schema documents from a local directory mirroring ``base_uri``."""

    base_uri: str
    schemas_dir: Path

    def path_for(self, uri: str) -> Path:
        prefix = self.base_uri.rstrip("/") + "/"
        if not uri.lower().startswith(prefix.lower()):
            raise InvalidReferenceError(f"Invalid schema Uri {uri}")

        root = self.schemas_dir.resolve()
        path = (root / uri[len(prefix) :]).resolve()
        if not path.is_relative_to(root):
            raise InvalidReferenceError(f"Schema Uri {uri} escapes {root}")
        return path

    def __call__(self, uri: str) -> JsonValue:
        path = self.path_for(uri)
        log.debug("Reading %s from %s", uri, path)
        return cast("JsonValue", json.loads(path.read_text(encoding="utf-8")))


def _default_resilience_config() -> ResilienceConfig:
    return ResilienceConfig(
        name="schemas",
        timeout_seconds=_DEFAULT_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class HttpSchemaDocumentSource:
    """Fetch schema documents over HTTP(S). Documents are fetched anew on every call.

    One event loop and one client serve every call until :meth:`close`, so the
    configured rate limit applies across the whole lookup.
    """

    resilience: ResilienceConfig = field(default_factory=_default_resilience_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _runner: asyncio.Runner | None = field(default=None, init=False, repr=False)
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    def __call__(self, uri: str) -> JsonValue:
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(self._fetch(uri))

    async def _fetch(self, uri: str) -> JsonValue:
        if self._client is None:
            self._client = self.client_factory(self.resilience)
        log.debug("Fetching %s", uri)
        response = await self._client.get(uri)
        response.raise_for_status()
        return cast("JsonValue", response.json())

    def close(self) -> None:
        if self._runner is None:
            return
        try:
            if self._client is not None:
                self._runner.run(self._client.aclose())
        finally:
            self._client = None
            self._runner.close()
            self._runner = None

    def __enter__(self) -> HttpSchemaDocumentSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
