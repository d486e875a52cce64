"""Ports for retrieving schema documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from schemagen.domain.references import JsonValue


@runtime_checkable
class DocumentSource(Protocol):
    """Callable port returning the parsed JSON document stored at ``uri``."""

    def __call__(self, uri: str) -> JsonValue: ...


__all__ = ["DocumentSource"]
