"""Ports consumed by the batch schema generator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from schemagen.domain.model import GenerationEntry, SchemaConfiguration


@runtime_checkable
class SpecsRepository(Protocol):
    """Access to the readme files of a specification checkout."""

    def resolve_entry_point(self, base_path: str) -> str:
        """Return the readme for ``base_path`` (or a readme path) or raise
        :class:`~schemagen.domain.errors.EntryPointNotFoundError`."""
        ...

    def api_versions_by_namespace(self, readme: str) -> Mapping[str, Sequence[str]]: ...

    def package_name(self, readme: str) -> str: ...


@runtime_checkable
class GenerationEntrySource(Protocol):
    """Callable port returning the declared or synthesized entries for a base path."""

    def __call__(self, base_path: str, namespaces: Sequence[str]) -> list[GenerationEntry]: ...


@runtime_checkable
class SchemaGenerator(Protocol):
    """Callable port generating schemas for one entry of a readme."""

    def __call__(self, readme: str, entry: GenerationEntry) -> Sequence[SchemaConfiguration]: ...


@runtime_checkable
class ReferenceStore(Protocol):
    """Persistence of the references to generated resource schemas."""

    def clear(self, entries: Sequence[GenerationEntry]) -> None: ...

    def save(self, configs: Sequence[SchemaConfiguration]) -> None: ...


@runtime_checkable
class SummarySink(Protocol):
    """Append-only sink for the markdown run summary."""

    def write(self, block: str) -> None: ...


__all__ = [
    "GenerationEntrySource",
    "ReferenceStore",
    "SchemaGenerator",
    "SpecsRepository",
    "SummarySink",
]
