"""In-memory fakes for the generation and document ports."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from schemagen.domain.errors import EntryPointNotFoundError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from schemagen.domain.model import GenerationEntry, SchemaConfiguration
    from schemagen.domain.references import JsonValue


class FakeSpecsRepository:
    def __init__(
        self,
        readmes: Mapping[str, str],
        *,
        namespaces: Mapping[str, Sequence[str]] | None = None,
        package_names: Mapping[str, str] | None = None,
    ) -> None:
        self._readmes = dict(readmes)
        self._namespaces = dict(namespaces or {})
        self._package_names = dict(package_names or {})
        self.resolved: list[str] = []

    def resolve_entry_point(self, base_path: str) -> str:
        self.resolved.append(base_path)
        if base_path not in self._readmes:
            raise EntryPointNotFoundError(f"No readme for {base_path}", base_path=base_path)
        return self._readmes[base_path]

    def api_versions_by_namespace(self, readme: str) -> dict[str, list[str]]:
        return {namespace: ["2020-01-01"] for namespace in self._namespaces.get(readme, ())}

    def package_name(self, readme: str) -> str:
        return self._package_names.get(readme, readme)


class FakeEntrySource:
    def __init__(self, entries: Mapping[str, Sequence[GenerationEntry]]) -> None:
        self._entries = {key: list(value) for key, value in entries.items()}
        self.calls: list[tuple[str, list[str]]] = []

    def __call__(self, base_path: str, namespaces: Sequence[str]) -> list[GenerationEntry]:
        self.calls.append((base_path, list(namespaces)))
        return [replace(entry) for entry in self._entries.get(base_path, ())]


class FakeGenerator:
    """Returns configured configs per base path, or raises the configured error."""

    def __init__(
        self,
        outcomes: Mapping[str, Sequence[SchemaConfiguration] | Exception],
    ) -> None:
        self._outcomes = dict(outcomes)
        self.calls: list[tuple[str, str]] = []

    def __call__(self, readme: str, entry: GenerationEntry) -> list[SchemaConfiguration]:
        self.calls.append((readme, entry.base_path))
        outcome = self._outcomes.get(entry.base_path, ())
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)


class RecordingReferenceStore:
    def __init__(self) -> None:
        self.cleared: list[list[GenerationEntry]] = []
        self.saved: list[list[SchemaConfiguration]] = []

    def clear(self, entries: Sequence[GenerationEntry]) -> None:
        self.cleared.append(list(entries))

    def save(self, configs: Sequence[SchemaConfiguration]) -> None:
        self.saved.append(list(configs))


class ListSummarySink:
    def __init__(self) -> None:
        self.blocks: list[str] = []

    def write(self, block: str) -> None:
        self.blocks.append(block)


class DictDocumentSource:
    def __init__(self, documents: Mapping[str, JsonValue]) -> None:
        self._documents = dict(documents)
        self.fetched: list[str] = []

    def __call__(self, uri: str) -> JsonValue:
        self.fetched.append(uri)
        return self._documents[uri]
