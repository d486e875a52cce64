"""Persist references to generated resource schemas in the autogenerated index."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from schemagen.domain.references import document_uri

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from schemagen.domain.model import GenerationEntry, SchemaConfiguration

log = getLogger(__name__)

JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-04/schema#"


class ReferencePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    ref: str = Field(alias="$ref")


class AutogeneratedResourcesDocument(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = None
    schema_: str = Field(default=JSON_SCHEMA_DRAFT, alias="$schema")
    title: str = "Autogenerated resources"
    description: str = "Resource types generated from the REST API specifications"
    one_of: list[ReferencePayload] = Field(default_factory=list, alias="oneOf")

    @property
    def references(self) -> list[str]:
        return [item.ref for item in self.one_of]

    def with_references(self, references: Iterable[str]) -> AutogeneratedResourcesDocument:
        return self.model_copy(
            update={"one_of": [ReferencePayload(ref=reference) for reference in references]}
        )


def reference_namespace(reference: str) -> str:
    """Return the namespace of the schema file a reference points into."""

    return PurePosixPath(document_uri(reference)).stem


@dataclass(slots=True)
class JsonReferenceStore:
    """Read-modify-write store backed by ``common/autogeneratedResources.json``."""

    path: Path
    document_id: str | None = None

    def load(self) -> AutogeneratedResourcesDocument:
        if not self.path.exists():
            return AutogeneratedResourcesDocument(id=self.document_id)
        return AutogeneratedResourcesDocument.model_validate_json(self.path.read_bytes())

    def references(self) -> list[str]:
        return self.load().references

    def clear(self, entries: Sequence[GenerationEntry]) -> None:
        namespaces = {entry.namespace.lower() for entry in entries}
        if not namespaces:
            return

        document = self.load()
        kept = [
            reference
            for reference in document.references
            if reference_namespace(reference).lower() not in namespaces
        ]
        log.info(
            "Cleared %s references for namespaces %s",
            len(document.references) - len(kept),
            ", ".join(sorted(namespaces)),
        )
        self._write(document.with_references(kept))

    def save(self, configs: Sequence[SchemaConfiguration]) -> None:
        document = self.load()
        merged = dict.fromkeys(document.references)
        for config in configs:
            merged.update(dict.fromkeys(config.references))
        references = sorted(merged, key=lambda reference: (reference.lower(), reference))
        log.info("Saving %s autogenerated references to %s", len(references), self.path)
        self._write(document.with_references(references))

    def _write(self, document: AutogeneratedResourcesDocument) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = document.model_dump_json(by_alias=True, exclude_none=True, indent=2)
        self.path.write_text(payload + "\n", encoding="utf-8")
