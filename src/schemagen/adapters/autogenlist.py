"""Generation entries declared in an autogen list JSON file."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from schemagen.domain.model import GenerationEntry

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

log = getLogger(__name__)


class AutoGenEntryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    base_path: str = Field(alias="basePath")
    namespace: str
    readme_file: str | None = Field(default=None, alias="readmeFile")
    disabled_for_autogen: bool = Field(default=False, alias="disabledForAutogen")

    def to_entry(self) -> GenerationEntry:
        return GenerationEntry(
            base_path=self.base_path,
            namespace=self.namespace,
            readme_file=self.readme_file,
            disabled=self.disabled_for_autogen,
        )


_PAYLOADS = TypeAdapter(list[AutoGenEntryPayload])


def load_autogen_payloads(path: Path) -> list[AutoGenEntryPayload]:
    if not path.exists():
        log.info("No autogen list at %s, entries will be synthesized", path)
        return []
    return _PAYLOADS.validate_json(path.read_bytes())


@dataclass(slots=True)
class AutoGenList:
    """Entries declared for a base path plus synthesized entries for other namespaces.

    Every call returns fresh :class:`GenerationEntry` objects so callers may mutate
    them.
    """

    payloads: Sequence[AutoGenEntryPayload] = field(default_factory=tuple)

    @classmethod
    def from_file(cls, path: Path) -> AutoGenList:
        return cls(payloads=tuple(load_autogen_payloads(path)))

    def __call__(self, base_path: str, namespaces: Sequence[str]) -> list[GenerationEntry]:
        entries = [
            payload.to_entry()
            for payload in self.payloads
            if payload.base_path.lower() == base_path.lower()
        ]
        declared = {entry.namespace.lower() for entry in entries}
        entries.extend(
            GenerationEntry(base_path=base_path, namespace=namespace)
            for namespace in namespaces
            if namespace.lower() not in declared
        )
        return entries
