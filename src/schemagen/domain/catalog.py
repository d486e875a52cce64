"""Build the catalog of resource types and their API versions from root schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from schemagen.domain.references import document_uri, find_all_references

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from schemagen.domain.model import ResourceDescriptor
    from schemagen.domain.schema_loader import SchemaLoader

log = getLogger(__name__)


@dataclass(slots=True)
class _CatalogEntry:
    canonical_type: str
    api_versions: set[str] = field(default_factory=set)


class ResourceCatalog:
    """Mapping of resource type to known API versions.

    Types are matched case-insensitively. The casing seen first becomes the
    canonical key and later insertions in any casing merge into it.
    """

    def __init__(self, descriptors: Iterable[ResourceDescriptor] = ()) -> None:
        self._entries: dict[str, _CatalogEntry] = {}
        for descriptor in descriptors:
            self.add(descriptor)

    def add(self, descriptor: ResourceDescriptor) -> None:
        key = descriptor.type.lower()
        entry = self._entries.get(key)
        if entry is None:
            entry = _CatalogEntry(canonical_type=descriptor.type)
            self._entries[key] = entry
        entry.api_versions.add(descriptor.api_version)

    def versions(self, resource_type: str) -> frozenset[str]:
        entry = self._entries.get(resource_type.lower())
        if entry is None:
            raise KeyError(resource_type)
        return frozenset(entry.api_versions)

    def __contains__(self, resource_type: object) -> bool:
        return isinstance(resource_type, str) and resource_type.lower() in self._entries

    def __iter__(self) -> Iterator[str]:
        return (entry.canonical_type for entry in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def as_dict(self) -> dict[str, list[str]]:
        """Return canonical types mapped to their sorted API versions."""

        return {
            entry.canonical_type: sorted(entry.api_versions) for entry in self._entries.values()
        }


def collect_resource_references(root_uris: Sequence[str], loader: SchemaLoader) -> list[str]:
    """Collect the distinct trusted references made by the root documents.

    References into the root documents themselves are dropped since they are not
    resource schemas.
    """

    collected: list[str] = []
    for root_uri in root_uris:
        root = loader.load_document(root_uri)
        collected.extend(
            reference
            for reference in find_all_references(root)
            if loader.is_trusted(document_uri(reference))
        )

    root_keys = {root_uri.lower() for root_uri in root_uris}
    distinct = dict.fromkeys(collected)
    return [reference for reference in distinct if document_uri(reference).lower() not in root_keys]


def build_resource_catalog(root_uris: Sequence[str], loader: SchemaLoader) -> ResourceCatalog:
    """Resolve every resource reference reachable from ``root_uris`` into a catalog.

    Resolution failures are not isolated: the first invalid or malformed reference
    aborts the build.
    """

    references = collect_resource_references(root_uris, loader)
    log.info("Resolving %s resource references", len(references))

    catalog = ResourceCatalog()
    for reference in references:
        for descriptor in loader.resolve(reference).descriptors():
            catalog.add(descriptor)

    log.info("Catalogued %s resource types", len(catalog))
    return catalog
