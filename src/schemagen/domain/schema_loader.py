"""Resolve resource schema references to their type/apiVersion enumerations."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from logging import getLogger
from typing import TYPE_CHECKING

from schemagen.domain.errors import InvalidReferenceError, MalformedSchemaError
from schemagen.domain.model import ResourceDescriptor
from schemagen.domain.references import split_reference

if TYPE_CHECKING:
    from schemagen.domain.ports.documents import DocumentSource
    from schemagen.domain.references import JsonValue

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResourceEnumerations:
    """The ``type`` and ``apiVersion`` enumerations declared by a resource schema."""

    types: tuple[str, ...]
    api_versions: tuple[str, ...]

    def descriptors(self) -> list[ResourceDescriptor]:
        return [
            ResourceDescriptor(type=type_, api_version=api_version)
            for type_, api_version in product(self.types, self.api_versions)
        ]


class SchemaLoader:
    """Load schema documents below a trusted base URI and resolve references into them."""

    def __init__(self, source: DocumentSource, *, trusted_base_uri: str) -> None:
        self._source = source
        self.trusted_base_uri = trusted_base_uri.rstrip("/")

    def is_trusted(self, uri: str) -> bool:
        return uri.lower().startswith(self.trusted_base_uri.lower() + "/")

    def load_document(self, uri: str) -> JsonValue:
        if not self.is_trusted(uri):
            raise InvalidReferenceError(f"Invalid schema Uri {uri}")
        log.debug("Loading schema document %s", uri)
        return self._source(uri)

    def resolve(self, reference: str) -> ResourceEnumerations:
        """Return the resource enumerations found at ``reference``.

        Fragment segments are used as literal property names; JSON pointer escapes
        (``~0``, ``~1``) are not decoded.
        """

        uri, fragment = split_reference(reference)
        node = self.load_document(uri)
        if fragment:
            for segment in fragment.split("/"):
                node = _descend(node, segment, reference=reference)
        return _read_enumerations(node, reference=reference)


def _descend(node: JsonValue, segment: str, *, reference: str) -> JsonValue:
    if isinstance(node, dict) and segment in node:
        return node[segment]
    if isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
        return node[int(segment)]
    raise MalformedSchemaError(f"Unable to resolve path element '{segment}' for {reference}")


def _read_enumerations(node: JsonValue, *, reference: str) -> ResourceEnumerations:
    properties = node.get("properties") if isinstance(node, dict) else None
    if not isinstance(properties, dict):
        raise MalformedSchemaError(f"Unable to find expected properties for {reference}")

    types = _string_enum(properties.get("type"))
    api_versions = _string_enum(properties.get("apiVersion"))
    if types is None or api_versions is None:
        raise MalformedSchemaError(f"Unable to find expected properties for {reference}")

    return ResourceEnumerations(types=types, api_versions=api_versions)


def _string_enum(declaration: JsonValue) -> tuple[str, ...] | None:
    if not isinstance(declaration, dict):
        return None
    values = declaration.get("enum")
    if not isinstance(values, list) or not all(isinstance(value, str) for value in values):
        return None
    return tuple(value for value in values if isinstance(value, str))
