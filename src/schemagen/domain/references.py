"""Reference discovery over parsed JSON documents."""

from __future__ import annotations

from typing import Final

type JsonValue = dict[str, JsonValue] | list[JsonValue] | str | int | float | bool | None

REFERENCE_KEY: Final[str] = "$ref"


def find_all_references(value: JsonValue) -> list[str]:
    """Return every ``$ref`` string found anywhere in ``value``.

    References are returned in traversal order (object fields and list elements as
    encountered) and duplicates are preserved; deduplication is left to callers.
    Reference strings are leaves: the documents they point at are not visited.
    """

    references: list[str] = []
    _collect(value, references)
    return references


def _collect(value: JsonValue, references: list[str]) -> None:
    match value:
        case dict():
            for key, child in value.items():
                if key == REFERENCE_KEY and isinstance(child, str):
                    references.append(child)
                else:
                    _collect(child, references)
        case list():
            for child in value:
                _collect(child, references)
        case _:
            return


def split_reference(reference: str) -> tuple[str, str]:
    """Split ``reference`` into its document URI and path fragment.

    The fragment is returned without the ``#`` and without its leading ``/``.
    A reference without ``#`` addresses the whole document.
    """

    uri, _, fragment = reference.partition("#")
    return uri, fragment.removeprefix("/")


def document_uri(reference: str) -> str:
    return split_reference(reference)[0]
