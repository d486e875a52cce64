from __future__ import annotations

from schemagen.domain.references import document_uri, find_all_references, split_reference


def test_finds_references_at_any_depth_in_traversal_order() -> None:
    document = {
        "$ref": "https://example.com/a.json#/x",
        "definitions": {
            "nested": {
                "allOf": [
                    {"$ref": "https://example.com/b.json#/y"},
                    {"properties": {"deep": {"$ref": "https://example.com/c.json#/z"}}},
                ]
            }
        },
        "oneOf": [[{"$ref": "https://example.com/d.json#/w"}]],
    }

    assert find_all_references(document) == [
        "https://example.com/a.json#/x",
        "https://example.com/b.json#/y",
        "https://example.com/c.json#/z",
        "https://example.com/d.json#/w",
    ]


def test_preserves_duplicates() -> None:
    document = {
        "oneOf": [
            {"$ref": "https://example.com/a.json#/x"},
            {"$ref": "https://example.com/a.json#/x"},
        ]
    }

    assert find_all_references(document) == [
        "https://example.com/a.json#/x",
        "https://example.com/a.json#/x",
    ]


def test_ignores_non_string_references_and_scalars() -> None:
    document = {
        "$ref": {"$ref": "https://example.com/inner.json#/a"},
        "description": "$ref",
        "default": None,
        "enum": ["$ref", 1, 2.5, True],
    }

    assert find_all_references(document) == ["https://example.com/inner.json#/a"]


def test_top_level_sequence_and_scalars() -> None:
    assert find_all_references([{"$ref": "u#/a"}, "text", None]) == ["u#/a"]
    assert find_all_references("u#/a") == []
    assert find_all_references(None) == []


def test_split_reference() -> None:
    assert split_reference("https://example.com/a.json#/b/c") == (
        "https://example.com/a.json",
        "b/c",
    )
    assert split_reference("https://example.com/a.json") == ("https://example.com/a.json", "")
    assert document_uri("https://example.com/a.json#/b") == "https://example.com/a.json"
