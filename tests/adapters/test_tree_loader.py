from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from domsenricher.adapters.tree import TreeFormatError, load_tree, parse_tree
from domsenricher.domain.model import NodeType

if TYPE_CHECKING:
    from pathlib import Path

TREE = {
    "type": "batch",
    "name": "B400022028241-RT1",
    "location": "uuid:batch",
    "children": [
        {
            "type": "film",
            "name": "400022028241-1",
            "location": " uuid:film ",
            "children": [
                {"type": "edition", "name": "1795-06-13-01", "location": "uuid:edition"},
            ],
        }
    ],
}


def test_parse_tree_builds_nodes() -> None:
    root = parse_tree(json.dumps(TREE))

    assert root.type is NodeType.BATCH
    assert root.name == "B400022028241-RT1"
    [film] = root.children
    assert film.type is NodeType.FILM
    assert film.location == "uuid:film"
    assert [child.type for child in film.children] == [NodeType.EDITION]
    assert film.children[0].children == []


def test_load_tree_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(TREE), encoding="utf-8")

    root = load_tree(path)

    assert [node.location for node in root.iter_subtree()] == [
        "uuid:batch",
        "uuid:film",
        "uuid:edition",
    ]


def test_unknown_node_type_is_rejected() -> None:
    payload = {"type": "microfiche", "name": "m", "location": "uuid:m"}

    with pytest.raises(TreeFormatError, match="Invalid tree description"):
        parse_tree(json.dumps(payload))


def test_blank_location_is_rejected() -> None:
    payload = {"type": "page", "name": "p", "location": "   "}

    with pytest.raises(TreeFormatError, match="location must not be blank"):
        parse_tree(json.dumps(payload))


def test_unexpected_fields_are_rejected() -> None:
    payload = {"type": "page", "name": "p", "location": "uuid:p", "colour": "red"}

    with pytest.raises(TreeFormatError):
        parse_tree(json.dumps(payload))


def test_invalid_json_is_rejected() -> None:
    with pytest.raises(TreeFormatError):
        parse_tree("{not json")


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(TreeFormatError, match="Cannot read"):
        load_tree(tmp_path / "missing.json")
