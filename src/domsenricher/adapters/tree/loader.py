"""Load batch trees from JSON descriptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from domsenricher.domain.model import TreeNode

from .schema import TreeNodePayload

if TYPE_CHECKING:
    from pathlib import Path


class TreeFormatError(ValueError):
    """Raised when a tree description is not valid JSON or does not match the schema."""


def parse_tree(payload: str | bytes) -> TreeNode:
    try:
        validated = TreeNodePayload.model_validate_json(payload)
    except ValidationError as exc:
        raise TreeFormatError(f"Invalid tree description: {exc}") from exc
    return to_tree_node(validated)


def load_tree(path: Path) -> TreeNode:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise TreeFormatError(f"Cannot read tree description {path}: {exc}") from exc
    return parse_tree(raw)


def to_tree_node(payload: TreeNodePayload) -> TreeNode:
    return TreeNode(
        type=payload.type,
        name=payload.name,
        location=payload.location,
        children=[to_tree_node(child) for child in payload.children],
    )
