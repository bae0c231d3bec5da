"""JSON tree description adapter."""

from __future__ import annotations

from .loader import TreeFormatError, load_tree, parse_tree
from .schema import TreeNodePayload

__all__ = ["TreeFormatError", "TreeNodePayload", "load_tree", "parse_tree"]
