"""Public domain model surface."""

from __future__ import annotations

from domsenricher.domain.model.enums import NodeType
from domsenricher.domain.model.node import TreeNode

__all__ = ["NodeType", "TreeNode"]
