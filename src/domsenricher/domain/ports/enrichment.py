"""Port definitions for per-node-type enrichment."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from domsenricher.domain.model import TreeNode
    from domsenricher.domain.rels_ext import RelationTriple


@runtime_checkable
class NodeEnricher(Protocol):
    """Computes the relations a node carries on its own, independent of its children."""

    def enrich(self, node: TreeNode) -> Sequence[RelationTriple]: ...


__all__ = ["NodeEnricher"]
