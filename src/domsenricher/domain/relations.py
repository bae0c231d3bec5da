"""Mapping from child node types to RELS-EXT relation names."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from domsenricher.domain.errors import StructuralError
from domsenricher.domain.model import NodeType
from domsenricher.domain.rels_ext import RELS_EXT_NS, RelationTriple

if TYPE_CHECKING:
    from collections.abc import Mapping

    from domsenricher.domain.model import TreeNode

# BATCH has no entry: a batch is never a child.
_RELATION_NAMES: Final[Mapping[NodeType, str | None]] = MappingProxyType(
    {
        NodeType.WORKSHIFT_ISO_TARGET: "hasWorkshift",
        NodeType.WORKSHIFT_TARGET: "hasPage",
        NodeType.TARGET_IMAGE: "hasPage",
        NodeType.FILM: "hasFilm",
        NodeType.FILM_ISO_TARGET: "hasIsoTarget",
        NodeType.FILM_TARGET: "hasPage",
        NodeType.ISO_TARGET_IMAGE: "hasFile",
        NodeType.UNMATCHED: "hasPage",
        NodeType.EDITION: "hasEdition",
        NodeType.PAGE: "hasPage",
        NodeType.BRIK: "hasBrik",
        NodeType.BRIK_IMAGE: "hasFile",
        NodeType.PAGE_IMAGE: "hasFile",
    }
)

_unmapped = set(NodeType) - set(_RELATION_NAMES) - {NodeType.BATCH}
if _unmapped:
    raise RuntimeError(
        "Relation table is missing node types: " + ", ".join(sorted(_unmapped))
    )


def map_child_to_predicate(
    child_type: NodeType,
    *,
    child_name: str = "<unknown>",
    parent_name: str = "<unknown>",
) -> str | None:
    """Return the relation name linking a parent to a child of ``child_type``.

    ``None`` means the child is not linked at all. A batch child is a broken
    tree and raises :class:`StructuralError`; the names are only used in the
    error message.
    """

    if child_type is NodeType.BATCH:
        raise StructuralError(child_name, parent_name)
    return _RELATION_NAMES[child_type]


def child_relations(node: TreeNode) -> tuple[RelationTriple, ...]:
    """Build the external relations from ``node`` to each of its children.

    Every child is checked before any triple is built, so a structural error
    never leaves a partial result behind.
    """

    predicates = [
        map_child_to_predicate(child.type, child_name=child.name, parent_name=node.name)
        for child in node.children
    ]
    return tuple(
        RelationTriple(RELS_EXT_NS, predicate, child.location)
        for child, predicate in zip(node.children, predicates, strict=True)
        if predicate is not None
    )
