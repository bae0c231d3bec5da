"""Node-end enrichment of RELS-EXT datastreams across a batch tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Final, Protocol

from domsenricher.domain.errors import (
    MalformedDocumentError,
    RepositoryError,
    SerializationError,
)
from domsenricher.domain.model import NodeType
from domsenricher.domain.relations import child_relations
from domsenricher.domain.rels_ext import RelationTriple, RelsExtDocument, content_model

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from domsenricher.domain.model import TreeNode
    from domsenricher.domain.ports import DatastreamRepository, FailureCollector, NodeEnricher

log = getLogger(__name__)

COMPONENT_NAME: Final[str] = "DomsEnricherComponent"
DEFAULT_DATASTREAM: Final[str] = "RELS-EXT"
EXCEPTION_FAILURE: Final[str] = "exception"

BASE_CONTENT_MODEL: Final[str] = "doms:ContentModel_DOMS"

DEFAULT_CONTENT_MODELS: Final[Mapping[NodeType, tuple[str, ...]]] = MappingProxyType(
    {
        NodeType.BATCH: ("doms:ContentModel_RoundTrip",),
        NodeType.FILM: ("doms:ContentModel_Film",),
        NodeType.EDITION: ("doms:ContentModel_Edition",),
        NodeType.PAGE: ("doms:ContentModel_EditionPage",),
        NodeType.UNMATCHED: ("doms:ContentModel_EditionPage",),
        NodeType.BRIK: ("doms:ContentModel_Brik",),
        NodeType.WORKSHIFT_ISO_TARGET: ("doms:ContentModel_IsoTarget",),
        NodeType.FILM_ISO_TARGET: ("doms:ContentModel_IsoTarget",),
        NodeType.WORKSHIFT_TARGET: ("doms:ContentModel_Target",),
        NodeType.FILM_TARGET: ("doms:ContentModel_Target",),
        NodeType.TARGET_IMAGE: ("doms:ContentModel_Target",),
        NodeType.ISO_TARGET_IMAGE: ("doms:ContentModel_File", "doms:ContentModel_Jpeg2000File"),
        NodeType.BRIK_IMAGE: ("doms:ContentModel_File", "doms:ContentModel_Jpeg2000File"),
        NodeType.PAGE_IMAGE: ("doms:ContentModel_File", "doms:ContentModel_Jpeg2000File"),
    }
)

if _missing := set(NodeType) - set(DEFAULT_CONTENT_MODELS):
    raise RuntimeError("Content model table is missing node types: " + ", ".join(sorted(_missing)))


@dataclass(frozen=True, slots=True)
class ContentModelEnricher:
    """Assigns ``hasModel`` relations from a fixed per-type table."""

    models: Mapping[NodeType, tuple[str, ...]] = field(
        default_factory=lambda: DEFAULT_CONTENT_MODELS
    )
    base_models: tuple[str, ...] = (BASE_CONTENT_MODEL,)

    def enrich(self, node: TreeNode) -> Sequence[RelationTriple]:
        pids = (*self.models.get(node.type, ()), *self.base_models)
        return tuple(content_model(pid) for pid in pids)


@dataclass(slots=True)
class NodeEnrichmentResult:
    """What happened to a single node's datastream."""

    node_name: str
    location: str
    triples: tuple[RelationTriple, ...] = ()
    added: int = 0
    written: bool = False
    failure: str | None = None


class TreeEventHandler(Protocol):
    def node_begin(self, node: TreeNode) -> None: ...

    def node_end(self, node: TreeNode) -> None: ...


@dataclass(slots=True)
class NodeEnrichmentHandler:
    """Tree event handler that merges a node's relations into its RELS-EXT on node end.

    Enricher errors are recorded with the collector and the node is still
    linked to its children. A datastream that cannot be read, merged or
    written is recorded as a failure of that node only. Structural errors
    propagate.
    """

    repository: DatastreamRepository
    collector: FailureCollector
    enrichers: Mapping[NodeType, NodeEnricher] = field(default_factory=dict)
    default_enricher: NodeEnricher = field(default_factory=ContentModelEnricher)
    datastream: str = DEFAULT_DATASTREAM
    results: list[NodeEnrichmentResult] = field(default_factory=list[NodeEnrichmentResult])

    def node_begin(self, node: TreeNode) -> None:
        log.debug("Entering %s (%s)", node.name, node.type)

    def node_end(self, node: TreeNode) -> None:
        self.results.append(self.handle_node_end(node))

    def handle_node_end(self, node: TreeNode) -> NodeEnrichmentResult:
        result = NodeEnrichmentResult(node_name=node.name, location=node.location)

        own_triples: Sequence[RelationTriple] = ()
        enricher = self.enrichers.get(node.type, self.default_enricher)
        try:
            own_triples = enricher.enrich(node)
        except Exception as exc:  # noqa: BLE001
            log.warning("Enricher failed for %s: %s", node.name, exc)
            result.failure = str(exc)
            self.collector.add_failure(node.name, EXCEPTION_FAILURE, COMPONENT_NAME, str(exc))

        triples = (*own_triples, *child_relations(node))
        result.triples = triples
        if not triples:
            return result

        try:
            self._merge_and_store(node, result)
        except (MalformedDocumentError, SerializationError, RepositoryError) as exc:
            log.warning("Could not update %s of %s: %s", self.datastream, node.name, exc)
            result.failure = str(exc)
            self.collector.add_failure(node.name, EXCEPTION_FAILURE, COMPONENT_NAME, str(exc))
        return result

    def _merge_and_store(self, node: TreeNode, result: NodeEnrichmentResult) -> None:
        document = RelsExtDocument(self.repository.get_datastream(node.location, self.datastream))
        document.add_relations(result.triples)
        result.added = document.added
        if document.added == 0:
            log.debug("No new relations for %s", node.name)
            return

        content = document.serialize()
        log.debug("New %s for %s:\n%s", self.datastream, node.location, content)
        self.repository.put_datastream(
            node.location,
            self.datastream,
            content,
            log_message=f"Added {result.added} relation(s) for {node.name}",
        )
        result.written = True
        log.info("Added %s relation(s) to %s (%s)", result.added, node.name, node.location)


def walk_tree(root: TreeNode, handler: TreeEventHandler) -> None:
    """Deliver begin events parents-first and end events children-first."""

    handler.node_begin(root)
    for child in root.children:
        walk_tree(child, handler)
    handler.node_end(root)
