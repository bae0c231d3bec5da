from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from domsenricher.domain.enrichment import (
    COMPONENT_NAME,
    DEFAULT_CONTENT_MODELS,
    ContentModelEnricher,
    NodeEnrichmentHandler,
    walk_tree,
)
from domsenricher.domain.errors import RepositoryError, StructuralError
from domsenricher.domain.model import NodeType, TreeNode
from domsenricher.domain.reporting import ResultCollector
from domsenricher.domain.rels_ext import RelsExtDocument, content_model, external_relation
from tests.support.repository import InMemoryRepository, empty_rels_ext

if TYPE_CHECKING:
    from collections.abc import Sequence

    from domsenricher.domain.rels_ext import RelationTriple


class ExplodingEnricher:
    def enrich(self, node: TreeNode) -> Sequence[RelationTriple]:
        raise RuntimeError(f"no enrichment policy for {node.name}")


class UnavailableRepository:
    def get_datastream(self, pid: str, dsid: str) -> str:
        raise RepositoryError(f"{pid} is unavailable")

    def put_datastream(
        self, pid: str, dsid: str, content: str, *, log_message: str | None = None
    ) -> None:
        raise RepositoryError(f"{pid} is unavailable")


class RecordingHandler:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def node_begin(self, node: TreeNode) -> None:
        self.events.append(("begin", node.name))

    def node_end(self, node: TreeNode) -> None:
        self.events.append(("end", node.name))


def _relations(repository: InMemoryRepository, pid: str) -> tuple[RelationTriple, ...]:
    return RelsExtDocument(repository.datastreams[(pid, "RELS-EXT")]).relations()


def _handler(repository: InMemoryRepository, **kwargs: object) -> NodeEnrichmentHandler:
    return NodeEnrichmentHandler(
        repository=repository,
        collector=ResultCollector(component=COMPONENT_NAME),
        **kwargs,  # type: ignore[arg-type]
    )


def test_content_model_enricher_adds_type_and_base_models() -> None:
    edition = TreeNode(NodeType.EDITION, "edition", "uuid:edition")

    assert ContentModelEnricher().enrich(edition) == (
        content_model("doms:ContentModel_Edition"),
        content_model("doms:ContentModel_DOMS"),
    )


def test_content_model_table_covers_every_type() -> None:
    assert set(DEFAULT_CONTENT_MODELS) == set(NodeType)


def test_content_model_enricher_defaults_to_shared_table() -> None:
    assert ContentModelEnricher().models is DEFAULT_CONTENT_MODELS
    assert ContentModelEnricher(models={}).enrich(
        TreeNode(NodeType.FILM, "film", "uuid:film")
    ) == (content_model("doms:ContentModel_DOMS"),)


def test_walk_tree_orders_begin_and_end_events() -> None:
    root = TreeNode(NodeType.FILM, "film", "uuid:film")
    edition = root.add_child(TreeNode(NodeType.EDITION, "edition", "uuid:edition"))
    edition.add_child(TreeNode(NodeType.PAGE, "page", "uuid:page"))
    handler = RecordingHandler()

    walk_tree(root, handler)

    assert handler.events == [
        ("begin", "film"),
        ("begin", "edition"),
        ("begin", "page"),
        ("end", "page"),
        ("end", "edition"),
        ("end", "film"),
    ]


def test_node_end_writes_child_relations_and_models(
    batch_tree: TreeNode,
    repository: InMemoryRepository,
) -> None:
    edition = batch_tree.children[0].children[1]
    handler = _handler(repository)

    result = handler.handle_node_end(edition)

    assert result.written
    assert result.added == 4
    assert _relations(repository, "uuid:edition") == (
        content_model("doms:ContentModel_Edition"),
        content_model("doms:ContentModel_DOMS"),
        external_relation("hasPage", "uuid:page-1"),
        external_relation("hasPage", "uuid:page-2"),
    )
    assert repository.writes == [
        ("uuid:edition", "RELS-EXT", "Added 4 relation(s) for 1795-06-13-01")
    ]


def test_enriching_twice_is_idempotent(
    batch_tree: TreeNode,
    repository: InMemoryRepository,
) -> None:
    walk_tree(batch_tree, _handler(repository))
    first_pass = dict(repository.datastreams)
    repository.writes.clear()

    second = _handler(repository)
    walk_tree(batch_tree, second)

    assert repository.writes == []
    assert repository.datastreams == first_pass
    assert all(result.added == 0 for result in second.results)


def test_whole_tree_gets_expected_links(
    batch_tree: TreeNode,
    repository: InMemoryRepository,
) -> None:
    handler = _handler(repository)

    walk_tree(batch_tree, handler)

    assert [result.node_name for result in handler.results][-1] == "B400022028241-RT1"
    assert external_relation("hasFilm", "uuid:film") in _relations(repository, "uuid:batch")
    film_relations = _relations(repository, "uuid:film")
    assert external_relation("hasIsoTarget", "uuid:iso") in film_relations
    assert external_relation("hasEdition", "uuid:edition") in film_relations
    assert external_relation("hasFile", "uuid:iso-image") in _relations(repository, "uuid:iso")
    assert external_relation("hasFile", "uuid:page-1-image") in _relations(
        repository, "uuid:page-1"
    )
    assert len(repository.writes) == len(list(batch_tree.iter_subtree()))


def test_enricher_failure_is_recorded_and_children_still_linked(
    batch_tree: TreeNode,
    repository: InMemoryRepository,
) -> None:
    edition = batch_tree.children[0].children[1]
    handler = _handler(repository, enrichers={NodeType.EDITION: ExplodingEnricher()})

    result = handler.handle_node_end(edition)

    assert result.failure == "no enrichment policy for 1795-06-13-01"
    assert result.written
    assert _relations(repository, "uuid:edition") == (
        external_relation("hasPage", "uuid:page-1"),
        external_relation("hasPage", "uuid:page-2"),
    )
    collector = handler.collector
    assert isinstance(collector, ResultCollector)
    [failure] = collector.failures
    assert failure.reference == "1795-06-13-01"
    assert failure.kind == "exception"
    assert failure.component == COMPONENT_NAME


def test_enricher_failure_does_not_stop_traversal(
    batch_tree: TreeNode,
    repository: InMemoryRepository,
) -> None:
    handler = _handler(repository, enrichers={NodeType.PAGE: ExplodingEnricher()})

    walk_tree(batch_tree, handler)

    collector = handler.collector
    assert isinstance(collector, ResultCollector)
    assert [failure.reference for failure in collector.failures] == [
        "1795-06-13-01-0001",
        "1795-06-13-01-0002",
    ]
    assert len(handler.results) == len(list(batch_tree.iter_subtree()))


def test_structural_error_aborts_before_any_io(repository: InMemoryRepository) -> None:
    edition = TreeNode(NodeType.EDITION, "edition", "uuid:edition")
    edition.add_child(TreeNode(NodeType.BATCH, "stray-batch", "uuid:stray"))

    with pytest.raises(StructuralError, match="stray-batch"):
        _handler(repository).handle_node_end(edition)

    assert repository.reads == []
    assert repository.writes == []


def test_node_without_triples_is_not_read(repository: InMemoryRepository) -> None:
    node = TreeNode(NodeType.PAGE_IMAGE, "image", "uuid:image")
    handler = _handler(repository, default_enricher=ContentModelEnricher(models={}, base_models=()))

    result = handler.handle_node_end(node)

    assert result.triples == ()
    assert not result.written
    assert repository.reads == []


def test_malformed_datastream_is_recorded_and_walk_continues(
    batch_tree: TreeNode, repository: InMemoryRepository
) -> None:
    repository.datastreams[("uuid:page-1-image", "RELS-EXT")] = "<rdf:RDF"
    handler = _handler(repository)

    walk_tree(batch_tree, handler)

    assert len(handler.results) == len(list(batch_tree.iter_subtree()))
    collector = handler.collector
    assert isinstance(collector, ResultCollector)
    failures = collector.failures
    assert [(failure.reference, failure.kind) for failure in failures] == [
        ("1795-06-13-01-0001.jp2", "exception")
    ]
    assert "Unable to parse" in failures[0].message
    assert repository.datastreams[("uuid:page-1-image", "RELS-EXT")] == "<rdf:RDF"
    assert external_relation("hasFile", "uuid:page-1-image") in _relations(
        repository, "uuid:page-1"
    )
    assert external_relation("hasFilm", "uuid:film") in _relations(repository, "uuid:batch")


def test_repository_error_is_recorded_for_that_node() -> None:
    node = TreeNode(NodeType.BRIK, "brik", "uuid:missing")
    collector = ResultCollector(component=COMPONENT_NAME)
    handler = NodeEnrichmentHandler(repository=UnavailableRepository(), collector=collector)

    result = handler.handle_node_end(node)

    assert not result.written
    assert result.failure == "uuid:missing is unavailable"
    assert [(failure.reference, failure.component) for failure in collector.failures] == [
        ("brik", COMPONENT_NAME)
    ]


def test_custom_datastream_name(repository: InMemoryRepository) -> None:
    node = TreeNode(NodeType.BRIK, "brik", "uuid:brik")
    repository.datastreams[("uuid:brik", "RELS-TEST")] = empty_rels_ext("uuid:brik")

    result = _handler(repository, datastream="RELS-TEST").handle_node_end(node)

    assert result.written
    assert repository.writes[0][:2] == ("uuid:brik", "RELS-TEST")
