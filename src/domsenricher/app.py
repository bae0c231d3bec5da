"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from domsenricher.adapters.fedora import DryRunRepository, FedoraClient
from domsenricher.domain.enrichment import (
    COMPONENT_NAME,
    DEFAULT_DATASTREAM,
    NodeEnrichmentHandler,
    walk_tree,
)
from domsenricher.domain.reporting import ResultCollector
from domsenricher.domain.rels_ext import RelsExtDocument

if TYPE_CHECKING:
    from domsenricher.domain.enrichment import NodeEnrichmentResult
    from domsenricher.domain.model import TreeNode
    from domsenricher.domain.ports import DatastreamRepository
    from domsenricher.domain.rels_ext import RelationTriple


log = getLogger(__name__)


@dataclass(slots=True)
class EnrichmentRunResult:
    """Outcome of enriching a whole tree."""

    nodes: int
    written: int
    added: int
    collector: ResultCollector

    @property
    def success(self) -> bool:
        return self.collector.is_success()


def _resolve_repository(
    repository: DatastreamRepository | None,
    *,
    dry_run: bool,
) -> DatastreamRepository:
    effective = repository or FedoraClient()
    return DryRunRepository(effective) if dry_run else effective


def enrich_tree(
    root: TreeNode,
    *,
    repository: DatastreamRepository | None = None,
    collector: ResultCollector | None = None,
    dry_run: bool = False,
    datastream: str = DEFAULT_DATASTREAM,
) -> EnrichmentRunResult:
    """Walk ``root`` and merge every node's relations into its datastream."""

    effective_collector = collector or ResultCollector(component=COMPONENT_NAME)
    handler = NodeEnrichmentHandler(
        repository=_resolve_repository(repository, dry_run=dry_run),
        collector=effective_collector,
        datastream=datastream,
    )
    log.info("Starting enrichment of %s (%s), dry_run=%s", root.name, root.location, dry_run)

    walk_tree(root, handler)

    results: list[NodeEnrichmentResult] = handler.results
    run = EnrichmentRunResult(
        nodes=len(results),
        written=sum(1 for result in results if result.written),
        added=sum(result.added for result in results),
        collector=effective_collector,
    )
    log.info(
        f"Finished enrichment: nodes={run.nodes}, written={run.written}, "
        f"added={run.added}, failures={len(effective_collector.failures)}"
    )
    return run


def add_relation(
    pid: str,
    triple: RelationTriple,
    *,
    repository: DatastreamRepository | None = None,
    dry_run: bool = False,
    datastream: str = DEFAULT_DATASTREAM,
) -> bool:
    """Add a single relation to one object. Returns whether the datastream changed."""

    effective = _resolve_repository(repository, dry_run=dry_run)
    document = RelsExtDocument(effective.get_datastream(pid, datastream))
    document.add_relation(triple)
    if document.added == 0:
        log.info("%s already has %s -> %s", pid, triple.predicate, triple.resource)
        return False
    effective.put_datastream(
        pid,
        datastream,
        document.serialize(),
        log_message=f"Added {triple.predicate} relation to {triple.object_pid}",
    )
    log.info("Added %s -> %s to %s", triple.predicate, triple.resource, pid)
    return True
