"""Repository wrapper that never writes."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger

from domsenricher.domain.ports.repository import DatastreamRepository

log = getLogger(__name__)


@dataclass(slots=True)
class DryRunRepository:
    """Reads through to ``inner``; writes are logged and kept in ``writes``."""

    inner: DatastreamRepository
    writes: dict[tuple[str, str], str] = field(default_factory=dict[tuple[str, str], str])

    def get_datastream(self, pid: str, dsid: str) -> str:
        return self.inner.get_datastream(pid, dsid)

    def put_datastream(
        self,
        pid: str,
        dsid: str,
        content: str,
        *,
        log_message: str | None = None,
    ) -> None:
        log.info("Dry run: would update %s of %s (%s)", dsid, pid, log_message or "no message")
        log.debug("Dry run content for %s:\n%s", pid, content)
        self.writes[(pid, dsid)] = content
