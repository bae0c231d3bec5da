"""Port for reading and writing object datastreams."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DatastreamRepository(Protocol):
    """Object repository holding the datastreams that get enriched.

    Failed reads and writes raise :class:`~domsenricher.domain.errors.RepositoryError`.
    """

    def get_datastream(self, pid: str, dsid: str) -> str: ...

    def put_datastream(
        self,
        pid: str,
        dsid: str,
        content: str,
        *,
        log_message: str | None = None,
    ) -> None: ...


__all__ = ["DatastreamRepository"]
