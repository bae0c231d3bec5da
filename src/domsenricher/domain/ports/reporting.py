"""Port for collecting per-node failures."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class FailureCollector(Protocol):
    """Sink for failures that must not stop the traversal."""

    def add_failure(self, reference: str, kind: str, component: str, message: str) -> None: ...


__all__ = ["FailureCollector"]
