"""Domain port definitions for adapters."""

from __future__ import annotations

from .enrichment import NodeEnricher
from .reporting import FailureCollector
from .repository import DatastreamRepository

__all__ = [
    "DatastreamRepository",
    "FailureCollector",
    "NodeEnricher",
]
