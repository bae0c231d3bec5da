"""Fedora repository adapter."""

from __future__ import annotations

from .client import DatastreamNotFoundError, FedoraAPIError, FedoraClient
from .dry_run import DryRunRepository

__all__ = [
    "DatastreamNotFoundError",
    "DryRunRepository",
    "FedoraAPIError",
    "FedoraClient",
]
