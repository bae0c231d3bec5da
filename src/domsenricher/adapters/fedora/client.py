"""HTTP client for the Fedora 3 REST API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final
from urllib.parse import quote

from domsenricher.adapters.http_resilience import ResilientClient
from domsenricher.config.fedora import FedoraConfig, get_fedora_config
from domsenricher.domain.errors import RepositoryError
from domsenricher.domain.ports.repository import DatastreamRepository

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from domsenricher.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

RDF_MIME_TYPE: Final[str] = "application/rdf+xml"
DEFAULT_LOG_MESSAGE: Final[str] = "Updated by domsenricher"


class FedoraAPIError(RepositoryError):
    """Raised when Fedora answers with an unexpected status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DatastreamNotFoundError(FedoraAPIError):
    """Raised when the object or datastream does not exist."""


def _datastream_path(pid: str, dsid: str) -> str:
    return f"objects/{quote(pid, safe=':')}/datastreams/{quote(dsid, safe='')}"


class FedoraClient:
    """Reads and writes datastreams; one HTTP client per call."""

    def __init__(
        self,
        *,
        config: FedoraConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_fedora_config()
        self._resilience = self._config.resilience
        self._client_factory = client_factory or ResilientClient

    def get_datastream(self, pid: str, dsid: str) -> str:
        return asyncio.run(self._get_datastream_async(pid=pid, dsid=dsid))

    def put_datastream(
        self,
        pid: str,
        dsid: str,
        content: str,
        *,
        log_message: str | None = None,
    ) -> None:
        asyncio.run(
            self._put_datastream_async(
                pid=pid,
                dsid=dsid,
                content=content,
                log_message=log_message or DEFAULT_LOG_MESSAGE,
            )
        )

    async def _get_datastream_async(self, *, pid: str, dsid: str) -> str:
        async with self._client_factory(self._resilience) as client:
            response = await client.get(
                f"{_datastream_path(pid, dsid)}/content",
                auth=self._config.auth,
            )
        self._raise_for_status(response, pid=pid, dsid=dsid)
        return response.text

    async def _put_datastream_async(
        self,
        *,
        pid: str,
        dsid: str,
        content: str,
        log_message: str,
    ) -> None:
        async with self._client_factory(self._resilience) as client:
            response = await client.put(
                _datastream_path(pid, dsid),
                params={"mimeType": RDF_MIME_TYPE, "logMessage": log_message},
                content=content.encode("utf-8"),
                headers={"Content-Type": f"{RDF_MIME_TYPE}; charset=utf-8"},
                auth=self._config.auth,
            )
        self._raise_for_status(response, pid=pid, dsid=dsid)
        log.debug("Stored %s for %s", dsid, pid)

    @staticmethod
    def _raise_for_status(response: httpx.Response, *, pid: str, dsid: str) -> None:
        if response.is_success:
            return
        if response.status_code == 404:
            raise DatastreamNotFoundError(
                f"Datastream {dsid} of {pid} not found", status_code=response.status_code
            )
        log.error(f"Fedora returned {response.status_code} for {dsid} of {pid}: {response.text}")
        raise FedoraAPIError(
            f"Fedora request for {dsid} of {pid} failed with status {response.status_code}",
            status_code=response.status_code,
        )


if TYPE_CHECKING:
    _repository_check: DatastreamRepository = FedoraClient()
