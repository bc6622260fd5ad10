"""HTTP adapter for the upload endpoint."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

import httpx

from ..models import DEFAULT_ENDPOINT, RawResponse, TransportFailure

logger = logging.getLogger(__name__)


class HTTPUploadClient:
    """
    HTTP client adapter for multipart uploads.

    Implements IUploadClient protocol. Each call to ``upload`` sends exactly
    one request; failures are returned as ``TransportFailure`` values.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: Optional[float] = None,
        max_connections: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._endpoint = endpoint
        self._timeout = timeout
        self._max_connections = max_connections
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            limits=httpx.Limits(max_connections=self._max_connections),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def upload(self, path: Path) -> Union[RawResponse, TransportFailure]:
        if not self._client:
            raise RuntimeError("HTTPUploadClient not initialized. Use 'async with' context.")

        path = Path(path)
        try:
            # file I/O runs in a worker thread, never on the event loop
            content = await asyncio.to_thread(path.read_bytes)
            response = await self._client.post(
                self._endpoint,
                files={"file": (path.name, content)},
            )
            body = response.text
        except OSError as exc:
            logger.debug(f"Cannot read {path}: {exc}")
            return TransportFailure(f"cannot read file: {exc.strerror or exc}")
        except httpx.HTTPError as exc:
            logger.debug(f"Request for {path} failed: {exc!r}")
            return TransportFailure(str(exc) or type(exc).__name__)

        logger.debug(f"POST {self._endpoint} [{path.name}] -> {response.status_code}")
        return RawResponse(status_code=response.status_code, body=body)
