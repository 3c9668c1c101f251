"""
Beacon API client for downloading blob sidecars and block roots.

Every request goes through one retry loop with a fixed delay between
attempts. The loop distinguishes three outcomes:

- Transport failures (refused connections, timeouts, 429 and 5xx answers)
  are transient. They consume one attempt and the loop sleeps before the
  next one.
- A 404 means the slot has no block (the proposer missed it). This is a
  normal result and is returned immediately as an empty value.
- Any other answer is final. A 2xx body is decoded; a decode failure is
  fatal and never retried, because asking again yields the same bytes.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from blob_backfill.containers import BlobSidecar, Slot
from blob_backfill.exceptions import (
    DecodeError,
    HeadNotFoundError,
    RetryExhaustedError,
    UnexpectedStatusError,
)
from blob_backfill.metrics import fetch_retries

from .responses import BlobSidecarsResponse, BlockHeaderResponse, BlockHeadersResponse
from .routes import BLOB_SIDECARS_ENDPOINT, HEADER_ENDPOINT, HEADERS_ENDPOINT, get_url

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)

DEFAULT_RETRIES = 10
"""Maximum attempts per request."""

DEFAULT_RETRY_DELAY = 5.0
"""Seconds to wait between two attempts of the same request."""

DEFAULT_TIMEOUT = 60.0
"""HTTP request timeout in seconds. A timed out attempt is retried."""

RETRYABLE_STATUS_CODES = frozenset({429})
"""Non-5xx status codes that are retried like transport failures."""

EMPTY_ROOT = ""
"""Root returned for a slot without a block."""


class BeaconApiClient:
    """
    Retrying client for the Beacon API resources the backfill reads.

    Use as an async context manager so that the underlying connection pool is
    opened once per run and closed at the end:

        async with BeaconApiClient("http://localhost:5052") as client:
            sidecars = await client.get_blob_sidecars(Slot(8626176))
    """

    def __init__(
        self,
        base_url: str,
        *,
        retries: int = DEFAULT_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        timeout: float = DEFAULT_TIMEOUT,
        max_connections: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Base URL of the Beacon API (e.g. "http://localhost:5052").
            retries: Maximum number of attempts per request.
            retry_delay: Seconds to wait between two attempts.
            timeout: Per-request timeout in seconds. A timeout counts as a
                transport failure.
            max_connections: Size of the connection pool. None leaves it unbounded;
                callers size it to the number of requests they issue at once.
            transport: Optional httpx transport, used to fake the server in tests.
            sleep: Coroutine used to wait between attempts.
        """
        if retries < 1:
            raise ValueError(f"retries must be at least 1, got {retries}")
        self.base_url = base_url
        self.retries = retries
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max_connections,
            ),
            transport=transport,
        )

    async def __aenter__(self) -> BeaconApiClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the connection pool."""
        await self._client.aclose()

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    async def get_blob_sidecars(self, slot: Slot) -> list[BlobSidecar]:
        """
        Fetch the blob sidecars of the canonical block at `slot`.

        Returns:
            The sidecars in index order. Empty if the slot has no block.
        """
        url = get_url(self.base_url, BLOB_SIDECARS_ENDPOINT.format(slot=int(slot)))
        response = await self._get(url, "blob_sidecars", slot=slot)
        if response is None:
            return []
        return self._decode(response, BlobSidecarsResponse, slot=slot).data

    async def get_block_root(self, slot: Slot) -> str:
        """
        Fetch the root of the canonical block at `slot`.

        Returns:
            The root as the hex string sent by the server, or `EMPTY_ROOT`
            if the slot has no block.
        """
        url = get_url(self.base_url, HEADER_ENDPOINT.format(slot=int(slot)))
        response = await self._get(url, "header", slot=slot)
        if response is None:
            return EMPTY_ROOT
        return self._decode(response, BlockHeaderResponse, slot=slot).data.root

    async def get_head_slot(self) -> Slot:
        """
        Fetch the slot of the current head.

        Raises:
            HeadNotFoundError: If the server returns no headers.
        """
        url = get_url(self.base_url, HEADERS_ENDPOINT)
        response = await self._get(url, "headers")
        if response is None:
            raise HeadNotFoundError()
        headers = self._decode(response, BlockHeadersResponse)
        if not headers.data:
            raise HeadNotFoundError()
        return headers.data[0].header.message.slot

    # -------------------------------------------------------------------------
    # Request Plumbing
    # -------------------------------------------------------------------------

    async def _get(
        self,
        url: str,
        resource: str,
        *,
        slot: Slot | None = None,
    ) -> httpx.Response | None:
        """
        GET `url` with retries.

        Returns:
            The final response, or None if the server answered 404.

        Raises:
            RetryExhaustedError: If every attempt failed at the transport level.
            UnexpectedStatusError: For non-retryable error statuses.
            DecodeError: If the body of the response could not be read.
        """
        for attempt in range(1, self.retries + 1):
            try:
                response = await self._client.get(url)
            except httpx.TransportError as exc:
                reason = f"{type(exc).__name__}: {exc}"
            except httpx.RequestError as exc:
                # The response arrived but its body could not be read (bad content encoding).
                raise DecodeError(
                    url, f"{type(exc).__name__}: {exc}", slot=_as_int(slot)
                ) from exc
            else:
                if response.status_code == httpx.codes.NOT_FOUND:
                    return None
                if response.is_success:
                    return response
                if response.is_server_error or response.status_code in RETRYABLE_STATUS_CODES:
                    reason = f"HTTP {response.status_code}"
                else:
                    raise UnexpectedStatusError(
                        url,
                        response.status_code,
                        response.text,
                        slot=_as_int(slot),
                    )

            fetch_retries.labels(resource=resource).inc()
            logger.warning(
                "Attempt %d/%d for %s failed (%s)", attempt, self.retries, url, reason
            )

            # Only sleep between attempts, never after the last one.
            if attempt < self.retries:
                await self._sleep(self.retry_delay)

        raise RetryExhaustedError(url, self.retries, slot=_as_int(slot))

    @staticmethod
    def _decode(
        response: httpx.Response,
        model: type[ResponseT],
        *,
        slot: Slot | None = None,
    ) -> ResponseT:
        """Decode a JSON body into `model`, mapping every failure to DecodeError."""
        url = str(response.request.url)
        try:
            return model.model_validate(response.json())
        except ValueError as exc:
            # ValidationError is a ValueError, and so is a malformed JSON body.
            detail = (
                f"{exc.error_count()} validation errors"
                if isinstance(exc, ValidationError)
                else str(exc)
            )
            raise DecodeError(url, detail, slot=_as_int(slot)) from exc


def _as_int(slot: Slot | None) -> int | None:
    return None if slot is None else int(slot)
