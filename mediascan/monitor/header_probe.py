"""
mediascan.monitor.header_probe – partial-content signature check.

Requests only the first ``SAMPLE_SIZE_BYTES`` of the resource and runs the
signature matcher over them.  Servers that ignore the Range header still
send the full body; the stream is abandoned once the sample is filled so
the file is never downloaded in full.
"""
from __future__ import annotations

import logging

import httpx

from mediascan.monitor.http import raise_for_range_status, to_probe_error
from mediascan.monitor.signals import (
    Failed,
    Fulfilled,
    HeaderSignal,
    ProbeError,
    SignalOutcome,
)
from mediascan.monitor.signatures import detect_file_signature, has_provenance_marker

logger = logging.getLogger(__name__)

SAMPLE_SIZE_BYTES = 8192
_CHUNK_SIZE = 4096


class HeaderProbe:
    """Range-request probe returning a ``HeaderSignal`` or a ``Failed`` outcome."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        sample_size: int = SAMPLE_SIZE_BYTES,
    ) -> None:
        self._client = client
        self.sample_size = sample_size

    async def probe(self, url: str) -> SignalOutcome[HeaderSignal]:
        try:
            sample = await self.fetch_sample(url)
        except ProbeError as exc:
            logger.warning(
                "Header probe failed for %s (%s): %s", url, exc.reason.value, exc
            )
            return Failed.from_error(exc)

        return Fulfilled(self.signal_from_sample(sample))

    async def fetch_sample(self, url: str) -> bytes:
        """
        Read at most ``sample_size`` bytes from the start of *url*.

        Raises:
            ProbeBlocked       Server policy refused the request.
            ProbeNetworkError  Connection/protocol failure, or HTTP 416 for an
                               unsupported range.  Other error replies are
                               sampled like any body.
        """
        headers = {"Range": f"bytes=0-{self.sample_size - 1}"}
        collected = bytearray()
        try:
            async with self._client.stream("GET", url, headers=headers) as response:
                raise_for_range_status(response)
                async for chunk in response.aiter_bytes(_CHUNK_SIZE):
                    collected.extend(chunk)
                    if len(collected) >= self.sample_size:
                        break
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise to_probe_error(exc) from exc

        return bytes(collected[: self.sample_size])

    @staticmethod
    def signal_from_sample(sample: bytes) -> HeaderSignal:
        return HeaderSignal(
            has_provenance_marker=has_provenance_marker(sample),
            file_signature=detect_file_signature(sample),
            bytes_read=len(sample),
        )
