"""
mediascan.monitor.quick_scanner – sub-second media URL triage.

QuickScanner runs the metadata probe and the header probe concurrently, each
under its own deadline, evaluates the URL heuristics inline, waits for all
three outcomes to settle, and hands them to the fusion engine.  A scan never
raises: an unexpected internal fault yields the fixed ``error-fallback``
verdict.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Iterable

import httpx

from mediascan.monitor.header_probe import SAMPLE_SIZE_BYTES, HeaderProbe
from mediascan.monitor.http import build_async_client
from mediascan.monitor.metadata_probe import MetadataProbe
from mediascan.monitor.timeout_guard import guard
from mediascan.monitor.url_heuristics import evaluate_url
from mediascan.trust.fusion import ScanVerdict, error_fallback_verdict, fuse

logger = logging.getLogger(__name__)

METADATA_TIMEOUT_SECONDS = 1.0
HEADER_TIMEOUT_SECONDS = 2.0
MAX_CONCURRENT_SCANS = 3


class QuickScanner:
    """
    Metadata-only scanner: never downloads the full resource.

    Usage::

        scanner = QuickScanner()
        verdict = await scanner.scan("https://example.com/photo.jpg")

    Args:
        transport         Optional httpx transport (tests inject
                          ``httpx.MockTransport``).
        metadata_timeout  Deadline for the HEAD probe, seconds.
        header_timeout    Deadline for the range probe, seconds.
        sample_size       Bytes requested by the range probe.
        max_concurrency   Scans allowed in flight in :meth:`scan_many`.
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        *,
        metadata_timeout: float = METADATA_TIMEOUT_SECONDS,
        header_timeout: float = HEADER_TIMEOUT_SECONDS,
        sample_size: int = SAMPLE_SIZE_BYTES,
        max_concurrency: int = MAX_CONCURRENT_SCANS,
    ) -> None:
        self._transport = transport
        self.metadata_timeout = metadata_timeout
        self.header_timeout = header_timeout
        self.sample_size = sample_size
        self.max_concurrency = max_concurrency

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    async def scan(self, url: str) -> ScanVerdict:
        """Scan *url* and return its verdict.  Never raises for a scan fault."""
        started = time.perf_counter()
        try:
            verdict = await self._run(url, started)
        except Exception:
            logger.exception("Quick scan failed unexpectedly for %s", url)
            return error_fallback_verdict(url, _elapsed_ms(started))

        logger.info(
            "Quick scan of %s: %s (confidence %.3f) in %.0f ms via %s",
            url,
            verdict.classification,
            verdict.confidence,
            verdict.elapsed_ms,
            ", ".join(verdict.contributing_signals),
        )
        return verdict

    async def scan_many(self, urls: Iterable[str]) -> list[ScanVerdict]:
        """
        Scan several URLs with at most ``max_concurrency`` scans in flight.

        Verdicts are returned in input order.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(url: str) -> ScanVerdict:
            async with semaphore:
                return await self.scan(url)

        return list(await asyncio.gather(*(_bounded(u) for u in urls)))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _run(self, url: str, started: float) -> ScanVerdict:
        # No I/O; the probe tasks below do not start running until the join.
        url_outcome = evaluate_url(url)

        async with build_async_client(self._transport) as client:
            metadata_task = asyncio.ensure_future(
                guard(MetadataProbe(client).probe(url), self.metadata_timeout)
            )
            header_task = asyncio.ensure_future(
                guard(
                    HeaderProbe(client, self.sample_size).probe(url),
                    self.header_timeout,
                )
            )
            # Join on both probes before fusing or failing over.
            settled = await asyncio.gather(
                metadata_task, header_task, return_exceptions=True
            )
            elapsed_ms = _elapsed_ms(started)

        for outcome in settled:
            if isinstance(outcome, BaseException):
                raise outcome
        metadata_outcome, header_outcome = settled

        return fuse(
            metadata_outcome,
            header_outcome,
            url_outcome,
            url=url,
            elapsed_ms=elapsed_ms,
        )


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000.0, 3)
