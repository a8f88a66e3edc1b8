"""
mediascan.monitor.metadata_probe – header-only size/type check.

Issues a HEAD request and reads Content-Length / Content-Type whatever the
status, so a 404 page still reports its real type and size.  Header-only
requests are refused by a large share of media hosts, so a refused or failed
request degrades to a URL-extension guess instead of failing the probe.
"""
from __future__ import annotations

import logging

import httpx

from mediascan.monitor.http import raise_for_refusal, to_probe_error
from mediascan.monitor.signals import Fulfilled, MetadataSignal, ProbeError
from mediascan.monitor.url_heuristics import infer_mime_type

logger = logging.getLogger(__name__)

MIN_PLAUSIBLE_BYTES = 1000
MAX_PLAUSIBLE_BYTES = 500 * 1024 * 1024


class MetadataProbe:
    """
    HEAD-request probe.

    Usage::

        async with build_async_client() as client:
            outcome = await MetadataProbe(client).probe(url)
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def probe(self, url: str) -> Fulfilled[MetadataSignal]:
        """
        Return declared metadata for *url*.

        Always fulfilled: network errors and refusals produce the degraded
        signal from :meth:`fallback_signal`.
        """
        try:
            response = await self._request(url)
        except ProbeError as exc:
            logger.warning(
                "Metadata probe degraded for %s (%s): %s",
                url, exc.reason.value, exc,
            )
            return Fulfilled(self.fallback_signal(url))

        return Fulfilled(self.signal_from_headers(response.headers))

    async def _request(self, url: str) -> httpx.Response:
        try:
            response = await self._client.head(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise to_probe_error(exc) from exc
        raise_for_refusal(response)
        return response

    # ------------------------------------------------------------------
    # Signal derivation
    # ------------------------------------------------------------------

    @classmethod
    def signal_from_headers(cls, headers: httpx.Headers) -> MetadataSignal:
        declared_size = cls._parse_content_length(headers.get("content-length"))
        declared_type = (headers.get("content-type") or "").strip() or None

        return MetadataSignal(
            declared_size=declared_size,
            declared_mime_type=declared_type,
            mime_type_is_plausible=is_plausible_mime_type(declared_type),
            size_is_implausible=is_implausible_size(declared_size),
        )

    @staticmethod
    def fallback_signal(url: str) -> MetadataSignal:
        # Absence of headers is not evidence of a bad type or size.
        return MetadataSignal(
            declared_size=None,
            declared_mime_type=infer_mime_type(url),
            mime_type_is_plausible=True,
            size_is_implausible=False,
            inferred=True,
        )

    @staticmethod
    def _parse_content_length(raw: str | None) -> int | None:
        if raw is None:
            return None
        raw = raw.strip()
        return int(raw) if raw.isdigit() else None


def is_plausible_mime_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    lowered = content_type.lower()
    return lowered.startswith("image/") or lowered.startswith("video/")


def is_implausible_size(size: int | None) -> bool:
    if size is None:
        return False
    return size < MIN_PLAUSIBLE_BYTES or size > MAX_PLAUSIBLE_BYTES
