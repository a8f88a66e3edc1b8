"""
Shared fixtures for mediascan tests.

Network behaviour is simulated with httpx.MockTransport; no test touches the
real network.
"""
from __future__ import annotations

import asyncio

import httpx
import pytest

# First bytes of real-looking files.  None of them contain a provenance marker.
JPEG_SAMPLE = b"\xFF\xD8\xFF\xE0\x00\x10JFIF\x00" + b"\x00" * 64
PNG_SAMPLE = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
MP4_SAMPLE = b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 64
JPEG_WITH_C2PA = JPEG_SAMPLE + b"jumb" + b"c2pa" + b"\x00" * 32


def media_transport(
    *,
    head_status: int = 200,
    head_headers: dict[str, str] | None = None,
    get_status: int = 206,
    body: bytes = JPEG_SAMPLE,
    head_error: Exception | None = None,
    get_error: Exception | None = None,
    head_delay: float = 0.0,
    get_delay: float = 0.0,
) -> httpx.MockTransport:
    """Build a transport answering HEAD and ranged GET requests."""

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "HEAD":
            if head_delay:
                await asyncio.sleep(head_delay)
            if head_error is not None:
                raise head_error
            return httpx.Response(head_status, headers=head_headers or {})

        if get_delay:
            await asyncio.sleep(get_delay)
        if get_error is not None:
            raise get_error
        return httpx.Response(get_status, content=body)

    return httpx.MockTransport(handler)


def hanging_transport() -> httpx.MockTransport:
    """A server that accepts requests and never answers."""

    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(3600)
        return httpx.Response(200)

    return httpx.MockTransport(handler)


@pytest.fixture
def good_jpeg_transport() -> httpx.MockTransport:
    return media_transport(
        head_headers={"content-type": "image/jpeg", "content-length": "250000"},
        body=JPEG_SAMPLE,
    )
