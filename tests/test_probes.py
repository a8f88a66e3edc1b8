import httpx
import pytest

from mediascan.monitor.header_probe import SAMPLE_SIZE_BYTES, HeaderProbe
from mediascan.monitor.http import build_async_client
from mediascan.monitor.metadata_probe import (
    MetadataProbe,
    is_implausible_size,
    is_plausible_mime_type,
)
from mediascan.monitor.signals import FailureReason

from conftest import JPEG_WITH_C2PA, PNG_SAMPLE, media_transport

URL = "https://example.com/media/photo.png"


# ---------------------------------------------------------------------------
# Metadata probe
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_metadata_reads_declared_headers():
    transport = media_transport(
        head_headers={"content-type": "image/png", "content-length": "48213"}
    )
    async with build_async_client(transport) as client:
        outcome = await MetadataProbe(client).probe(URL)

    assert outcome.ok
    signal = outcome.value
    assert signal.declared_size == 48213
    assert signal.declared_mime_type == "image/png"
    assert signal.mime_type_is_plausible
    assert not signal.size_is_implausible
    assert not signal.inferred


@pytest.mark.asyncio
async def test_metadata_flags_implausible_values():
    transport = media_transport(
        head_headers={"content-type": "text/html; charset=utf-8", "content-length": "512"}
    )
    async with build_async_client(transport) as client:
        signal = (await MetadataProbe(client).probe(URL)).value

    assert not signal.mime_type_is_plausible
    assert signal.size_is_implausible


@pytest.mark.asyncio
async def test_metadata_missing_headers():
    async with build_async_client(media_transport(head_headers={})) as client:
        signal = (await MetadataProbe(client).probe(URL)).value

    assert signal.declared_size is None
    assert signal.declared_mime_type is None
    assert not signal.mime_type_is_plausible
    assert not signal.size_is_implausible


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [404, 410, 500])
async def test_metadata_reads_headers_of_error_replies(status):
    transport = media_transport(
        head_status=status,
        head_headers={"content-type": "text/html", "content-length": "500"},
    )
    async with build_async_client(transport) as client:
        outcome = await MetadataProbe(client).probe(URL)

    assert outcome.ok
    signal = outcome.value
    assert not signal.inferred
    assert signal.declared_mime_type == "text/html"
    assert signal.declared_size == 500
    assert not signal.mime_type_is_plausible
    assert signal.size_is_implausible


@pytest.mark.asyncio
async def test_metadata_blocked_request_degrades_to_url_inference():
    async with build_async_client(media_transport(head_status=403)) as client:
        outcome = await MetadataProbe(client).probe(URL)

    assert outcome.ok
    signal = outcome.value
    assert signal.inferred
    assert signal.declared_mime_type == "image/png"
    assert signal.mime_type_is_plausible
    assert not signal.size_is_implausible
    assert signal.declared_size is None


@pytest.mark.asyncio
async def test_metadata_network_error_degrades():
    transport = media_transport(head_error=httpx.ConnectError("refused"))
    async with build_async_client(transport) as client:
        outcome = await MetadataProbe(client).probe("https://example.com/page")

    assert outcome.ok
    assert outcome.value.inferred
    assert outcome.value.declared_mime_type is None


def test_plausibility_rules():
    assert is_plausible_mime_type("image/webp")
    assert is_plausible_mime_type("Video/MP4")
    assert not is_plausible_mime_type("application/octet-stream")
    assert not is_plausible_mime_type(None)

    assert is_implausible_size(0)
    assert is_implausible_size(999)
    assert not is_implausible_size(1000)
    assert not is_implausible_size(500 * 1024 * 1024)
    assert is_implausible_size(500 * 1024 * 1024 + 1)
    assert not is_implausible_size(None)


# ---------------------------------------------------------------------------
# Header probe
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_header_probe_requests_byte_range():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["range"] = request.headers.get("range")
        return httpx.Response(206, content=PNG_SAMPLE)

    async with build_async_client(httpx.MockTransport(handler)) as client:
        outcome = await HeaderProbe(client).probe(URL)

    assert seen["range"] == "bytes=0-8191"
    assert outcome.ok
    assert outcome.value.file_signature == "png"
    assert not outcome.value.has_provenance_marker


@pytest.mark.asyncio
async def test_header_probe_detects_provenance_marker():
    async with build_async_client(media_transport(body=JPEG_WITH_C2PA)) as client:
        outcome = await HeaderProbe(client).probe(URL)

    assert outcome.value.has_provenance_marker
    assert outcome.value.file_signature == "jpeg"


@pytest.mark.asyncio
async def test_header_probe_truncates_when_range_is_ignored():
    body = PNG_SAMPLE + b"\x00" * 50_000
    async with build_async_client(media_transport(get_status=200, body=body)) as client:
        outcome = await HeaderProbe(client).probe(URL)

    assert outcome.value.bytes_read == SAMPLE_SIZE_BYTES


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, reason",
    [
        (403, FailureReason.CORS_BLOCKED),
        (401, FailureReason.CORS_BLOCKED),
        (407, FailureReason.CORS_BLOCKED),
        (451, FailureReason.CORS_BLOCKED),
        (416, FailureReason.NETWORK_ERROR),
    ],
)
async def test_header_probe_http_errors_fail(status, reason):
    async with build_async_client(media_transport(get_status=status)) as client:
        outcome = await HeaderProbe(client).probe(URL)

    assert not outcome.ok
    assert outcome.reason is reason


@pytest.mark.asyncio
async def test_header_probe_network_error_fails():
    transport = media_transport(get_error=httpx.ConnectTimeout("slow"))
    async with build_async_client(transport) as client:
        outcome = await HeaderProbe(client).probe(URL)

    assert not outcome.ok
    assert outcome.reason is FailureReason.NETWORK_ERROR
    assert "ConnectTimeout" in outcome.detail



@pytest.mark.asyncio
@pytest.mark.parametrize("status", [404, 410, 500])
async def test_header_probe_samples_error_pages(status):
    page = b"<!doctype html><html><body>Not Found</body></html>"
    transport = media_transport(get_status=status, body=page)
    async with build_async_client(transport) as client:
        outcome = await HeaderProbe(client).probe(URL)

    assert outcome.ok
    assert outcome.value.file_signature == "unknown"
    assert not outcome.value.has_provenance_marker
    assert outcome.value.bytes_read == len(page)
