"""
mediascan.main – FastAPI application entry point.

Initialises singleton service instances and registers the quick-scan routes.

Start the server:
    uvicorn mediascan.main:app --reload --port 8000
"""
from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from mediascan.db.scan_cache import ScanCache
from mediascan.forensic.explainability import explain_verdict
from mediascan.monitor.quick_scanner import QuickScanner
from mediascan.trust.fusion import Classification, ScanSnapshot, ScanVerdict

logging.basicConfig(
    level=os.getenv("MEDIASCAN_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

MAX_BATCH_URLS = 50

# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="MediaScan – Quick Media Triage API",
    version="1.0.0",
    description=(
        "First-pass safe / warning / danger verdicts for remote image and "
        "video URLs, computed from headers and the first bytes only."
    ),
)

# ---------------------------------------------------------------------------
# Singleton service instances
# ---------------------------------------------------------------------------

scanner    = QuickScanner()
scan_cache = ScanCache()

# ---------------------------------------------------------------------------
# Pydantic request / response models
# ---------------------------------------------------------------------------

class QuickScanRequest(BaseModel):
    url: str = Field(default="", description="Absolute image or video URL")

    def normalized_url(self) -> str:
        candidate = self.url.strip()
        if not candidate:
            raise ValueError("url is required")
        return candidate


class QuickScanBatchRequest(BaseModel):
    urls: list[str] = Field(
        min_length=1,
        max_length=MAX_BATCH_URLS,
        description="Image or video URLs, scanned in input order",
    )


class QuickScanResponse(BaseModel):
    classification:       Classification
    confidence:           float
    elapsed_ms:           float
    contributing_signals: list[str]
    metadata:             ScanSnapshot
    explanation:          list[str]
    cached:               bool = False


class QuickScanBatchResponse(BaseModel):
    results: list[QuickScanResponse]


def _to_response(verdict: ScanVerdict, cached: bool) -> QuickScanResponse:
    return QuickScanResponse(
        classification=verdict.classification,
        confidence=verdict.confidence,
        elapsed_ms=verdict.elapsed_ms,
        contributing_signals=verdict.contributing_signals,
        metadata=verdict.metadata,
        explanation=explain_verdict(verdict),
        cached=cached,
    )


def _normalize_batch(urls: list[str]) -> list[str]:
    cleaned = [u.strip() for u in urls]
    if any(not u for u in cleaned):
        raise HTTPException(status_code=422, detail="urls must not contain empty entries")
    return cleaned


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get("/api/health")
async def health() -> dict[str, str]:
    """Liveness probe: returns {"status": "ok"} when the server is up."""
    return {"status": "ok"}


@app.post("/api/quick-scan", response_model=QuickScanResponse)
async def quick_scan(payload: QuickScanRequest) -> QuickScanResponse:
    """Classify a remote media URL without downloading the file."""
    try:
        url = payload.normalized_url()
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    cached = await scan_cache.get(url)
    if cached is not None:
        logger.debug("Cache hit for %s", url)
        return _to_response(cached, cached=True)

    verdict = await scanner.scan(url)
    await scan_cache.put(url, verdict)
    return _to_response(verdict, cached=False)


@app.post("/api/quick-scan/batch", response_model=QuickScanBatchResponse)
async def quick_scan_batch(payload: QuickScanBatchRequest) -> QuickScanBatchResponse:
    """
    Classify several URLs; at most three scans run at once.

    Results are returned in the same order as the request's ``urls``.
    """
    urls = _normalize_batch(payload.urls)

    hits: dict[str, ScanVerdict] = {}
    for url in urls:
        verdict = await scan_cache.get(url)
        if verdict is not None:
            hits[url] = verdict

    misses = list(dict.fromkeys(u for u in urls if u not in hits))
    fresh = dict(zip(misses, await scanner.scan_many(misses)))
    for url, verdict in fresh.items():
        await scan_cache.put(url, verdict)

    return QuickScanBatchResponse(
        results=[
            _to_response(hits[u], cached=True) if u in hits
            else _to_response(fresh[u], cached=False)
            for u in urls
        ]
    )
