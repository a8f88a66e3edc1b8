"""
mediascan.trust.fusion – combine settled probe outcomes into one verdict.

Scoring (only fulfilled outcomes count):

    metadata   checks += 2   +30 implausible mime type, +20 implausible size
    headers    checks += 1   -20 provenance marker present, else +10
    url        checks += 1   +40 suspicious, else +20 uncertain

    ratio = score / (checks * 40)      (0.5 when nothing was fulfilled)

    ratio >  0.6   danger   confidence = min(0.95, 0.7 + (ratio - 0.6) * 0.625)
    ratio >  0.3   warning  confidence = min(0.85, 0.5 + (ratio - 0.3) * 0.833)
    otherwise      safe     confidence = max(0.6,  0.9 - ratio * 1.5)

The safe-branch confidence has no upper clamp: a provenance marker can push
the ratio below zero and the confidence above 0.9 (or 1.0).  Consumers rely
on the literal scale, so the arithmetic is kept as is.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from mediascan.monitor.signals import (
    HeaderSignal,
    MetadataSignal,
    SignalOutcome,
    UrlSignal,
)
from mediascan.monitor.url_heuristics import extract_hostname

Classification = Literal["safe", "warning", "danger"]

SIGNAL_METADATA = "metadata"
SIGNAL_HEADERS = "headers"
SIGNAL_URL = "url-analysis"
SIGNAL_ERROR_FALLBACK = "error-fallback"

MAX_POINTS_PER_CHECK = 40
UNDETERMINED_RATIO = 0.5
ERROR_FALLBACK_CONFIDENCE = 0.3


# ---------------------------------------------------------------------------
# Verdict model
# ---------------------------------------------------------------------------

class ScanSnapshot(BaseModel):
    """Best-effort view of whatever sub-signals resolved."""
    model_config = ConfigDict(frozen=True)

    url:                   str
    hostname:              str = ""
    declared_size:         int | None = None
    mime_type:             str | None = None
    has_provenance_marker: bool = False
    file_signature:        str | None = None


class ScanVerdict(BaseModel):
    """Result of one quick scan.  Produced once, never mutated."""
    model_config = ConfigDict(frozen=True)

    classification:       Classification
    confidence:           float = Field(ge=0.0)
    elapsed_ms:           float = Field(ge=0.0)
    contributing_signals: tuple[str, ...]
    metadata:             ScanSnapshot

    @property
    def is_error_fallback(self) -> bool:
        return self.contributing_signals == (SIGNAL_ERROR_FALLBACK,)


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def score_outcomes(
    metadata: SignalOutcome[MetadataSignal],
    headers: SignalOutcome[HeaderSignal],
    url_analysis: SignalOutcome[UrlSignal],
) -> tuple[int, int, list[str]]:
    """
    Return ``(suspicion_score, total_checks, contributing_signals)``.

    Failed outcomes add neither points nor checks.
    """
    score = 0
    checks = 0
    contributing: list[str] = []

    if metadata.ok:
        contributing.append(SIGNAL_METADATA)
        meta = metadata.value
        if not meta.mime_type_is_plausible:
            score += 30
        if meta.size_is_implausible:
            score += 20
        checks += 2

    if headers.ok:
        contributing.append(SIGNAL_HEADERS)
        if headers.value.has_provenance_marker:
            score -= 20
        else:
            score += 10
        checks += 1

    if url_analysis.ok:
        contributing.append(SIGNAL_URL)
        if url_analysis.value.is_suspicious:
            score += 40
        elif url_analysis.value.is_uncertain:
            score += 20
        checks += 1

    return score, checks, contributing


def suspicion_ratio(score: int, checks: int) -> float:
    if checks <= 0:
        return UNDETERMINED_RATIO
    return score / (checks * MAX_POINTS_PER_CHECK)


def classify(ratio: float) -> tuple[Classification, float]:
    """Map a suspicion ratio to ``(classification, confidence)``."""
    if ratio > 0.6:
        return "danger", min(0.95, 0.7 + (ratio - 0.6) * 0.625)
    if ratio > 0.3:
        return "warning", min(0.85, 0.5 + (ratio - 0.3) * 0.833)
    return "safe", max(0.6, 0.9 - ratio * 1.5)


def fuse(
    metadata: SignalOutcome[MetadataSignal],
    headers: SignalOutcome[HeaderSignal],
    url_analysis: SignalOutcome[UrlSignal],
    *,
    url: str,
    elapsed_ms: float,
) -> ScanVerdict:
    """Build the verdict for one scan from its three settled outcomes."""
    score, checks, contributing = score_outcomes(metadata, headers, url_analysis)
    classification, confidence = classify(suspicion_ratio(score, checks))

    return ScanVerdict(
        classification=classification,
        confidence=confidence,
        elapsed_ms=elapsed_ms,
        contributing_signals=tuple(contributing),
        metadata=ScanSnapshot(
            url=url,
            hostname=(
                url_analysis.value.hostname if url_analysis.ok
                else extract_hostname(url)
            ),
            declared_size=metadata.value.declared_size if metadata.ok else None,
            mime_type=metadata.value.declared_mime_type if metadata.ok else None,
            has_provenance_marker=(
                headers.value.has_provenance_marker if headers.ok else False
            ),
            file_signature=headers.value.file_signature if headers.ok else None,
        ),
    )


def error_fallback_verdict(url: str, elapsed_ms: float) -> ScanVerdict:
    """Fixed degraded verdict for a scan that hit an unexpected internal fault."""
    return ScanVerdict(
        classification="warning",
        confidence=ERROR_FALLBACK_CONFIDENCE,
        elapsed_ms=elapsed_ms,
        contributing_signals=(SIGNAL_ERROR_FALLBACK,),
        metadata=ScanSnapshot(url=url, hostname=extract_hostname(url)),
    )
