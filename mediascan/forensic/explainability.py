"""
mediascan.forensic.explainability – plain-language verdict explanation.

Turns a ScanVerdict into ordered, human-readable lines for display next to
the classification.  Wording stays probabilistic: a quick scan inspects
headers and a few kilobytes, never the decoded media.
"""
from __future__ import annotations

from mediascan.trust.fusion import (
    SIGNAL_HEADERS,
    SIGNAL_METADATA,
    SIGNAL_URL,
    ScanVerdict,
)

_ERROR_FALLBACK_EXPLANATION = [
    "The quick scan could not complete its checks; no signal contributed.",
    "Treat this result as undetermined and run a full analysis if needed.",
]

_SIGNAL_LABELS = {
    SIGNAL_METADATA: "header metadata",
    SIGNAL_HEADERS:  "file signature",
    SIGNAL_URL:      "URL pattern analysis",
}


def explain_verdict(verdict: ScanVerdict) -> list[str]:
    """
    Build the explanation list for *verdict*.

    Args:
        verdict  Completed quick-scan verdict.

    Returns:
        One line per contributing signal, a line for missing signals, and a
        closing summary line.
    """
    if verdict.is_error_fallback:
        return list(_ERROR_FALLBACK_EXPLANATION)

    snapshot = verdict.metadata
    signals = verdict.contributing_signals
    lines: list[str] = []

    if SIGNAL_METADATA in signals:
        if snapshot.mime_type:
            lines.append(f"Declared content type: {snapshot.mime_type}.")
        else:
            lines.append("No media content type was declared or inferable.")
        if snapshot.declared_size is not None:
            lines.append(f"Declared size: {snapshot.declared_size:,} bytes.")

    if SIGNAL_HEADERS in signals:
        if snapshot.file_signature and snapshot.file_signature != "unknown":
            lines.append(f"File signature matches {snapshot.file_signature.upper()}.")
        else:
            lines.append("File signature was not recognised.")
        if snapshot.has_provenance_marker:
            lines.append(
                "A content-provenance marker is present; embedded authenticity "
                "metadata may be available (not verified)."
            )
        else:
            lines.append("No content-provenance marker found in the first bytes.")

    if SIGNAL_URL in signals:
        lines.append(f"URL host analysed: {snapshot.hostname or 'unknown host'}.")

    missing = [label for name, label in _SIGNAL_LABELS.items() if name not in signals]
    if missing:
        lines.append(
            "Not available for this scan: " + ", ".join(missing)
            + "; confidence reflects incomplete evidence."
        )

    lines.append(
        f"Quick-scan classification: {verdict.classification.upper()} "
        f"(confidence {verdict.confidence:.2f})."
    )
    return lines
