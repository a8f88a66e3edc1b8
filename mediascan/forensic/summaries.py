"""
mediascan.forensic.summaries – payloads handed to external collaborators.

The quick scan does not talk to telemetry or result-forwarding services
itself; these helpers only shape what such a sink receives.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from mediascan.trust.fusion import ScanVerdict

FORWARDING_SOURCE = "mediascan"


def _iso_timestamp(timestamp: datetime | None) -> str:
    moment = timestamp or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat()


def build_telemetry_event(
    verdict: ScanVerdict,
    opted_in: bool,
    timestamp: datetime | None = None,
) -> dict[str, Any] | None:
    """Reduced scan summary, or None when the user has not opted in."""
    if not opted_in:
        return None
    return {
        "event": "scan_completed",
        "data": {
            "classification":        verdict.classification,
            "has_provenance_marker": verdict.metadata.has_provenance_marker,
            "timestamp":             _iso_timestamp(timestamp),
        },
    }


def build_forwarding_payload(
    verdict: ScanVerdict,
    timestamp: datetime | None = None,
) -> dict[str, Any]:
    """Full verdict plus timestamp, for a caller-supplied result endpoint."""
    return {
        "timestamp": _iso_timestamp(timestamp),
        "result":    verdict.model_dump(mode="json"),
        "source":    FORWARDING_SOURCE,
    }
