"""mediascan.monitor – quick-scan probes.

The orchestrator lives in ``mediascan.monitor.quick_scanner`` and is imported
from there directly (it depends on ``mediascan.trust``).
"""
from .header_probe import HeaderProbe
from .metadata_probe import MetadataProbe
from .signals import (
    Failed,
    FailureReason,
    Fulfilled,
    HeaderSignal,
    MalformedInput,
    MetadataSignal,
    ProbeBlocked,
    ProbeError,
    ProbeNetworkError,
    ProbeTimeout,
    ScanError,
    SignalOutcome,
    UrlSignal,
)
from .signatures import detect_file_signature, has_provenance_marker
from .timeout_guard import guard, with_deadline
from .url_heuristics import analyze_url, infer_mime_type

__all__ = [
    "Failed",
    "FailureReason",
    "Fulfilled",
    "HeaderProbe",
    "HeaderSignal",
    "MalformedInput",
    "MetadataProbe",
    "MetadataSignal",
    "ProbeBlocked",
    "ProbeError",
    "ProbeNetworkError",
    "ProbeTimeout",
    "ScanError",
    "SignalOutcome",
    "UrlSignal",
    "analyze_url",
    "detect_file_signature",
    "guard",
    "has_provenance_marker",
    "infer_mime_type",
    "with_deadline",
]
