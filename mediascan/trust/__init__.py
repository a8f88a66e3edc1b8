"""mediascan.trust – signal fusion and verdicts."""
from .fusion import ScanSnapshot, ScanVerdict, classify, error_fallback_verdict, fuse

__all__ = ["ScanSnapshot", "ScanVerdict", "classify", "error_fallback_verdict", "fuse"]
