"""mediascan.db – in-memory verdict cache."""
from .scan_cache import ScanCache, CACHE_TTL_SECONDS, MAX_CACHE_ENTRIES

__all__ = ["ScanCache", "CACHE_TTL_SECONDS", "MAX_CACHE_ENTRIES"]
