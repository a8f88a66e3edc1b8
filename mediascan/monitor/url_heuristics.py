"""
mediascan.monitor.url_heuristics – instant URL pattern analysis.

Pure string inspection of a media URL: no I/O, never raises.  Produces the
one signal the quick scan can always count on, plus the extension-based mime
lookup the metadata probe falls back to when header requests are refused.
"""
from __future__ import annotations

import logging
from urllib.parse import urlparse

from mediascan.monitor.signals import Fulfilled, MalformedInput, UrlSignal

logger = logging.getLogger(__name__)

# Throwaway, generated, or shortened content
SUSPICIOUS_PATTERNS: tuple[str, ...] = (
    "temp", "tmp", "random", "fake", "generated", "ai-", "synthetic",
    "bit.ly", "tinyurl", "tempimg", "fakeimg",
)

# Stock-photo, placeholder and generic CDN hosts
UNCERTAIN_PATTERNS: tuple[str, ...] = (
    "unsplash", "picsum", "placeholder", "via.placeholder",
    "amazonaws.com/temp", "cloudinary",
)

MIME_BY_EXTENSION: dict[str, str] = {
    "jpg":  "image/jpeg",
    "jpeg": "image/jpeg",
    "png":  "image/png",
    "gif":  "image/gif",
    "webp": "image/webp",
    "mp4":  "video/mp4",
    "webm": "video/webm",
    "mov":  "video/quicktime",
    "avi":  "video/x-msvideo",
}


def parse_hostname(url: str) -> str:
    """
    Return the lower-cased hostname of *url*.

    Raises:
        MalformedInput  The URL cannot be parsed.
    """
    try:
        hostname = urlparse(url).hostname
    except (ValueError, TypeError, AttributeError) as exc:
        raise MalformedInput(f"cannot parse URL {url!r}: {exc}") from exc
    return (hostname or "").lower()


def extract_hostname(url: str) -> str:
    """Like :func:`parse_hostname`, but returns ``""`` for malformed URLs."""
    try:
        return parse_hostname(url)
    except MalformedInput as exc:
        logger.debug("Hostname extraction failed: %s", exc)
        return ""


def analyze_url(url: str) -> UrlSignal:
    """
    Flag URLs matching the suspicious and uncertain pattern lists.

    Both lists are checked independently against the lower-cased URL and
    its hostname.
    """
    lowered = url.lower() if isinstance(url, str) else ""
    hostname = extract_hostname(url)

    def _matches(patterns: tuple[str, ...]) -> bool:
        return any(p in lowered or p in hostname for p in patterns)

    return UrlSignal(
        is_suspicious=_matches(SUSPICIOUS_PATTERNS),
        is_uncertain=_matches(UNCERTAIN_PATTERNS),
        hostname=hostname,
    )


def evaluate_url(url: str) -> Fulfilled[UrlSignal]:
    """URL analysis wrapped as an always-fulfilled outcome."""
    return Fulfilled(analyze_url(url))


def infer_mime_type(url: str) -> str | None:
    """Best-effort mime type from the extension of the URL path."""
    try:
        path = urlparse(url.lower()).path
    except (ValueError, AttributeError):
        return None

    last_segment = path.rsplit("/", 1)[-1]
    if "." not in last_segment:
        return None
    return MIME_BY_EXTENSION.get(last_segment.rsplit(".", 1)[-1])
