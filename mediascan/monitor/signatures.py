"""
mediascan.monitor.signatures – binary signature matching.

Looks for file-type magic numbers at the start of a sample buffer and for
content-provenance markers anywhere inside it.  Buffers are capped at a few
kilobytes, so a plain sub-sequence search is fine.
"""
from __future__ import annotations

from mediascan.monitor.signals import FileSignature

SIGNATURE_PREFIX_BYTES = 8

# Checked in order against the hex-encoded first 8 bytes.
_PREFIX_SIGNATURES: tuple[tuple[str, FileSignature], ...] = (
    ("ffd8ff",   "jpeg"),
    ("89504e47", "png"),
    ("47494638", "gif"),
    ("52494646", "webp"),      # RIFF container
)
_MP4_FTYP = "66747970"         # "ftyp" box, matched anywhere in the prefix
_WEBM_PREFIX = "1a45dfa3"      # EBML header

PROVENANCE_MARKERS: tuple[bytes, ...] = (
    b"\xFF\xE2",               # JPEG APP2 segment
    b"C2PA",
    b"c2pa",
)


def contains_bytes(haystack: bytes | bytearray, needle: bytes) -> bool:
    """Return True if *needle* occurs anywhere in *haystack*."""
    return bytes(needle) in bytes(haystack)


def detect_file_signature(buffer: bytes | bytearray) -> FileSignature:
    """
    Identify the container format from the first 8 bytes of *buffer*.

    Buffers shorter than 8 bytes are always ``"unknown"``.
    """
    if len(buffer) < SIGNATURE_PREFIX_BYTES:
        return "unknown"

    header = bytes(buffer[:SIGNATURE_PREFIX_BYTES]).hex()

    for prefix, signature in _PREFIX_SIGNATURES:
        if header.startswith(prefix):
            return signature
    if _MP4_FTYP in header:
        return "mp4"
    if header.startswith(_WEBM_PREFIX):
        return "webm"
    return "unknown"


def has_provenance_marker(buffer: bytes | bytearray) -> bool:
    return any(contains_bytes(buffer, marker) for marker in PROVENANCE_MARKERS)
