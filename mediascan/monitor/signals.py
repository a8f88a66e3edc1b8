"""
mediascan.monitor.signals – probe outcomes, partial signals, and errors.

Every probe settles into exactly one ``SignalOutcome`` per scan:

    Fulfilled(value)          the probe produced a signal
    Failed(reason, detail)    the probe timed out, hit a network error, or
                              was blocked by server policy

Probe errors are raised *inside* a probe and converted into ``Failed`` at the
probe boundary; they never reach the orchestrator as exceptions.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

FileSignature = Literal["jpeg", "png", "gif", "webp", "mp4", "webm", "unknown"]


# ---------------------------------------------------------------------------
# Error taxonomy
# ---------------------------------------------------------------------------

class FailureReason(str, Enum):
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network-error"
    CORS_BLOCKED = "cors-blocked"


class ScanError(Exception):
    """Base class for every error raised inside the scan core."""


class ProbeError(ScanError):
    reason: FailureReason = FailureReason.NETWORK_ERROR


class ProbeTimeout(ProbeError):
    reason = FailureReason.TIMEOUT


class ProbeNetworkError(ProbeError):
    reason = FailureReason.NETWORK_ERROR


class ProbeBlocked(ProbeError):
    reason = FailureReason.CORS_BLOCKED


class MalformedInput(ScanError):
    """The URL could not be parsed. Only the URL classifier raises this."""


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Fulfilled(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed:
    reason: FailureReason
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_error(cls, exc: ProbeError) -> "Failed":
        return cls(reason=exc.reason, detail=str(exc))


SignalOutcome = Union[Fulfilled[T], Failed]


# ---------------------------------------------------------------------------
# Signals
# ---------------------------------------------------------------------------

class MetadataSignal(BaseModel):
    """Declared size/type read from a header-only request."""
    model_config = ConfigDict(frozen=True)

    declared_size:          int | None = Field(default=None, ge=0)
    declared_mime_type:     str | None = None
    mime_type_is_plausible: bool
    size_is_implausible:    bool
    inferred: bool = Field(
        default=False,
        description="True when the header request failed and the mime type "
                    "was inferred from the URL extension",
    )


class HeaderSignal(BaseModel):
    """Findings from the first bytes of the resource."""
    model_config = ConfigDict(frozen=True)

    has_provenance_marker: bool
    file_signature:        FileSignature = "unknown"
    bytes_read:            int = Field(default=0, ge=0)


class UrlSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_suspicious: bool
    is_uncertain:  bool
    hostname:      str = ""
