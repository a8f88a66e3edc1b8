"""
mediascan.monitor.timeout_guard – per-probe deadlines.

Races a probe against its own deadline.  When the deadline wins, the probe
task is cancelled and whatever it would have returned is discarded.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from mediascan.monitor.signals import Failed, ProbeTimeout, SignalOutcome

T = TypeVar("T")


async def with_deadline(operation: Awaitable[T], timeout_seconds: float) -> T:
    """
    Await *operation*, raising ``ProbeTimeout`` if it outlives the deadline.

    Raises:
        ProbeTimeout  *timeout_seconds* elapsed first.
    """
    try:
        return await asyncio.wait_for(operation, timeout=timeout_seconds)
    except asyncio.TimeoutError as exc:
        raise ProbeTimeout(
            f"no result within {timeout_seconds * 1000:.0f} ms"
        ) from exc


async def guard(
    operation: Awaitable[SignalOutcome[T]],
    timeout_seconds: float,
) -> SignalOutcome[T]:
    """Settle a probe's outcome, or ``Failed(timeout)`` once the deadline elapses."""
    try:
        return await with_deadline(operation, timeout_seconds)
    except ProbeTimeout as exc:
        return Failed.from_error(exc)
