"""
mediascan.monitor.http – shared httpx client setup for the network probes.

Both probes go through the same client builder so that headers, redirects
and connection limits behave identically, and map refusals onto the
probe error taxonomy in the same way.
"""
from __future__ import annotations

import httpx

from mediascan.monitor.signals import ProbeBlocked, ProbeError, ProbeNetworkError

CONNECT_TIMEOUT_SECONDS = 5.0
USER_AGENT = "MediaScanQuickProbe/0.1"

# Statuses that mean "the server refused to let us read this"
_BLOCKED_STATUSES = {401, 403, 407, 451}
_RANGE_NOT_SATISFIABLE = 416


def build_async_client(
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Create an ``httpx.AsyncClient`` for a single scan.

    Per-probe deadlines are enforced by the timeout guard; the client-level
    timeout only bounds connection setup for callers that skip the guard.
    """
    limits = httpx.Limits(max_keepalive_connections=10, max_connections=20)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(CONNECT_TIMEOUT_SECONDS),
        follow_redirects=True,
        limits=limits,
        headers={"User-Agent": USER_AGENT},
        transport=transport,
    )


def raise_for_refusal(response: httpx.Response) -> None:
    """
    Raise ``ProbeBlocked`` when the server refused access to the resource.

    Other error statuses are left to the caller: a 404 or 500 reply still
    carries headers and a body that describe what the URL actually serves.
    """
    status = response.status_code
    if status in _BLOCKED_STATUSES:
        raise ProbeBlocked(f"server refused access (HTTP {status})")


def raise_for_range_status(response: httpx.Response) -> None:
    """
    Raise a probe error when a ranged GET produced nothing worth sampling.

    Raises:
        ProbeBlocked       401/403/407/451 – server policy prevented access.
        ProbeNetworkError  416 – the server cannot serve the requested range.
    """
    raise_for_refusal(response)
    if response.status_code == _RANGE_NOT_SATISFIABLE:
        raise ProbeNetworkError("range not satisfiable (HTTP 416)")


def to_probe_error(exc: httpx.HTTPError | httpx.InvalidURL) -> ProbeError:
    """Wrap an httpx transport, protocol or URL error as a network probe error."""
    return ProbeNetworkError(f"{type(exc).__name__}: {exc}")
