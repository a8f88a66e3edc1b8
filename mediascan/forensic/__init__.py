"""mediascan.forensic – verdict explanations and collaborator payloads."""
from .explainability import explain_verdict
from .summaries import build_forwarding_payload, build_telemetry_event

__all__ = ["explain_verdict", "build_forwarding_payload", "build_telemetry_event"]
