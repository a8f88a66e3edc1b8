"""
mediascan – quick, metadata-only media URL triage.

Entry point:  mediascan.main:app  (FastAPI ASGI application)

Sub-packages:
    monitor     Network probes, URL heuristics, timeout guard, quick scanner
    trust       Fusion engine: scoring and the ScanVerdict model
    db          In-memory verdict cache
    forensic    Verdict explanations and collaborator payloads
"""
