"""API Schemas — Pydantic models for request payloads and response bodies.

Invariants:
    - Request payload fields are all optional: presence is enforced by
      core/enforce_payloads.py so missing fields get the contract messages
    - Response models never expose password digests
"""
