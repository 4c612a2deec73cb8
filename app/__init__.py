"""
Box Registration Server.

Tracks ephemeral box registrations (public IP, tunnel fingerprint,
tunnel flag, timestamp) and serves them back to boxes sharing a
public address.

Layers:
    - domain: Records, filters, errors, the record store port.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: SQLAlchemy record store adapter.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
