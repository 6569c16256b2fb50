"""
Geass trading-data service.

Application package root. A modular monolith using hexagonal
architecture (ports & adapters).

Bounded contexts:
    - storage: Database connection lifecycle and TimescaleDB bootstrap.
    - health: Dependency probes and the health, liveness and readiness views.

Layers:
    - domain: Entities, ports (ABCs), errors.
    - application: Use cases and the probe registry.
    - infrastructure: Adapters (SQLAlchemy, Redis, psutil) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas, dependency wiring.
    - shared: Cross-cutting concerns (errors, logging).
"""
