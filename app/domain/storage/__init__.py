"""
Storage bounded context: domain layer.

Describes the lifecycle of the primary data store connection:
- Connection states and their transitions
- Idempotent bootstrap steps (TimescaleDB extension, hypertable)
- Errors raised when the store cannot be reached
"""
