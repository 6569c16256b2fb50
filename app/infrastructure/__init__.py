"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer. This is where the database engine,
the Redis client and process telemetry live.
"""
