"""
Infrastructure adapters for the storage bounded context.

Implements the StorageConnection port on top of a pooled SQLAlchemy engine
talking to PostgreSQL/TimescaleDB through psycopg2.
"""
