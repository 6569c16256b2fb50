"""
Domain layer package.

Entities, enums and port interfaces for the storage and health contexts.
Nothing here imports FastAPI, SQLAlchemy or redis; adapters implement
the ports in the infrastructure layer.
"""
