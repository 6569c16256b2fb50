"""
Storage bounded context: application layer.

Use cases reading metadata from the primary data store.
"""
