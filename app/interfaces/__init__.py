"""
Interfaces layer package.

HTTP surface of the service: the health router, its Pydantic response
schemas and the composition root that wires adapters into use cases.
Routes translate snapshots into responses and status codes only.
"""
