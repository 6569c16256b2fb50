"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that storage and health errors
are consistently translated into API responses.
"""
