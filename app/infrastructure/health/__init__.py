"""
Infrastructure adapters for the health bounded context.

Concrete dependency probes and the psutil-backed process metrics.
"""
