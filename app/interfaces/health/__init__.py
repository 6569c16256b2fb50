"""
Health interface: /health, /health/live and /health/ready.
"""
