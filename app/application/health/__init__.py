"""
Health bounded context: application layer.

Use cases composing probe results into the three outward views
(deep health, liveness, readiness), and the probe registry they share.
"""
