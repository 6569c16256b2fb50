"""
Health bounded context: domain layer.

Contains the probe contract and the snapshots built from probe results:
- ProbeResult: one dependency check, fresh on every call
- HealthSnapshot: deep health for humans and dashboards
- ReadinessSnapshot: boolean view for traffic admission
- LivenessSnapshot: process-alive signal, independent of dependencies
"""
