"""
Application layer package.

Use cases behind the health routes and the probe registry they share.
Each use case is a class with a single execute() method and depends on
domain ports only: StorageConnection, DependencyProbe, ProcessMetricsPort.
"""
