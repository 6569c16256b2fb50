"""
Core package.

Holds application settings loaded from the environment.
"""
