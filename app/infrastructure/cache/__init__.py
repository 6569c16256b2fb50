"""
Cache and pub/sub infrastructure.

Redis is the secondary dependency reported by the health views.
"""
