"""
zpool-health: ZFS pool health evaluation for monitoring systems.
"""

__version__ = "0.5.0"
