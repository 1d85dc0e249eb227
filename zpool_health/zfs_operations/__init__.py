"""ZFS pool health evaluation"""
