"""HTTP API for pool health evaluation"""
