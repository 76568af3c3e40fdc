"""
Helpers for callers of the AHP methods.
"""
