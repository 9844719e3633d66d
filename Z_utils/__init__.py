"""
Z_utils: Utility functions and helpers.

Provides:
- Z01: Geometry helpers (NaN-safe comparison, row-major sorting, box gaps)
"""
