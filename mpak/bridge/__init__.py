"""Boundary wrappers around third-party I/O libraries."""
