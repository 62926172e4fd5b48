"""Verification, resolution, and platform primitives."""
