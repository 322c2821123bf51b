"""Offset geometry helpers.

This package holds the path primitives, the mitered offset algorithm, the
per-variant adapters and the projection helpers that convert real-world
meters into working-projection units.
"""
