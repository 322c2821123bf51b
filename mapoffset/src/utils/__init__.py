"""Utility helpers (logging, singletons)."""
