"""Core computational modules (geometry, errors) with no UI or file I/O."""
