from __future__ import annotations

"""singleton.py
Base class for services that should exist once per process.

Subclasses keep their own ``_instance`` slot (so two different services never
share one) and must guard ``__init__`` against running twice.  Tests call
:meth:`Singleton.reset_instance` to start from a clean object.
"""

from typing import Any


class Singleton:  # noqa: D101
    _instance: Singleton | None = None

    def __new__(cls, *args: Any, **kwargs: Any):
        if cls.__dict__.get("_instance") is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the cached instance; the next call builds a fresh one."""
        cls._instance = None
