"""Dialect factory.

Provides :func:`get_driver` -- the single entry point for consumer code.
Dialect names are case-insensitive.  The registry is guarded by a lock and
populated lazily with the built-in dialects on first use.
"""

from __future__ import annotations

import logging
import threading

from ._types import UnknownDialectError
from .bindings import LabelGenerator
from .config import Settings, load_settings
from .driver import Driver

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_registry: dict[str, type[Driver]] = {}
_builtins_loaded = False


def _load_builtins() -> None:
    global _builtins_loaded
    if _builtins_loaded:
        return

    from .dialects.mysql import MySQLDriver
    from .dialects.postgresql import PostgreSQLDriver

    for name in ("postgresql", "postgres", "pgsql"):
        _registry.setdefault(name, PostgreSQLDriver)
    _registry.setdefault("mysql", MySQLDriver)
    _builtins_loaded = True


def register_dialect(name: str, driver_cls: type[Driver]) -> None:
    """Register *driver_cls* under *name*, replacing any existing entry."""
    with _lock:
        _load_builtins()
        _registry[name.lower()] = driver_cls
    logger.debug("Registered dialect %s -> %s", name.lower(), driver_cls.__name__)


def available_dialects() -> list[str]:
    with _lock:
        _load_builtins()
        return sorted(_registry)


def get_driver(
    name: str | None = None,
    *,
    settings: Settings | None = None,
    labels: LabelGenerator | None = None,
) -> Driver:
    """Return a driver for dialect *name*.

    When *name* is omitted the configured ``default_dialect`` is used.
    Indentation, quoting and the label prefix come from *settings* (loaded
    from the environment when not given).

    Raises:
        UnknownDialectError: *name* is not a registered dialect.
    """
    if settings is None:
        settings = load_settings()
    key = (name if name is not None else settings.default_dialect).lower()

    with _lock:
        _load_builtins()
        driver_cls = _registry.get(key)
        if driver_cls is None:
            raise UnknownDialectError(name if name is not None else key, sorted(_registry))

    return driver_cls.from_settings(settings, labels)


def reset_dialects() -> None:
    """Drop custom registrations.  **For testing only.**"""
    global _builtins_loaded
    with _lock:
        _registry.clear()
        _builtins_loaded = False
