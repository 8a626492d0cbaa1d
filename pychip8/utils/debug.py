"""Category based debug logging for the CHIP-8 interpreter.

``CHIP8_DEBUG`` holds a comma separated list of categories (``cpu``,
``input``, ``timer``, ``loader``, ``trace``) or ``all``. Enabled messages
are printed to stdout as ``[CHIP8][category] message``.
"""

from __future__ import annotations

import os

ENV_VAR = "CHIP8_DEBUG"
CATEGORIES = frozenset({"cpu", "input", "timer", "loader", "trace"})
WILDCARD = "all"

_enabled: frozenset[str] | None = None


def parse_categories(value: str) -> frozenset[str]:
    """Split an environment value into lower-case category names.

    ``all`` expands to every known category and stays in the result so
    that categories added later are covered too.
    """

    names = {part.strip().lower() for part in value.split(",")}
    names.discard("")
    if WILDCARD in names:
        names |= CATEGORIES
    return frozenset(names)


def reload_categories() -> frozenset[str]:
    """Re-read ``CHIP8_DEBUG`` from the environment."""

    global _enabled
    _enabled = parse_categories(os.environ.get(ENV_VAR, ""))
    return _enabled


def enabled_categories() -> frozenset[str]:
    if _enabled is None:
        return reload_categories()
    return _enabled


def debug_enabled(category: str | None = None) -> bool:
    """Return True if ``category`` is enabled, or any category when None."""

    enabled = enabled_categories()
    if category is None:
        return bool(enabled)
    return WILDCARD in enabled or category.lower() in enabled


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"[CHIP8][{category}] {message}")
