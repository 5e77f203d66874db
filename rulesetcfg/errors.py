from __future__ import annotations

"""Typed error taxonomy.

Validation failures are not exceptions (the validator returns a bool) and an
unknown stored version is a logged fallback, not an error. What remains here
are the operator-facing failures: storage I/O, host settings and CLI errors.
"""

__all__ = [
    "RulesetConfigError",
    "ConfigError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "CLIError",
    "format_error",
]


class RulesetConfigError(Exception):
    """Base class for all typed, operator-facing errors in rulesetcfg."""
    pass


class ConfigError(RulesetConfigError):
    """Host settings file invalid: unknown keys, wrong types, unreadable YAML."""
    pass


class StorageError(RulesetConfigError):
    """A storage tier failed; carries the tier name and key when known."""

    def __init__(self, message: str, *, tier: str | None = None, key: str | None = None):
        super().__init__(message)
        self.tier = tier
        self.key = key


class StorageReadError(StorageError):
    """Reading a key from a storage tier failed (absent keys are not errors)."""
    pass


class StorageWriteError(StorageError):
    """Writing a key to a storage tier failed."""
    pass


class CLIError(RulesetConfigError):
    """Generic CLI failure wrapper for unexpected errors in CLI code paths."""
    pass


def format_error(e: BaseException) -> str:
    """Return a short, uniform operator-facing message like 'StorageReadError: detail'."""
    name = e.__class__.__name__
    msg = str(e).strip()
    return f"{name}: {msg}" if msg else name


# Keep star-export order deterministic for tests and tooling
__all__ = sorted(__all__)
