"""Errors raised while resolving command-line remotes.

All of them derive from `ValidationError` (itself a `ValueError`) so callers
can report any resolution failure with a single `except` clause.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when the command-line remotes cannot be resolved into a plan."""


class TooManyArguments(ValidationError):
    def __init__(self) -> None:
        super().__init__("Too many arguments")


class BadAddress(ValidationError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Bad address option: {detail}")


class SshHostNotFound(ValidationError):
    def __init__(self, alias: str, config_path: str | None = None) -> None:
        self.alias = alias
        where = config_path or "SSH config"
        super().__init__(f"SSH host '{alias}' not found in {where}")


class SshConfigUnreadable(ValidationError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Could not parse SSH config: {detail}")
