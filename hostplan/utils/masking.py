"""Masking helpers for printed plans and traces.

Passwords given on the command line must never reach stdout or a weave trace
in clear text.
"""

from __future__ import annotations

from typing import Any

MASK = "********"


def mask_value(value: str | None) -> str | None:
    """Mask a secret with a fixed-width placeholder.

    The placeholder does not depend on the secret's length.

    Args:
        value: A secret string, or None.

    Returns:
        None when there is no secret, otherwise `MASK`.
    """
    if value is None:
        return None
    return MASK


def mask_passwords(values: list[str] | tuple[str, ...] | None) -> list[str | None]:
    """Mask each entry of a password list, keeping its length."""
    return [mask_value(v) for v in values or []]


def mask_trace_inputs(inputs: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of traced call inputs with the `passwords` argument masked."""
    masked = dict(inputs)
    if "passwords" in masked:
        masked["passwords"] = mask_passwords(masked["passwords"])
    return masked
