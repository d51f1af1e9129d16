from __future__ import annotations

import math

TRUE_VALUES = {"true", "1", "yes", "on", "enabled"}
FALSE_VALUES = {"false", "0", "no", "off", "disabled"}


def parse_bool(value: str | None, default: bool) -> bool:
    """
    Interpret an environment value as a boolean.

    Unset or blank values, and values outside TRUE_VALUES/FALSE_VALUES,
    fall back to ``default``.
    """
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return default


def parse_positive_float(value: str | None, default: float) -> float:
    """Parse a strictly positive number, raising ValueError on junk."""
    if value is None or not value.strip():
        return default
    parsed = float(value.strip())
    if not 0 < parsed < math.inf:
        raise ValueError(f"expected a positive number, got {value!r}")
    return parsed
