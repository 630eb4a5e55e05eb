"""Environment variable parsing shared by configuration objects."""

from __future__ import annotations

import math
import os


def read_str(env_var: str, default: str | None = None) -> str | None:
    """Return a stripped env var value, or ``default`` when unset or blank."""
    raw = os.environ.get(env_var, "").strip()
    return raw or default


def parse_positive_int(env_var: str, default: int) -> int:
    """Read a positive integer env var, falling back to a default."""
    raw = os.environ.get(env_var, "")
    if not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        msg = f"{env_var} must be an integer, got: {raw!r}"
        raise ValueError(msg) from exc
    if value < 1:
        msg = f"{env_var} must be positive, got: {value}"
        raise ValueError(msg)
    return value


def parse_non_negative_float(env_var: str, default: float) -> float:
    """Read a non-negative float env var, falling back to a default."""
    raw = os.environ.get(env_var, "")
    if not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        msg = f"{env_var} must be a number, got: {raw!r}"
        raise ValueError(msg) from exc
    if not math.isfinite(value):
        msg = f"{env_var} must be a finite number, got: {raw!r}"
        raise ValueError(msg)
    if value < 0:
        msg = f"{env_var} must not be negative, got: {value}"
        raise ValueError(msg)
    return value
