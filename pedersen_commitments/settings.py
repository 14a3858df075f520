"""
Runtime settings for parameter generation.

Values resolve in precedence order: explicit argument, in-memory override,
environment variable, then the configured default.
"""

from __future__ import annotations

import os
from typing import Final

from .config import (
    DEFAULT_SECURITY_BITS,
    ENV_MAX_PRIME_ATTEMPTS,
    ENV_SECURITY_BITS,
    MAX_SAFE_PRIME_ATTEMPTS,
    MAX_SECURITY_BITS,
    MIN_SECURITY_BITS,
)
from .exceptions import ConfigurationError

_MAX_ATTEMPTS_CEILING: Final[int] = 10_000

_security_override: int | None = None
_attempts_override: int | None = None


def _normalize_int(value: object, name: str, low: int, high: int) -> int | None:
    if value is None:
        return None

    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
        try:
            value = int(value, 10)
        except ValueError:
            raise ConfigurationError(
                f"Invalid {name}: {value!r}. Expected an integer in [{low}, {high}]"
            ) from None

    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"Invalid {name}: {value!r}. Expected an integer in [{low}, {high}]"
        )

    if not low <= value <= high:
        raise ConfigurationError(
            f"Invalid {name}: {value}. Expected an integer in [{low}, {high}]"
        )

    return value


def _normalize_security(value: object) -> int | None:
    return _normalize_int(
        value, "security bits", MIN_SECURITY_BITS, MAX_SECURITY_BITS
    )


def _normalize_attempts(value: object) -> int | None:
    return _normalize_int(value, "max attempts", 1, _MAX_ATTEMPTS_CEILING)


def get_security_bits(prefer: int | str | None = None) -> int:
    """
    Resolve the security parameter.

    Args:
        prefer: Optional explicit value.

    Returns:
        Security parameter in bits.

    Raises:
        ConfigurationError: If a provided value is invalid.
    """
    preferred = _normalize_security(prefer)
    if preferred is not None:
        return preferred

    if _security_override is not None:
        return _security_override

    env_bits = _normalize_security(os.getenv(ENV_SECURITY_BITS))
    if env_bits is not None:
        return env_bits

    return DEFAULT_SECURITY_BITS


def set_security_bits(value: int | str | None) -> None:
    """
    Set in-memory security override (testing only).

    Args:
        value: Security bits to force, or None to clear the override.

    Raises:
        ConfigurationError: If the value is invalid.
    """
    global _security_override
    _security_override = _normalize_security(value)


def get_max_attempts(prefer: int | str | None = None) -> int:
    """Resolve the safe-prime retry budget (same precedence as security bits)."""
    preferred = _normalize_attempts(prefer)
    if preferred is not None:
        return preferred

    if _attempts_override is not None:
        return _attempts_override

    env_attempts = _normalize_attempts(os.getenv(ENV_MAX_PRIME_ATTEMPTS))
    if env_attempts is not None:
        return env_attempts

    return MAX_SAFE_PRIME_ATTEMPTS


def set_max_attempts(value: int | str | None) -> None:
    """Set in-memory retry budget override (testing only)."""
    global _attempts_override
    _attempts_override = _normalize_attempts(value)
