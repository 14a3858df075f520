"""
⚠️ DRAFT — requires crypto review before production use

Security utilities for commitment operations.

This is a PROTOTYPE implementation for testing and validation.
DO NOT use in production without security audit.
"""

import os
import secrets
import hmac

from .exceptions import EncodingError, RandomnessError


# ============================================================================
# RANDOMNESS SOURCE (Fork-Safe)
# ============================================================================


class RandomnessSource:
    """
    Cryptographically secure randomness with fork detection.

    Prevents catastrophic randomness reuse if process forks.

    Example:
        >>> rng = RandomnessSource()
        >>> r = rng.get_random_in_range(1, 2**64)
        >>> # After fork, RNG automatically reinitializes
    """

    def __init__(self):
        """Initialize randomness source with fork detection."""
        self._pid = os.getpid()
        self._rng = secrets.SystemRandom()

    def _check_fork(self):
        if os.getpid() != self._pid:
            self.__init__()

    def get_random_in_range(self, low: int, high: int) -> int:
        """
        Get random integer uniformly from the half-open range [low, high).

        Args:
            low: Lower bound (inclusive)
            high: Upper bound (exclusive, must exceed low)

        Returns:
            Random integer in [low, high)

        Raises:
            ValueError: If the range is empty
            RandomnessError: If the OS random source is unavailable
        """
        if high <= low:
            raise ValueError(f"Empty range [{low}, {high})")

        self._check_fork()
        try:
            return self._rng.randrange(low, high)
        except (OSError, NotImplementedError) as e:
            raise RandomnessError(
                f"Secure random source unavailable: {e}"
            ) from e


# ============================================================================
# ENCODING
# ============================================================================


def int_to_fixed_bytes(value: int, length: int) -> bytes:
    """
    Encode a non-negative integer as big-endian bytes of a fixed length.

    Fixed width keeps the constant-time comparison independent of the
    magnitude of either operand.

    Raises:
        EncodingError: If value is negative or does not fit in length bytes
    """
    try:
        return value.to_bytes(length, byteorder="big")
    except OverflowError as e:
        raise EncodingError(
            f"Cannot encode {value} in {length} bytes"
        ) from e


# ============================================================================
# CONSTANT-TIME OPERATIONS
# ============================================================================


def constant_time_compare(a: bytes, b: bytes) -> bool:
    """
    Constant-time comparison to prevent timing attacks.

    Uses hmac.compare_digest which is designed to prevent timing attacks
    by taking constant time regardless of the input values.

    Args:
        a: First byte string
        b: Second byte string

    Returns:
        True if a == b, False otherwise
    """
    return hmac.compare_digest(a, b)
