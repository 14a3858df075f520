"""
⚠️ DRAFT — requires crypto review before production use

Group parameter generation for Pedersen commitments.

This is a PROTOTYPE implementation for testing and validation.
DO NOT use in production without security audit.

Group Description:
    p: prime of 2 * security bits
    q = 2p + 1: safe prime, modulus for all commitment arithmetic
    g: uniform in [1, p-1], g != 1
    h = g^alpha mod p for a one-time secret alpha in [1, p-1], h != 1

Security Requirements:
    1. alpha (the discrete log relation between g and h) must be
       discarded immediately; anyone holding it can break binding
    2. q must be prime, not merely 2p + 1 for an arbitrary prime p
    3. g and h sampled with a cryptographically secure source
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional, Sequence, Union

from . import arithmetic
from .config import MAX_GENERATOR_ATTEMPTS
from .exceptions import (
    EncodingError,
    GenerationExhausted,
    PrimalityError,
)
from .security import RandomnessSource
from .settings import get_max_attempts, get_security_bits

if TYPE_CHECKING:
    from .commitments import Commitment, CommitmentEngine

logger = logging.getLogger(__name__)


# ============================================================================
# PARAMETERS
# ============================================================================


@dataclass(frozen=True)
class GroupParameters:
    """
    Public group description for Pedersen commitments.

    Attributes:
        p: Base prime (2 * security_bits bits)
        q: Safe prime 2p + 1, modulus for commit/open/add
        g: First generator
        h: Second generator, discrete log base g unknown
        security_bits: Security parameter the group was generated for

    The commit/open/add methods delegate to a CommitmentEngine built on
    first use.
    """

    p: int
    q: int
    g: int
    h: int
    security_bits: int
    _engine: Optional["CommitmentEngine"] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def byte_length(self) -> int:
        """Width of a fixed-size big-endian encoding of values mod q."""
        return (self.q.bit_length() + 7) // 8

    @property
    def exponent_order(self) -> int:
        """Order of the multiplicative group mod q (q - 1)."""
        return self.q - 1

    def engine(self) -> "CommitmentEngine":
        if self._engine is None:
            from .commitments import CommitmentEngine

            object.__setattr__(self, "_engine", CommitmentEngine(self))
        return self._engine

    def commit(self, x: int) -> "Commitment":
        return self.engine().commit(x)

    def open(
        self, c: int, x: int, openings: Union[int, Sequence[int]]
    ) -> bool:
        return self.engine().open(c, x, openings)

    def add(self, commitments) -> int:
        return self.engine().add(commitments)


def validate_parameters(params: GroupParameters) -> bool:
    """
    Check every invariant of a parameter set.

    Use on parameters received from elsewhere; generate_parameters()
    already guarantees them.

    Returns:
        True if all checks pass

    Raises:
        EncodingError: If a field is not a positive integer or out of range,
            or p does not have 2 * security_bits bits
        PrimalityError: If p or q is not prime, or q != 2p + 1
    """
    for name in ("p", "q", "g", "h", "security_bits"):
        value = getattr(params, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodingError(f"{name} must be an integer, got {type(value)}")
        if value <= 0:
            raise EncodingError(f"{name} must be positive, got {value}")

    # The claimed security level must match the group actually supplied
    if arithmetic.num_bits(params.p) != 2 * params.security_bits:
        raise EncodingError(
            f"p has {params.p.bit_length()} bits, expected "
            f"{2 * params.security_bits} for security_bits="
            f"{params.security_bits}"
        )

    if params.q != arithmetic.checked_add(arithmetic.checked_mul(params.p, 2), 1):
        raise PrimalityError("q must equal 2p + 1")

    if not arithmetic.is_prime(params.p):
        raise PrimalityError("p is not prime")

    if not arithmetic.is_prime(params.q):
        raise PrimalityError("q is not prime (p is not a Sophie Germain prime)")

    if not 1 < params.g < params.p:
        raise EncodingError("g must lie in [2, p-1]")

    if not 1 < params.h < params.p:
        raise EncodingError("h must lie in [2, p-1]")

    return True


# ============================================================================
# GENERATION
# ============================================================================


def _search_safe_prime_pair(bits: int, max_attempts: int):
    """
    Find (p, q) with p a `bits`-bit prime and q = 2p + 1 prime.

    Raises:
        GenerationExhausted: If no candidate passes within max_attempts
        PrimalityError: If the provider fails
    """
    for attempt in range(1, max_attempts + 1):
        logger.debug(
            "Safe-prime search: attempt %d/%d (%d-bit p)",
            attempt,
            max_attempts,
            bits,
        )
        q = arithmetic.generate_safe_prime(bits + 1)
        p = arithmetic.checked_sub(q, 1) // 2

        if arithmetic.num_bits(p) != bits:
            logger.debug("Rejected candidate: p has %d bits", p.bit_length())
            continue

        if q != arithmetic.checked_add(arithmetic.checked_mul(p, 2), 1):
            continue

        if not (arithmetic.is_prime(p) and arithmetic.is_prime(q)):
            logger.debug("Rejected candidate: primality re-check failed")
            continue

        return p, q, attempt

    logger.warning(
        "Safe-prime search exhausted after %d attempts (%d-bit p)",
        max_attempts,
        bits,
    )
    raise GenerationExhausted(
        f"No {bits}-bit Sophie Germain prime found in {max_attempts} attempts"
    )


def _sample_generator(p: int, rng: RandomnessSource) -> int:
    # [1, p-1]; g == 1 is the identity and gives a degenerate group
    for _ in range(MAX_GENERATOR_ATTEMPTS):
        g = rng.get_random_in_range(1, p)
        if g != 1:
            return g
    raise GenerationExhausted("Could not sample a non-identity generator g")


def _derive_h(p: int, g: int, rng: RandomnessSource) -> int:
    """Compute h = g^alpha mod p for a fresh secret alpha that never escapes."""
    for _ in range(MAX_GENERATOR_ATTEMPTS):
        alpha = rng.get_random_in_range(1, p)
        h = arithmetic.mod_exp(g, alpha, p)
        del alpha
        if h != 1:
            return h
    raise GenerationExhausted("Could not derive a non-identity generator h")


def generate_parameters(
    security_bits: Optional[int] = None,
    max_attempts: Optional[int] = None,
    randomness_source: Optional[RandomnessSource] = None,
) -> GroupParameters:
    """
    Generate a fresh Pedersen group.

    ⚠️ SECURITY CRITICAL

    The secret alpha linking h to g lives only inside _derive_h and is
    never returned, stored or logged. Whoever knows alpha can open any
    commitment to any value.

    Args:
        security_bits: Security parameter; p gets 2 * security_bits bits
            (defaults to settings.get_security_bits())
        max_attempts: Safe-prime retry budget
            (defaults to settings.get_max_attempts())
        randomness_source: Source for g and alpha (created if None)

    Returns:
        GroupParameters: Validated parameter set

    Raises:
        ConfigurationError: If security_bits or max_attempts is invalid
        RandomnessError: If the secure random source is unavailable
        PrimalityError: If primality testing fails unexpectedly
        GenerationExhausted: If the safe-prime search exceeds its budget

    Example:
        >>> params = generate_parameters(32)
        >>> assert params.q == 2 * params.p + 1
        >>> assert params.p.bit_length() == 64
    """
    security_bits = get_security_bits(security_bits)
    max_attempts = get_max_attempts(max_attempts)

    if randomness_source is None:
        randomness_source = RandomnessSource()

    bits = 2 * security_bits
    p, q, attempts = _search_safe_prime_pair(bits, max_attempts)

    g = _sample_generator(p, randomness_source)
    h = _derive_h(p, g, randomness_source)

    params = GroupParameters(p=p, q=q, g=g, h=h, security_bits=security_bits)

    logger.info(
        "Generated Pedersen group: %d-bit p, %d-bit q after %d attempt(s)",
        bits,
        q.bit_length(),
        attempts,
    )

    return params


# ============================================================================
# MODULE-LEVEL CACHE
# ============================================================================

# Safe-prime search is expensive; cache one parameter set per security level
_PARAMS_CACHE: Dict[int, GroupParameters] = {}
_CACHE_LOCK = threading.Lock()


def get_cached_parameters(security_bits: Optional[int] = None) -> GroupParameters:
    """
    Get cached parameters for a security level (generate if needed).

    Thread-safe using double-checked locking pattern.

    Returns:
        GroupParameters: Cached parameters

    Example:
        >>> params = get_cached_parameters(32)
        >>> assert params is get_cached_parameters(32)
    """
    security_bits = get_security_bits(security_bits)

    # Fast path: cache already initialized (no lock needed)
    params = _PARAMS_CACHE.get(security_bits)
    if params is not None:
        return params

    # Slow path: acquire lock and initialize
    with _CACHE_LOCK:
        # Double-check: another thread may have initialized while we waited
        params = _PARAMS_CACHE.get(security_bits)
        if params is None:
            params = generate_parameters(security_bits)
            _PARAMS_CACHE[security_bits] = params

    return params


def clear_parameters_cache():
    """
    Clear cached parameters.

    Useful for testing or when parameters need to be regenerated.
    Thread-safe.
    """
    with _CACHE_LOCK:
        _PARAMS_CACHE.clear()
