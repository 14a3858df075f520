"""
⚠️ DRAFT — requires crypto review before production use

Big-integer provider for commitment arithmetic.

Thin wrappers over petlib's Bn (OpenSSL BIGNUM). Values cross this
boundary as Python ints; petlib objects never escape the module.

Workspace:
    petlib evaluates every modular operation inside a single process-wide
    OpenSSL BN_CTX. That context is the scratch workspace for all
    intermediate results and must not be used by two threads at once, so
    every call below runs under WORKSPACE_LOCK.
"""

import threading

try:
    from petlib.bn import Bn
except ImportError:
    raise ImportError(
        "petlib is required for Pedersen commitments. "
        "Install with: pip install petlib"
    )

from .exceptions import EncodingError, PrimalityError


# Re-entrant so helpers can be composed while the caller holds the lock
WORKSPACE_LOCK = threading.RLock()


def _require_int(value, name: str = "value") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"{name} must be an integer, got {type(value)}")
    return value


def to_bn(value: int) -> "Bn":
    """
    Convert a Python integer to a petlib Bn.

    Raises:
        EncodingError: If value is not an integer or cannot be converted
    """
    value = _require_int(value)
    try:
        return Bn.from_decimal(str(value))
    except Exception as e:
        raise EncodingError(f"Cannot convert {value!r} to Bn: {e}") from e


# ============================================================================
# INTEGER ARITHMETIC
# ============================================================================


def checked_add(a: int, b: int) -> int:
    """Return a + b."""
    with WORKSPACE_LOCK:
        return int(to_bn(a).int_add(to_bn(b)))


def checked_sub(a: int, b: int) -> int:
    """
    Return a - b.

    Raises:
        EncodingError: If the result would be negative
    """
    with WORKSPACE_LOCK:
        result = int(to_bn(a).int_sub(to_bn(b)))
    if result < 0:
        raise EncodingError(f"Subtraction underflow: {a} - {b}")
    return result


def checked_mul(a: int, b: int) -> int:
    """Return a * b."""
    with WORKSPACE_LOCK:
        return int(to_bn(a).int_mul(to_bn(b)))


# ============================================================================
# MODULAR ARITHMETIC
# ============================================================================


def nnmod(a: int, m: int) -> int:
    """Return a mod m, always in [0, m)."""
    with WORKSPACE_LOCK:
        return int(to_bn(a).mod(to_bn(m)))


def mod_mul(a: int, b: int, m: int) -> int:
    """Return (a * b) mod m."""
    with WORKSPACE_LOCK:
        return int(to_bn(a).mod_mul(to_bn(b), to_bn(m)))


def mod_exp(base: int, exponent: int, m: int) -> int:
    """
    Return base^exponent mod m.

    Raises:
        EncodingError: If exponent is negative
    """
    if _require_int(exponent, "exponent") < 0:
        raise EncodingError(f"Exponent must be non-negative, got {exponent}")
    with WORKSPACE_LOCK:
        return int(to_bn(base).mod_pow(to_bn(exponent), to_bn(m)))


# ============================================================================
# PRIMES
# ============================================================================


def num_bits(value: int) -> int:
    """Bit length of a non-negative integer."""
    with WORKSPACE_LOCK:
        return int(to_bn(value).num_bits())


def is_prime(value: int) -> bool:
    """
    Probabilistic primality test (OpenSSL BN_is_prime).

    Raises:
        PrimalityError: If the test itself fails
    """
    with WORKSPACE_LOCK:
        bn = to_bn(value)
        try:
            return bool(bn.is_prime())
        except Exception as e:
            raise PrimalityError(f"Primality test failed: {e}") from e


def generate_safe_prime(bits: int) -> int:
    """
    Generate a safe prime q of exactly `bits` bits ((q - 1) / 2 also prime).

    Raises:
        PrimalityError: If prime generation fails
    """
    _require_int(bits, "bits")
    try:
        with WORKSPACE_LOCK:
            return int(Bn.get_prime(bits, safe=1))
    except Exception as e:
        raise PrimalityError(
            f"Failed to generate {bits}-bit safe prime: {e}"
        ) from e
