"""
⚠️ DRAFT — requires crypto review before production use

Cryptographic configuration for Pedersen commitments.

This is a PROTOTYPE implementation for testing and validation.
DO NOT use in production without security audit.

Group arithmetic is delegated to petlib (OpenSSL BIGNUM bindings).
"""

# ============================================================================
# BIG-INTEGER PROVIDER
# ============================================================================

BIGNUM_LIBRARY = "petlib"

# petlib refuses prime generation outside 0 < bits < 10000
PROVIDER_MAX_PRIME_BITS = 9999

# ============================================================================
# SECURITY PARAMETERS
# ============================================================================

# p has 2 * security bits, q = 2p + 1 has one more
DEFAULT_SECURITY_BITS = 512
# p must exceed the message space so every generator order does too
MIN_SECURITY_BITS = 17
MAX_SECURITY_BITS = 4096

# Safe-prime search retry budget (candidates rejected before giving up)
MAX_SAFE_PRIME_ATTEMPTS = 32

# Redraw budget for degenerate g / h (g == 1 or h == 1)
MAX_GENERATOR_ATTEMPTS = 64

# ============================================================================
# MESSAGE SPACE
# ============================================================================

# Committed values must fit an unsigned 32-bit integer
MESSAGE_BITS = 32
MAX_MESSAGE_VALUE = (1 << MESSAGE_BITS) - 1

# ============================================================================
# ENVIRONMENT OVERRIDES
# ============================================================================

ENV_SECURITY_BITS = "PEDERSEN_SECURITY_BITS"
ENV_MAX_PRIME_ATTEMPTS = "PEDERSEN_MAX_PRIME_ATTEMPTS"

# ============================================================================
# VALIDATION
# ============================================================================


def validate_config() -> bool:
    """
    Validate configuration parameters.

    Returns:
        True if configuration is valid

    Raises:
        AssertionError: If configuration is invalid
    """
    assert MIN_SECURITY_BITS >= 17, "Security parameter floor too small"
    assert MIN_SECURITY_BITS <= DEFAULT_SECURITY_BITS <= MAX_SECURITY_BITS
    assert 2 * MAX_SECURITY_BITS + 1 <= PROVIDER_MAX_PRIME_BITS, (
        "Safe prime size exceeds provider limit"
    )
    assert MAX_SAFE_PRIME_ATTEMPTS > 0, "Retry budget must be positive"
    assert MAX_GENERATOR_ATTEMPTS > 0, "Generator redraw budget must be positive"
    assert MESSAGE_BITS < 2 * MIN_SECURITY_BITS, (
        "Message space must be smaller than the group"
    )
    assert BIGNUM_LIBRARY == "petlib", "Invalid big-integer library"

    return True


# Auto-validate on import
validate_config()
