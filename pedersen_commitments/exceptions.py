"""
⚠️ DRAFT — requires crypto review before production use

Custom exceptions for Pedersen commitments.

These exceptions provide structured error handling for parameter
generation and commitment operations.
"""


class PedersenError(Exception):
    """Base exception for Pedersen commitment errors."""

    pass


class ConfigurationError(PedersenError):
    """Configuration error."""

    pass


class RandomnessError(PedersenError):
    """Secure random source unavailable or exhausted."""

    pass


class PrimalityError(PedersenError):
    """Primality test or prime generation failed unexpectedly."""

    pass


class GenerationExhausted(PedersenError):
    """Safe-prime search exceeded its retry budget."""

    pass


class EncodingError(PedersenError, ValueError):
    """Malformed numeric input (wrong type, negative, or out of range)."""

    pass
