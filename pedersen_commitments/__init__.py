"""Pedersen commitments over a safe-prime group.

⚠️ DRAFT — requires crypto review before production use
"""
from __future__ import annotations

from .commitments import (
    Commitment,
    CommitmentEngine,
    add_commitments,
    commit,
    open_commitment,
    verify_commitment,
)
from .exceptions import (
    ConfigurationError,
    EncodingError,
    GenerationExhausted,
    PedersenError,
    PrimalityError,
    RandomnessError,
)
from .params import (
    GroupParameters,
    clear_parameters_cache,
    generate_parameters,
    get_cached_parameters,
    validate_parameters,
)

__version__ = "0.1.0"

__all__ = [
    "Commitment",
    "CommitmentEngine",
    "GroupParameters",
    "generate_parameters",
    "get_cached_parameters",
    "clear_parameters_cache",
    "validate_parameters",
    "commit",
    "verify_commitment",
    "open_commitment",
    "add_commitments",
    "PedersenError",
    "ConfigurationError",
    "RandomnessError",
    "PrimalityError",
    "GenerationExhausted",
    "EncodingError",
]
