"""
⚠️ DRAFT — requires crypto review before production use

Pedersen commitments over a safe-prime group.

This is a PROTOTYPE implementation for testing and validation.
DO NOT use in production without security audit.

Pedersen Commitments:
    A commitment scheme with the following properties:
    - Hiding: Commitment reveals nothing about the value
    - Binding: Cannot change value after commitment
    - Homomorphic: Commitments can be combined

Mathematical Definition:
    c = g^x * h^r mod q
    where q = 2p + 1 is a safe prime and log_g(h) is unknown

Homomorphism:
    c1 * c2 mod q = g^(x1 + x2) * h^(r1 + r2) mod q
    Products of commitments open against sums of values and openings.

Security Requirements:
    1. Opening randomness r must be fresh for every commitment
    2. r must stay secret until the commitment is opened
    3. Verification uses constant-time comparison
"""

from __future__ import annotations

import collections.abc
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Union

from . import arithmetic
from .arithmetic import WORKSPACE_LOCK
from .config import MAX_MESSAGE_VALUE, MESSAGE_BITS
from .exceptions import EncodingError
from .params import GroupParameters, get_cached_parameters
from .security import RandomnessSource, constant_time_compare, int_to_fixed_bytes

logger = logging.getLogger(__name__)


# ============================================================================
# COMMITMENT VALUE
# ============================================================================


@dataclass(frozen=True)
class Commitment:
    """
    Result of a commit call.

    Attributes:
        c: Public commitment value, safe to publish
        r: Secret opening randomness, keep until opening

    Unpacks like a tuple: ``c, r = engine.commit(42)``.
    """

    c: int
    r: int = field(repr=False)

    def __iter__(self) -> Iterator[int]:
        yield self.c
        yield self.r


# ============================================================================
# INPUT VALIDATION
# ============================================================================


def _require_non_negative_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"{name} must be an integer, got {type(value)}")
    if value < 0:
        raise EncodingError(f"{name} must be non-negative, got {value}")
    return value


def _normalize_openings(openings) -> List[int]:
    if isinstance(openings, int) and not isinstance(openings, bool):
        openings = [openings]
    elif isinstance(openings, (str, bytes)) or not isinstance(
        openings, collections.abc.Iterable
    ):
        raise EncodingError(
            f"Openings must be an integer or a sequence of integers, "
            f"got {type(openings)}"
        )

    result = [
        _require_non_negative_int(r, f"openings[{i}]")
        for i, r in enumerate(openings)
    ]
    if not result:
        raise EncodingError("At least one opening value is required")
    return result


# ============================================================================
# ENGINE
# ============================================================================


class CommitmentEngine:
    """
    Commit, open and add Pedersen commitments against one parameter set.

    All commitment arithmetic is performed modulo q. Exponents are reduced
    modulo q - 1, the order of the multiplicative group mod q.

    Example:
        >>> params = generate_parameters(32)
        >>> engine = CommitmentEngine(params)
        >>> c1, r1 = engine.commit(10)
        >>> c2, r2 = engine.commit(20)
        >>> assert engine.open(engine.add([c1, c2]), 30, [r1, r2])

    Thread Safety:
        Operations run under the provider's workspace lock, so one engine
        may be shared between threads.
    """

    def __init__(
        self,
        params: GroupParameters,
        randomness_source: Optional[RandomnessSource] = None,
    ) -> None:
        if not isinstance(params, GroupParameters):
            raise TypeError(
                f"params must be GroupParameters, got {type(params)}"
            )
        self.params = params
        self.rng = randomness_source or RandomnessSource()

    def _require_commitment_value(self, value, name: str) -> int:
        if isinstance(value, Commitment):
            value = value.c
        value = _require_non_negative_int(value, name)
        if value >= self.params.q:
            raise EncodingError(f"{name} must be less than q, got {value}")
        return value

    def _compute(self, x: int, r: int) -> int:
        q = self.params.q
        with WORKSPACE_LOCK:
            gx = arithmetic.mod_exp(self.params.g, x, q)
            hr = arithmetic.mod_exp(self.params.h, r, q)
            return arithmetic.mod_mul(gx, hr, q)

    def commit(self, x: int) -> Commitment:
        """
        Commit to a 32-bit unsigned value.

        ⚠️ SECURITY CRITICAL

        Computes c = g^x * h^r mod q with r drawn uniformly from [1, q-1].
        A fresh r is drawn on every call; reusing r across two commitments
        breaks hiding.

        Args:
            x: Value to commit to, in [0, 2^32)

        Returns:
            Commitment: public c and secret opening r

        Raises:
            EncodingError: If x is not an integer in range
            RandomnessError: If the secure random source is unavailable
        """
        x = _require_non_negative_int(x, "Value")
        if x > MAX_MESSAGE_VALUE:
            raise EncodingError(
                f"Value must fit in {MESSAGE_BITS} bits, got {x}"
            )

        r = self.rng.get_random_in_range(1, self.params.q)
        return Commitment(c=self._compute(x, r), r=r)

    def open(
        self,
        c: int,
        x: int,
        openings: Union[int, Sequence[int]],
    ) -> bool:
        """
        Check that c commits to x under the given opening(s).

        With one opening this is the ordinary check. With several, their
        sum is used, which opens a commitment produced by add() against
        the sum of the committed values.

        Args:
            c: Public commitment value (a Commitment is also accepted)
            x: Claimed value (may exceed 32 bits for aggregated commitments)
            openings: Opening randomness, an int or non-empty sequence

        Returns:
            bool: True iff g^x * h^(sum of openings) mod q == c

        Raises:
            EncodingError: If any input is malformed
        """
        c = self._require_commitment_value(c, "Commitment")
        x = _require_non_negative_int(x, "Value")
        openings = _normalize_openings(openings)

        order = self.params.exponent_order
        total_r = 0
        for r in openings:
            total_r = arithmetic.checked_add(total_r, r)

        expected = self._compute(
            arithmetic.nnmod(x, order), arithmetic.nnmod(total_r, order)
        )

        length = self.params.byte_length
        return constant_time_compare(
            int_to_fixed_bytes(expected, length),
            int_to_fixed_bytes(c, length),
        )

    def add(self, commitments: Iterable[int]) -> int:
        """
        Combine commitments homomorphically.

        Computes the product of the commitment values mod q. The product
        of an empty sequence is 1, a commitment to 0 with opening 0.

        Args:
            commitments: Commitment values (or Commitment objects)

        Returns:
            int: Combined commitment value

        Raises:
            EncodingError: If any element is malformed
        """
        if isinstance(commitments, (int, str, bytes, Commitment)) or not isinstance(
            commitments, collections.abc.Iterable
        ):
            raise EncodingError(
                f"Commitments must be a sequence, got {type(commitments)}"
            )

        values = [
            self._require_commitment_value(value, f"commitments[{i}]")
            for i, value in enumerate(commitments)
        ]

        q = self.params.q
        result = arithmetic.nnmod(1, q)
        with WORKSPACE_LOCK:
            for value in values:
                result = arithmetic.mod_mul(result, value, q)

        logger.debug("Combined %d commitment(s)", len(values))
        return result

    def add_openings(self, *openings: int) -> int:
        """
        Sum opening values into a single opening for a combined commitment.

        Example:
            >>> c1, r1 = engine.commit(10)
            >>> c2, r2 = engine.commit(20)
            >>> r = engine.add_openings(r1, r2)
            >>> assert engine.open(engine.add([c1, c2]), 30, [r])
        """
        total = 0
        for i, r in enumerate(openings):
            total = arithmetic.checked_add(
                total, _require_non_negative_int(r, f"openings[{i}]")
            )
        return arithmetic.nnmod(total, self.params.exponent_order)

    def is_valid_commitment_value(self, c) -> bool:
        """
        Fast range check for a commitment value.

        Accepts exactly the values open() and add() accept, [0, q). Does
        not prove c was produced by commit().
        """
        try:
            self._require_commitment_value(c, "Commitment")
        except EncodingError:
            return False
        return True


# ============================================================================
# FUNCTIONAL API
# ============================================================================


def _engine_for(
    params: Optional[GroupParameters],
    randomness_source: Optional[RandomnessSource] = None,
) -> CommitmentEngine:
    if params is None:
        params = get_cached_parameters()
    if randomness_source is None:
        return params.engine()
    return CommitmentEngine(params, randomness_source)


def commit(
    value: int,
    params: Optional[GroupParameters] = None,
    randomness_source: Optional[RandomnessSource] = None,
) -> Commitment:
    """
    Create a Pedersen commitment to a value.

    Args:
        value: Integer value to commit to (must be in [0, 2^32))
        params: Group parameters (cached default group if None)
        randomness_source: Source for the opening (engine default if None)

    Returns:
        Commitment: (c, r) pair

    Example:
        >>> params = generate_parameters(32)
        >>> c, r = commit(42, params=params)
        >>> assert verify_commitment(c, 42, r, params=params)
    """
    return _engine_for(params, randomness_source).commit(value)


def verify_commitment(
    commitment: int,
    value: int,
    openings: Union[int, Sequence[int]],
    params: Optional[GroupParameters] = None,
) -> bool:
    """
    Verify a Pedersen commitment against a value and its opening(s).

    Returns:
        bool: True if commitment is valid, False otherwise

    Raises:
        EncodingError: If inputs are malformed
    """
    return _engine_for(params).open(commitment, value, openings)


def open_commitment(
    commitment: int,
    value: int,
    openings: Union[int, Sequence[int]],
    params: Optional[GroupParameters] = None,
) -> bool:
    """
    Open (reveal) a Pedersen commitment.

    ⚠️ SECURITY WARNING

    Opening reveals both the value and the opening randomness. This is
    an alias for verify_commitment() with more explicit semantics.
    """
    return verify_commitment(commitment, value, openings, params)


def add_commitments(
    commitments: Iterable[int],
    params: Optional[GroupParameters] = None,
) -> int:
    """
    Multiply commitments mod q (homomorphic addition of their values).

    Example:
        >>> c1, r1 = commit(10, params=params)
        >>> c2, r2 = commit(20, params=params)
        >>> c_sum = add_commitments([c1, c2], params=params)
        >>> assert verify_commitment(c_sum, 30, [r1, r2], params=params)
    """
    return _engine_for(params).add(commitments)
