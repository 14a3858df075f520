"""
⚠️ DRAFT — requires crypto review before production use

Tests for the Pedersen commitment engine.

Test Coverage:
1. Commitment creation and input validation
2. Opening (single and aggregate)
3. Homomorphic addition
4. Security properties (hiding, binding)
5. Functional API and GroupParameters delegation
6. Thread safety
7. Full-size concrete scenario
"""

import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from pedersen_commitments import commitments as commitments_module
from pedersen_commitments import settings
from pedersen_commitments.commitments import (
    Commitment,
    CommitmentEngine,
    add_commitments,
    commit,
    open_commitment,
    verify_commitment,
)
from pedersen_commitments.config import MAX_MESSAGE_VALUE
from pedersen_commitments.exceptions import EncodingError, RandomnessError
from pedersen_commitments.params import generate_parameters


# ============================================================================
# HELPERS
# ============================================================================


class FixedRandomnessSource:
    """Always returns the top of the requested range."""

    def get_random_in_range(self, low: int, high: int) -> int:
        return high - 1


class BrokenRandomnessSource:
    def get_random_in_range(self, low: int, high: int) -> int:
        raise RandomnessError("Secure random source unavailable")


# ============================================================================
# TEST: COMMITMENT CREATION
# ============================================================================


class TestCommitmentCreation:
    """Test Pedersen commitment creation."""

    def test_commit_basic(self, engine, params):
        """Create basic commitment."""
        cm = engine.commit(42)

        assert isinstance(cm, Commitment)
        assert 0 <= cm.c < params.q
        assert 1 <= cm.r < params.q

    def test_commit_unpacks(self, engine):
        c, r = engine.commit(42)

        assert isinstance(c, int)
        assert isinstance(r, int)

    def test_commit_formula(self, params):
        """c = g^x * h^r mod q."""
        engine = CommitmentEngine(params, FixedRandomnessSource())

        cm = engine.commit(42)

        assert cm.r == params.q - 1
        expected = (pow(params.g, 42, params.q) * pow(params.h, cm.r, params.q)) % params.q
        assert cm.c == expected

    @pytest.mark.parametrize("value", [0, 1, 500, MAX_MESSAGE_VALUE])
    def test_commit_range_bounds(self, engine, value):
        c, r = engine.commit(value)
        assert engine.open(c, value, [r])

    def test_commit_negative_value_raises(self, engine):
        with pytest.raises(EncodingError, match="must be non-negative"):
            engine.commit(-1)

    def test_commit_value_exceeds_32_bits_raises(self, engine):
        with pytest.raises(EncodingError, match="32 bits"):
            engine.commit(MAX_MESSAGE_VALUE + 1)

    @pytest.mark.parametrize("value", ["42", 42.5, None, True])
    def test_commit_non_integer_raises(self, engine, value):
        with pytest.raises(EncodingError, match="must be an integer"):
            engine.commit(value)

    def test_encoding_error_is_value_error(self, engine):
        with pytest.raises(ValueError):
            engine.commit(-1)

    def test_commit_randomness_failure(self, params):
        engine = CommitmentEngine(params, BrokenRandomnessSource())

        with pytest.raises(RandomnessError):
            engine.commit(42)

    def test_repr_hides_opening(self, params):
        engine = CommitmentEngine(params, FixedRandomnessSource())
        cm = engine.commit(42)

        assert str(cm.r) not in repr(cm)
        assert str(cm.c) in repr(cm)

    def test_engine_requires_group_parameters(self):
        with pytest.raises(TypeError):
            CommitmentEngine((11, 23, 2, 4))


# ============================================================================
# TEST: OPENING
# ============================================================================


class TestOpening:
    """Test opening single and aggregated commitments."""

    def test_open_valid(self, engine):
        c, r = engine.commit(42)
        assert engine.open(c, 42, [r]) is True

    def test_open_bare_int_opening(self, engine):
        c, r = engine.commit(42)
        assert engine.open(c, 42, r) is True

    def test_open_accepts_commitment_object(self, engine):
        cm = engine.commit(42)
        assert engine.open(cm, 42, [cm.r]) is True

    def test_open_wrong_value(self, engine):
        c, r = engine.commit(42)
        assert engine.open(c, 43, [r]) is False

    def test_open_wrong_opening(self, engine):
        c, r = engine.commit(42)
        assert engine.open(c, 42, [r + 1]) is False

    def test_open_split_opening(self, engine):
        """Openings are summed, so a split opening is accepted."""
        c, r = engine.commit(42)
        assert engine.open(c, 42, [r - 1, 1]) is True

    def test_open_uses_constant_time_compare(self, engine, monkeypatch):
        calls = []
        real_compare = commitments_module.constant_time_compare

        def spy(a, b):
            calls.append((a, b))
            return real_compare(a, b)

        monkeypatch.setattr(commitments_module, "constant_time_compare", spy)
        c, r = engine.commit(42)
        engine.open(c, 42, [r])

        assert len(calls) == 1
        a, b = calls[0]
        assert len(a) == len(b) == engine.params.byte_length

    def test_open_commitment_out_of_range_raises(self, engine, params):
        with pytest.raises(EncodingError, match="less than q"):
            engine.open(params.q, 42, [1])

    def test_open_negative_value_raises(self, engine):
        c, r = engine.commit(42)
        with pytest.raises(EncodingError, match="must be non-negative"):
            engine.open(c, -1, [r])

    def test_open_empty_openings_raises(self, engine):
        c, _ = engine.commit(42)
        with pytest.raises(EncodingError, match="At least one opening"):
            engine.open(c, 42, [])

    @pytest.mark.parametrize("openings", ["12", None, [1, -2], [1.5], [True]])
    def test_open_malformed_openings_raises(self, engine, openings):
        c, _ = engine.commit(42)
        with pytest.raises(EncodingError):
            engine.open(c, 42, openings)

    def test_open_mismatch_is_not_an_error(self, engine):
        """Non-matching openings return False rather than raising."""
        c, _ = engine.commit(42)
        assert engine.open(c, 42, [1]) is False


# ============================================================================
# TEST: HOMOMORPHIC ADDITION
# ============================================================================


class TestHomomorphicAddition:
    """Test homomorphic properties of Pedersen commitments."""

    def test_add_three(self, engine):
        c1, r1 = engine.commit(10)
        c2, r2 = engine.commit(20)
        c3, r3 = engine.commit(30)

        combined = engine.add([c1, c2, c3])

        assert engine.open(combined, 60, [r1, r2, r3]) is True
        assert engine.open(combined, 59, [r1, r2, r3]) is False

    def test_add_is_product_mod_q(self, engine, params):
        c1, _ = engine.commit(10)
        c2, _ = engine.commit(20)

        assert engine.add([c1, c2]) == (c1 * c2) % params.q

    def test_add_empty_is_identity(self, engine):
        combined = engine.add([])

        assert combined == 1
        assert engine.open(combined, 0, [0]) is True

    def test_add_single(self, engine):
        c, r = engine.commit(7)
        assert engine.add([c]) == c

    def test_add_accepts_commitment_objects(self, engine):
        cm1 = engine.commit(1)
        cm2 = engine.commit(2)

        combined = engine.add([cm1, cm2])

        assert engine.open(combined, 3, [cm1.r, cm2.r]) is True

    def test_add_accepts_generator(self, engine):
        cms = [engine.commit(x) for x in (1, 2, 3)]

        combined = engine.add(cm.c for cm in cms)

        assert engine.open(combined, 6, [cm.r for cm in cms])

    def test_add_openings(self, engine, params):
        cm1 = engine.commit(10)
        cm2 = engine.commit(20)

        total = engine.add_openings(cm1.r, cm2.r)

        assert 0 <= total < params.q - 1
        assert engine.open(engine.add([cm1, cm2]), 30, [total]) is True

    def test_aggregate_opening_exceeding_q(self, params):
        """Openings summing past q still open the combined commitment."""
        engine = CommitmentEngine(params, FixedRandomnessSource())
        cms = [engine.commit(x) for x in (500, 100, 600)]
        openings = [cm.r for cm in cms]

        assert sum(openings) > params.q
        assert engine.open(engine.add(cms), 1200, openings) is True

    def test_sum_beyond_message_space(self, engine):
        """Aggregated values may exceed 32 bits at opening time."""
        cm1 = engine.commit(MAX_MESSAGE_VALUE)
        cm2 = engine.commit(MAX_MESSAGE_VALUE)

        combined = engine.add([cm1, cm2])

        assert engine.open(combined, 2 * MAX_MESSAGE_VALUE, [cm1.r, cm2.r])

    @pytest.mark.parametrize("bad", [[-1], ["x"], [None], [1.0]])
    def test_add_malformed_element_raises(self, engine, bad):
        with pytest.raises(EncodingError):
            engine.add(bad)

    def test_add_out_of_range_element_raises(self, engine, params):
        with pytest.raises(EncodingError, match="less than q"):
            engine.add([params.q])

    @pytest.mark.parametrize("bad", [5, "123", b"123", None])
    def test_add_non_sequence_raises(self, engine, bad):
        with pytest.raises(EncodingError, match="must be a sequence"):
            engine.add(bad)

    def test_is_valid_commitment_value(self, engine, params):
        c, _ = engine.commit(1)

        assert engine.is_valid_commitment_value(c)
        assert engine.is_valid_commitment_value(0)
        assert engine.is_valid_commitment_value(params.q - 1)
        assert not engine.is_valid_commitment_value(params.q)
        assert not engine.is_valid_commitment_value(-1)
        assert not engine.is_valid_commitment_value("1")

    @pytest.mark.parametrize("value", [0, 1, "q-1"])
    def test_range_check_agrees_with_open_and_add(self, engine, params, value):
        """Whatever passes the range check is accepted by open() and add()."""
        if value == "q-1":
            value = params.q - 1
        assert engine.is_valid_commitment_value(value)

        assert engine.open(value, 5, [7]) in (True, False)
        assert engine.add([value]) == value

    def test_zero_commitment_never_opens(self, engine):
        assert engine.open(0, 0, [0]) is False
        assert engine.add([0, 12345]) == 0


# ============================================================================
# TEST: SECURITY PROPERTIES
# ============================================================================


class TestSecurityProperties:
    """Statistical hiding and binding checks."""

    def test_hiding_same_value_distinct_commitments(self, engine):
        commitments = {engine.commit(42).c for _ in range(50)}
        assert len(commitments) == 50

    def test_openings_are_fresh(self, engine):
        openings = {engine.commit(42).r for _ in range(50)}
        assert len(openings) == 50

    def test_binding_no_false_positives(self, engine):
        rng = random.Random(1234)
        false_positives = 0

        for _ in range(200):
            x1 = rng.randrange(0, MAX_MESSAGE_VALUE + 1)
            x2 = rng.randrange(0, MAX_MESSAGE_VALUE + 1)
            if x1 == x2:
                x2 = (x2 + 1) % (MAX_MESSAGE_VALUE + 1)

            c1, r1 = engine.commit(x1)
            if engine.open(c1, x2, [r1]):
                false_positives += 1

        assert false_positives == 0

    def test_round_trip_random_values(self, engine):
        rng = random.Random(5678)

        for _ in range(50):
            x = rng.randrange(0, MAX_MESSAGE_VALUE + 1)
            c, r = engine.commit(x)
            assert engine.open(c, x, [r])


# ============================================================================
# TEST: FUNCTIONAL API
# ============================================================================


class TestFunctionalAPI:
    """Module-level functions and GroupParameters delegation."""

    def test_commit_and_verify(self, params):
        c, r = commit(42, params=params)

        assert verify_commitment(c, 42, r, params=params) is True
        assert verify_commitment(c, 43, r, params=params) is False

    def test_open_is_verify(self, params):
        c, r = commit(42, params=params)

        assert open_commitment(c, 42, [r], params) == verify_commitment(
            c, 42, [r], params
        )

    def test_add_commitments(self, params):
        c1, r1 = commit(10, params=params)
        c2, r2 = commit(20, params=params)

        c_sum = add_commitments([c1, c2], params=params)

        assert verify_commitment(c_sum, 30, [r1, r2], params=params)

    def test_custom_randomness_source(self, params):
        cm = commit(42, params=params, randomness_source=FixedRandomnessSource())
        assert cm.r == params.q - 1

    def test_default_params_come_from_cache(self):
        settings.set_security_bits(32)

        c, r = commit(42)

        assert verify_commitment(c, 42, r)

    def test_group_parameters_methods(self, params):
        c1, r1 = params.commit(500)
        c2, r2 = params.commit(100)

        combined = params.add([c1, c2])

        assert params.open(combined, 600, [r1, r2]) is True
        assert params.engine() is params.engine()


# ============================================================================
# TEST: THREAD SAFETY
# ============================================================================


class TestThreadSafety:
    """A shared engine can be used from several threads."""

    def test_concurrent_commit_and_open(self, engine):
        def round_trip(x):
            c, r = engine.commit(x)
            return engine.open(c, x, [r])

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(round_trip, range(200)))

        assert all(results)


# ============================================================================
# TEST: CONCRETE SCENARIO
# ============================================================================


@pytest.mark.slow
def test_concrete_scenario_512_bits():
    """security=512: 500 + 100 + 600 opens at 1200 and not at 1199."""
    params = generate_parameters(512)
    engine = CommitmentEngine(params)

    assert params.p.bit_length() == 1024
    assert params.q == 2 * params.p + 1

    c1, r1 = engine.commit(500)
    c2, r2 = engine.commit(100)
    c3, r3 = engine.commit(600)

    combined = engine.add([c1, c2, c3])

    assert engine.open(combined, 1200, [r1, r2, r3]) is True
    assert engine.open(combined, 1199, [r1, r2, r3]) is False
