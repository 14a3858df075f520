"""Shared fixtures for Pedersen commitment tests."""

import pytest

from pedersen_commitments import settings
from pedersen_commitments.commitments import CommitmentEngine
from pedersen_commitments.config import ENV_MAX_PRIME_ATTEMPTS, ENV_SECURITY_BITS
from pedersen_commitments.params import clear_parameters_cache, generate_parameters

# Small groups keep the suite fast; the 512-bit scenario is marked slow
TEST_SECURITY_BITS = 32


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: generates full-size parameters")


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch):
    settings.set_security_bits(None)
    settings.set_max_attempts(None)
    monkeypatch.delenv(ENV_SECURITY_BITS, raising=False)
    monkeypatch.delenv(ENV_MAX_PRIME_ATTEMPTS, raising=False)
    yield
    settings.set_security_bits(None)
    settings.set_max_attempts(None)
    clear_parameters_cache()


@pytest.fixture(scope="session")
def params():
    return generate_parameters(TEST_SECURITY_BITS)


@pytest.fixture
def engine(params):
    return CommitmentEngine(params)

