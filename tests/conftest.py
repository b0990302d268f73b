import multiprocessing as mp

import pytest

from vanity.keygen import SolanaKeyGenerator
from vanity.state import SearchState

ABANDON_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)


@pytest.fixture
def manager():
    with mp.Manager() as m:
        yield m


@pytest.fixture
def state(manager):
    return SearchState(manager)


@pytest.fixture
def fast_candidate():
    return SolanaKeyGenerator.candidate_from_seed(bytes(range(32)))


@pytest.fixture
def mnemonic_candidate():
    return SolanaKeyGenerator.candidate_from_mnemonic(ABANDON_MNEMONIC)
