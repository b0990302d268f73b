import base58
from mnemonic import Mnemonic
from nacl.signing import SigningKey

from tests.conftest import ABANDON_MNEMONIC
from vanity.core import DERIVATION_PATH
from vanity.keygen import KeygenMode, SolanaKeyGenerator, generate_candidate


def test_derivation_path_is_solana_bip44():
    assert DERIVATION_PATH == "m/44'/501'/0'/0'"


def test_fast_mode_generates_valid_keypairs():
    candidate = generate_candidate(KeygenMode.FAST)

    assert candidate.mnemonic is None
    assert len(candidate.public_key) == 32
    assert len(candidate.signing_seed) == 32
    assert candidate.seed == candidate.signing_seed
    assert len(candidate.secret_key) == 64
    assert 32 <= len(candidate.address) <= 44


def test_mnemonic_mode_generates_valid_keypairs():
    candidate = generate_candidate(KeygenMode.MNEMONIC)

    assert candidate.mnemonic is not None
    assert len(candidate.mnemonic.split()) == 12
    assert Mnemonic("english").check(candidate.mnemonic)
    assert len(candidate.seed) == 64
    assert len(candidate.public_key) == 32
    assert len(candidate.secret_key) == 64


def test_base58_round_trip_in_both_modes():
    for mode in KeygenMode:
        candidate = generate_candidate(mode)

        assert base58.b58decode(candidate.address) == candidate.public_key
        assert base58.b58decode(candidate.secret_key_b58) == candidate.secret_key


def test_secret_key_layout_rebuilds_the_keypair():
    for mode in KeygenMode:
        candidate = generate_candidate(mode)
        secret = candidate.secret_key

        assert secret[:32] == candidate.signing_seed
        assert secret[32:] == candidate.public_key
        assert SigningKey(secret[:32]).verify_key.encode() == secret[32:]
        assert candidate.keypair_json == list(secret)


def test_signature_verification():
    message = b"Hello, Solana!"
    for mode in KeygenMode:
        candidate = generate_candidate(mode)
        signature = candidate.sign(message)

        assert candidate.verify(signature, message)
        assert not candidate.verify(signature, b"Wrong message")


def test_signature_does_not_verify_under_another_key():
    first = generate_candidate(KeygenMode.FAST)
    second = generate_candidate(KeygenMode.FAST)
    signature = first.sign(b"test")

    assert not SolanaKeyGenerator.verify_signature(second.public_key, signature, b"test")


def test_mnemonic_deterministic_derivation():
    seed = SolanaKeyGenerator.seed_from_mnemonic(ABANDON_MNEMONIC)

    first = SolanaKeyGenerator.derive_solana_seed(seed)
    second = SolanaKeyGenerator.derive_solana_seed(seed)

    assert len(seed) == 64
    assert len(first) == 32
    assert first == second

    one = SolanaKeyGenerator.candidate_from_mnemonic(ABANDON_MNEMONIC)
    two = SolanaKeyGenerator.candidate_from_mnemonic(ABANDON_MNEMONIC)
    assert one.public_key == two.public_key
    assert one.address == two.address
    assert one.secret_key == two.secret_key


def test_derivation_depends_on_path():
    seed = SolanaKeyGenerator.seed_from_mnemonic(ABANDON_MNEMONIC)

    account0 = SolanaKeyGenerator.derive_solana_seed(seed)
    account1 = SolanaKeyGenerator.derive_solana_seed(seed, "m/44'/501'/1'/0'")

    assert account0 != account1


def test_derived_seed_is_not_raw_bip39_seed():
    seed = SolanaKeyGenerator.seed_from_mnemonic(ABANDON_MNEMONIC)

    assert SolanaKeyGenerator.derive_solana_seed(seed) != seed[:32]


def test_fast_mode_produces_different_keypairs():
    keys = {generate_candidate(KeygenMode.FAST).public_key for _ in range(10)}
    assert len(keys) == 10


def test_mnemonic_mode_produces_different_keypairs():
    candidates = [generate_candidate(KeygenMode.MNEMONIC) for _ in range(10)]

    assert len({c.public_key for c in candidates}) == 10
    assert len({c.mnemonic for c in candidates}) == 10


def test_vanity_prefix_matching():
    # '2' is a common leading digit for 44-character addresses
    target_prefix = "2"
    found_count = 0
    for _ in range(1000):
        candidate = generate_candidate(KeygenMode.FAST)
        if candidate.address.startswith(target_prefix):
            found_count += 1
            signature = candidate.sign(b"test")
            assert candidate.verify(signature, b"test")
            if found_count >= 3:
                break

    assert found_count > 0, f"Should find at least one key with prefix '{target_prefix}' in 1000 iterations"
