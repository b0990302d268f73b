"""
Solana Ed25519 Candidate Generator

Produces one candidate keypair per call, in one of two modes:

FAST:
    1. Draw 32 random bytes
    2. Use them directly as the Ed25519 signing seed
    No mnemonic is produced, so the wallet cannot be restored from words.

MNEMONIC:
    1. Draw 16 random bytes of entropy
    2. Encode them as a 12-word BIP39 phrase
    3. Stretch the phrase into a 64-byte seed (PBKDF2, empty passphrase)
    4. Derive the 32-byte signing seed with SLIP-10 along m/44'/501'/0'/0'
    5. Build the Ed25519 keypair from the derived seed
    The result imports into Phantom/Solflare from the phrase alone.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import base58
from bip_utils import Bip32Slip10Ed25519
from mnemonic import Mnemonic
from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey
from nacl.utils import random as random_bytes

from vanity.core import DERIVATION_PATH

_MNEMONIC = Mnemonic("english")


class KeygenMode(Enum):
    """How candidate keypairs are produced. Selected once per search."""
    FAST = "fast"
    MNEMONIC = "mnemonic"


@dataclass
class Candidate:
    """One generated keypair and its encodings."""
    mnemonic: Optional[str]
    seed: bytes           # 64-byte BIP39 seed in mnemonic mode, the raw 32 bytes in fast mode
    signing_seed: bytes   # 32-byte Ed25519 seed
    public_key: bytes     # 32-byte Ed25519 public key
    address: str          # Base58 public key

    @property
    def secret_key(self) -> bytes:
        """64-byte Solana keypair: [signing_seed][public_key]."""
        return self.signing_seed + self.public_key

    @property
    def secret_key_b58(self) -> str:
        return base58.b58encode(self.secret_key).decode()

    @property
    def keypair_json(self) -> list:
        return list(self.secret_key)

    @property
    def signing_key(self) -> SigningKey:
        return SigningKey(self.signing_seed)

    def sign(self, message: bytes) -> bytes:
        return self.signing_key.sign(message).signature

    def verify(self, signature: bytes, message: bytes) -> bool:
        return SolanaKeyGenerator.verify_signature(self.public_key, signature, message)


class SolanaKeyGenerator:
    """Generates Solana keypairs in fast or mnemonic mode."""

    @staticmethod
    def derive_solana_seed(seed: bytes, path: str = DERIVATION_PATH) -> bytes:
        """Derive a 32-byte Ed25519 seed from a 64-byte BIP39 seed using SLIP-10."""
        derived = Bip32Slip10Ed25519.FromSeed(seed).DerivePath(path)
        return derived.PrivateKey().Raw().ToBytes()

    @staticmethod
    def seed_from_mnemonic(phrase: str) -> bytes:
        return Mnemonic.to_seed(phrase, passphrase="")

    @staticmethod
    def candidate_from_seed(signing_seed: bytes, mnemonic: Optional[str] = None,
                            seed: Optional[bytes] = None) -> Candidate:
        """Build a Candidate from a 32-byte signing seed."""
        public_key = SigningKey(signing_seed).verify_key.encode()
        return Candidate(
            mnemonic=mnemonic,
            seed=seed if seed is not None else signing_seed,
            signing_seed=signing_seed,
            public_key=public_key,
            address=base58.b58encode(public_key).decode()
        )

    @staticmethod
    def candidate_from_mnemonic(phrase: str) -> Candidate:
        """Deterministically rebuild the candidate for a known phrase."""
        seed = SolanaKeyGenerator.seed_from_mnemonic(phrase)
        signing_seed = SolanaKeyGenerator.derive_solana_seed(seed)
        return SolanaKeyGenerator.candidate_from_seed(signing_seed, mnemonic=phrase, seed=seed)

    @staticmethod
    def generate_fast() -> Candidate:
        return SolanaKeyGenerator.candidate_from_seed(random_bytes(32))

    @staticmethod
    def generate_with_mnemonic() -> Candidate:
        # 16 bytes of entropy -> 12 words
        phrase = _MNEMONIC.to_mnemonic(random_bytes(16))
        return SolanaKeyGenerator.candidate_from_mnemonic(phrase)

    @staticmethod
    def generate(mode: KeygenMode) -> Candidate:
        if mode == KeygenMode.MNEMONIC:
            return SolanaKeyGenerator.generate_with_mnemonic()
        return SolanaKeyGenerator.generate_fast()

    @staticmethod
    def verify_signature(public_key: bytes, signature: bytes, message: bytes) -> bool:
        try:
            VerifyKey(public_key).verify(message, signature)
            return True
        except BadSignatureError:
            return False


def generate_candidate(mode: KeygenMode) -> Candidate:
    """Generate one independent candidate in the given mode."""
    return SolanaKeyGenerator.generate(mode)
