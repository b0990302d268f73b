"""
Solana Vanity Search Engine

Parallel brute-force search for Solana keypairs whose Base58 address
starts with a chosen prefix:
- validation: prefix checks and difficulty estimation
- keygen: candidate generation (fast or BIP39 mnemonic mode)
- state / worker / coordinator: the parallel search itself
- progress: live status line
- publisher: result formatting and persistence
"""

__version__ = "0.3.0"
