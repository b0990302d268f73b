"""
Prefix validation and difficulty estimation.
"""

import logging

from vanity.core import BASE58_ALPHABET, COUNTER_MAX

logger = logging.getLogger(__name__)

_BASE58_SET = frozenset(BASE58_ALPHABET)


def is_valid_base58_prefix(prefix) -> bool:
    """Check that a prefix is non-empty and made only of Base58 characters.

    Never raises: anything that is not a string is simply rejected.
    """
    if not isinstance(prefix, str) or not prefix:
        return False
    return all(c in _BASE58_SET for c in prefix)


def calculate_expected_iterations(prefix: str) -> int:
    """Average number of draws until the first match: 58^len / 2."""
    return 58 ** len(prefix) // 2


def calculate_difficulty(prefix: str) -> int:
    """Odds of a single draw matching, as the N in "1 in N"."""
    return 58 ** len(prefix)


def exceeds_counter_width(prefix: str) -> bool:
    """Whether the expected iteration count no longer fits the 64-bit shared counter."""
    expected = calculate_expected_iterations(prefix)
    if expected > COUNTER_MAX:
        logger.warning(
            f"Expected iterations for a {len(prefix)}-character prefix ({expected:,}) "
            f"exceed the 64-bit iteration counter"
        )
        return True
    return False
