"""
Vanity Core Module

Contains shared constants, logging setup and the exception types used by
the search engine. This is the foundation that other modules import from.
"""

import logging

logger = logging.getLogger(__name__)

# Base58 alphabet: 123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz
# Notable exclusions: 0, O, I, l
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

# Solana BIP44 derivation path; 501 is Solana's coin type
SOLANA_COIN_TYPE = 501
DERIVATION_PATH = f"m/44'/{SOLANA_COIN_TYPE}'/0'/0'"

# Width of the shared iteration counter
COUNTER_MAX = 2 ** 64 - 1

DEFAULT_BATCH_SIZE = 1000
DEFAULT_REPORT_INTERVAL = 1.0
DEFAULT_OUTPUT_DIR = "output"
DEFAULT_FORMAT = "text"
OUTPUT_FORMATS = ("text", "json")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(verbose=False):
    """Configure root logging for the command line tool."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()]
    )


class VanityError(Exception):
    """Base class for all vanity search errors."""


class InvalidPrefixError(VanityError, ValueError):
    """The requested prefix contains characters outside the Base58 alphabet."""

    def __init__(self, prefix):
        self.prefix = prefix
        super().__init__(f"Invalid prefix '{prefix}'")


class InvalidConfigError(VanityError, ValueError):
    """A search setting is out of range."""


class SearchAbortedError(VanityError):
    """A worker failed while generating candidates and the search was stopped."""


class PersistenceError(VanityError):
    """The winning result could not be written to the output directory."""
