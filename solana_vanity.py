#!/usr/bin/env python3
"""
Solana Vanity Wallet Generator
Searches for a Solana keypair whose Base58 address starts with a chosen prefix.

Requirements:
    pip install PyNaCl base58 mnemonic bip_utils
    pip install tqdm psutil

Generation Modes:
  (default)  12-word BIP39 mnemonic, derived along m/44'/501'/0'/0'.
             The wallet can be restored from the phrase in Phantom/Solflare.
  --fast     Random 32-byte seed used directly. Faster, but no mnemonic.

Results are printed and written to output/<first-10-chars>_output.{txt|json}.

Usage:
    python solana_vanity.py Sov                  # Mnemonic mode, text output
    python solana_vanity.py Sov --fast           # Fast mode (no mnemonic)
    python solana_vanity.py ABC --format json    # JSON output
    python solana_vanity.py ABC --workers 4      # Use 4 worker processes
    python solana_vanity.py A --test-chars       # First-character distribution test
"""

import argparse
import logging
import multiprocessing as mp
import sys

from helpers import get_search_settings, load_config
from vanity.coordinator import SearchConfig, SearchCoordinator, SystemUtils
from vanity.core import (
    OUTPUT_FORMATS,
    InvalidConfigError,
    InvalidPrefixError,
    PersistenceError,
    SearchAbortedError,
    setup_logging,
)
from vanity.keygen import KeygenMode, generate_candidate
from vanity.publisher import ResultPublisher
from vanity.utils import format_number
from vanity.validation import (
    calculate_difficulty,
    calculate_expected_iterations,
    exceeds_counter_width,
    is_valid_base58_prefix,
)

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 10_000_000


class ArgumentParser:
    """Handles command line argument parsing and validation."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="Solana Vanity Wallet Generator",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=ArgumentParser._get_examples()
        )

        ArgumentParser._add_arguments(parser)
        return parser

    @staticmethod
    def _add_arguments(parser: argparse.ArgumentParser):
        """Add command line arguments."""
        parser.add_argument('prefix', type=str,
                          help='Desired Base58 prefix for the wallet address')
        parser.add_argument('--format', '-f', choices=OUTPUT_FORMATS, default=None,
                          help='Output format (default: text)')
        parser.add_argument('--fast', action='store_true', default=None,
                          help='Fast mode: random seed without a mnemonic phrase')
        parser.add_argument('--workers', type=int,
                          help='Number of worker processes (default: one per logical CPU)')
        parser.add_argument('--batch-size', type=ArgumentParser._parse_batch_size,
                          help='Iterations each worker counts locally before updating the shared total (e.g., 500, 2K)')
        parser.add_argument('--output-dir', type=str,
                          help='Directory for result files (default: output)')
        parser.add_argument('--no-progress', action='store_true',
                          help='Disable the live progress line')
        parser.add_argument('--config', type=str, default='config.ini',
                          help='Path to configuration file (default: config.ini)')
        parser.add_argument('--verbose', '-v', action='store_true',
                          help='Enable debug logging')

        # Test functions
        parser.add_argument('--test-chars', action='store_true',
                          help='Test first character distribution of generated addresses')
        parser.add_argument('--samples', type=int, default=10000,
                          help='Number of keys for --test-chars (default: 10000)')

    @staticmethod
    def _parse_batch_size(size_str: str) -> int:
        """Parse batch size argument."""
        try:
            if size_str.lower().endswith('k'):
                return int(float(size_str[:-1]) * 1000)
            elif size_str.lower().endswith('m'):
                return int(float(size_str[:-1]) * 1000000)
            else:
                return int(size_str)
        except ValueError:
            raise argparse.ArgumentTypeError("Invalid batch size format")

    @staticmethod
    def _get_examples() -> str:
        return """
Examples:
  python solana_vanity.py Sov                 # Mnemonic mode, text output
  python solana_vanity.py Sov --fast          # Fast mode, no mnemonic
  python solana_vanity.py ABC --format json   # Save result as JSON
  python solana_vanity.py ABC --workers 4     # Use 4 worker processes
  python solana_vanity.py ABC --batch-size 2K # Flush counters every 2,000 keys
  python solana_vanity.py A --test-chars      # First-character distribution

Valid Base58 characters:
  Numbers: 1-9 (excludes 0)
  Uppercase: A-Z (excludes I and O)
  Lowercase: a-z (excludes l)

Difficulty grows 58x per character; 5+ characters can take hours.
        """


def print_invalid_prefix(prefix: str):
    """Explain which characters are allowed."""
    print(f"❌ Error: Invalid prefix '{prefix}'", file=sys.stderr)
    print(file=sys.stderr)
    print("Valid Base58 characters are:", file=sys.stderr)
    print("  Numbers: 1-9 (excludes 0)", file=sys.stderr)
    print("  Uppercase: A-Z (excludes I and O)", file=sys.stderr)
    print("  Lowercase: a-z (excludes l)", file=sys.stderr)
    print(file=sys.stderr)
    print("Examples of valid prefixes: ABC, Sov, 123, MyWavvet, JAZZ", file=sys.stderr)
    print("Examples of invalid prefixes: 0, O, I, l, _, +, =, /", file=sys.stderr)


def print_system_status():
    """Print current system status."""
    resources = SystemUtils.get_system_resources()
    if resources:
        print(f"CPU Usage:     {resources.get('cpu_percent', 0):.1f}%")
        print(f"Memory Usage:  {resources.get('memory_percent', 0):.1f}% "
              f"({resources.get('memory_available', 0) / 1024 / 1024 / 1024:.1f}GB available)")
        print(f"Disk Usage:    {resources.get('disk_percent', 0):.1f}% "
              f"({resources.get('disk_free', 0) / 1024 / 1024 / 1024:.1f}GB free)")


def print_banner(config: SearchConfig, num_workers: int):
    expected = calculate_expected_iterations(config.prefix)
    print("🚀 Solana Vanity Wallet Generator")
    print("==================================")
    print(f"Prefix: {config.prefix}")
    print(f"Mode: {config.mode.value}")
    print(f"Threads: {num_workers}")
    print(f"Expected iterations: {format_number(expected)}")
    print(f"Estimated difficulty: 1 in {format_number(calculate_difficulty(config.prefix))}")
    if exceeds_counter_width(config.prefix):
        print("⚠️  Warning: expected iterations exceed the 64-bit iteration counter")
    print_system_status()
    print()


def test_first_char_distribution(num_samples: int = 10000, mode: KeygenMode = KeygenMode.FAST):
    """Test the distribution of the first Base58 character of generated addresses.

    A 32-byte key is not uniform in its first Base58 digit: most addresses
    are 44 characters long and can only start with a low digit, so some
    prefixes are much rarer than 1 in 58.
    """
    print(f"Testing first character distribution in {num_samples:,} {mode.value} addresses...")

    distribution = {}
    lengths = {}
    progress_interval = max(1, min(100000, max(1000, num_samples // 10)))
    for i in range(num_samples):
        address = generate_candidate(mode).address
        distribution[address[0]] = distribution.get(address[0], 0) + 1
        lengths[len(address)] = lengths.get(len(address), 0) + 1

        if (i + 1) % progress_interval == 0:
            percentage = ((i + 1) / num_samples) * 100
            print(f"Progress: {i + 1:,} keys ({percentage:.1f}%)")

    print(f"\nDistribution of first characters:")
    sorted_dist = sorted(distribution.items(), key=lambda x: x[1], reverse=True)
    for i, (char, count) in enumerate(sorted_dist):
        percentage = (count / num_samples) * 100
        print(f"{i+1:2d}. {char}: {count:,} ({percentage:.3f}%)")

    print(f"\nStatistics:")
    print(f"Unique first characters found: {len(distribution)} of 58")
    print(f"Uniform expectation per character: 1 in 58 = {100/58:.3f}%")
    for length, count in sorted(lengths.items()):
        print(f"Address length {length}: {count:,} ({count / num_samples * 100:.2f}%)")

    return distribution


def create_config_from_args(args, settings) -> SearchConfig:
    """Create a SearchConfig from parsed arguments, falling back to config file settings."""
    if args.fast:
        mode = KeygenMode.FAST
    else:
        mode = KeygenMode(settings['mode'])

    return SearchConfig(
        prefix=args.prefix,
        mode=mode,
        output_format=args.format or settings['format'],
        num_workers=args.workers if args.workers is not None else settings['workers'],
        batch_size=args.batch_size if args.batch_size is not None else settings['batch_size'],
        report_interval=settings['report_interval'],
        output_dir=args.output_dir or settings['output_dir'],
        show_progress=not args.no_progress
    )


def main(argv=None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = ArgumentParser.create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    # Validate the prefix before anything else
    if not is_valid_base58_prefix(args.prefix):
        print_invalid_prefix(args.prefix)
        return 1

    settings = get_search_settings(load_config(args.config))
    config = create_config_from_args(args, settings)

    if args.test_chars:
        test_first_char_distribution(args.samples, config.mode)
        return 0

    if config.num_workers is not None:
        if config.num_workers < 1:
            print("Error: --workers must be at least 1.", file=sys.stderr)
            return 1
        max_workers = SystemUtils.get_worker_count()
        if config.num_workers > max_workers:
            print(f"Error: --workers cannot exceed the number of available CPU cores ({max_workers}).",
                  file=sys.stderr)
            return 1

    if config.batch_size < 1 or config.batch_size > MAX_BATCH_SIZE:
        print(f"Error: Batch size must be between 1 and {MAX_BATCH_SIZE:,}.", file=sys.stderr)
        return 1

    coordinator = SearchCoordinator(config)
    print_banner(config, coordinator.num_workers)

    try:
        result = coordinator.run()
    except InvalidPrefixError as e:
        print_invalid_prefix(e.prefix)
        return 1
    except InvalidConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except SearchAbortedError as e:
        logger.error(f"Search aborted: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\nSearch interrupted by user.")
        return 130

    publisher = ResultPublisher(config.output_format, config.output_dir)
    print("\n")
    print(publisher.format_summary(result))
    print()
    print(publisher.format_console(result))

    try:
        path = publisher.save(result)
    except PersistenceError as e:
        logger.error(f"{e}")
        print("\n⚠️  The result above was NOT saved to disk. Copy it now!", file=sys.stderr)
        return 1

    print(f"\nSaved to: {path}")
    print("⚠️  Keep your secret key and mnemonic secure and never share them!")
    return 0


if __name__ == "__main__":
    mp.freeze_support()
    sys.exit(main())
