"""
Configuration utilities for managing config.ini files.
"""

import configparser
import logging
import os
import sys

from vanity.core import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_FORMAT,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_REPORT_INTERVAL,
    OUTPUT_FORMATS,
)

logger = logging.getLogger(__name__)

SEARCH_SECTION = "search"
KEYGEN_MODES = ("mnemonic", "fast")


def load_config(config_file="config.ini"):
    """
    Load configuration from config.ini file

    A missing file is not an error; the returned parser is simply empty.

    Args:
        config_file (str): Path to the configuration file

    Returns:
        configparser.ConfigParser: Loaded configuration object

    Raises:
        SystemExit: If configuration cannot be parsed
    """
    config = configparser.ConfigParser()
    if not os.path.exists(config_file):
        logger.debug(f"No configuration file at {config_file}, using defaults")
        return config
    try:
        config.read(config_file)
        logger.info("Configuration loaded successfully")
        return config
    except configparser.Error as e:
        logger.error(f"Failed to load configuration: {str(e)}")
        sys.exit(1)


def get_search_settings(config):
    """
    Read the [search] section with built-in fallbacks.

    Returns:
        dict: workers, batch_size, report_interval, output_dir, format, mode

    Raises:
        SystemExit: If a value in the file is invalid
    """
    try:
        settings = {
            'workers': config.getint(SEARCH_SECTION, "workers", fallback=None),
            'batch_size': config.getint(SEARCH_SECTION, "batch_size", fallback=DEFAULT_BATCH_SIZE),
            'report_interval': config.getfloat(SEARCH_SECTION, "report_interval", fallback=DEFAULT_REPORT_INTERVAL),
            'output_dir': config.get(SEARCH_SECTION, "output_dir", fallback=DEFAULT_OUTPUT_DIR),
            'format': config.get(SEARCH_SECTION, "format", fallback=DEFAULT_FORMAT).lower(),
            'mode': config.get(SEARCH_SECTION, "mode", fallback="mnemonic").lower(),
        }
    except ValueError as e:
        logger.error(f"Invalid value in [{SEARCH_SECTION}] section: {str(e)}")
        sys.exit(1)

    if settings['format'] not in OUTPUT_FORMATS:
        logger.error(f"Invalid format '{settings['format']}' in [{SEARCH_SECTION}] section")
        sys.exit(1)
    if settings['mode'] not in KEYGEN_MODES:
        logger.error(f"Invalid mode '{settings['mode']}' in [{SEARCH_SECTION}] section")
        sys.exit(1)
    if settings['batch_size'] < 1 or (settings['workers'] is not None and settings['workers'] < 1):
        logger.error(f"workers and batch_size in [{SEARCH_SECTION}] must be positive")
        sys.exit(1)
    if settings['report_interval'] <= 0:
        logger.error(f"report_interval in [{SEARCH_SECTION}] must be positive")
        sys.exit(1)

    return settings
