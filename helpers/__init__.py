"""
Solana Vanity Helper Modules

This package contains utility functions organized by functionality:
- config_utils: Configuration management
- data_utils: Result file operations
"""

from .config_utils import load_config, get_search_settings
from .data_utils import get_data_dir, save_output_file

__all__ = [
    # Config utilities
    'load_config',
    'get_search_settings',

    # Data utilities
    'get_data_dir',
    'save_output_file',
]
