"""
Data utilities for writing search results to disk.
"""

import os
import logging

logger = logging.getLogger(__name__)


def get_data_dir(data_dir=None):
    if data_dir:
        data_dir = os.path.abspath(data_dir)
    else:
        data_dir = os.path.abspath(os.getcwd())

    # Ensure data directory exists
    os.makedirs(data_dir, exist_ok=True)
    return data_dir


def save_output_file(content, filename, data_dir=None):
    """Write content to data_dir/filename, readable by the owner only.

    Errors are logged and re-raised; the file holds a secret key and the
    caller must know if it was not written.
    """
    try:
        data_dir = get_data_dir(data_dir)
        filepath = os.path.join(data_dir, filename)

        fd = os.open(filepath, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # O_CREAT only applies the mode to new files
        os.chmod(filepath, 0o600)
        with os.fdopen(fd, 'w') as f:
            f.write(content)

        logger.debug(f"Result saved to {filepath}")
        return filepath
    except OSError as e:
        logger.error(f"Error saving result to {filename}: {str(e)}")
        raise
