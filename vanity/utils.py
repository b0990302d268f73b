"""
Formatting helpers shared by the progress reporter and the result publisher.
"""


def format_number(num) -> str:
    """Format a count with K/M/B/T suffixes."""
    if num < 1_000:
        return f"{int(num)}"
    elif num < 1_000_000:
        return f"{num / 1_000:.1f}K"
    elif num < 1_000_000_000:
        return f"{num / 1_000_000:.1f}M"
    elif num < 1_000_000_000_000:
        return f"{num / 1_000_000_000:.1f}B"
    else:
        return f"{num / 1_000_000_000_000:.1f}T"


def format_duration(seconds: float) -> str:
    """Format seconds as s/m/h/d with one decimal."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        return f"{seconds / 60:.1f}m"
    elif seconds < 86400:
        return f"{seconds / 3600:.1f}h"
    else:
        return f"{seconds / 86400:.1f}d"
