"""Formatting utilities for display"""

from typing import Union

from ..constants import BYTES_PER_MB


def format_size(size_bytes: Union[int, float]) -> str:
    """Format byte size to human readable format

    Args:
        size_bytes: Size in bytes

    Returns:
        Human readable size string

    Examples:
        >>> format_size(1024)
        '1.0 KB'
        >>> format_size(1048576)
        '1.0 MB'
    """
    if size_bytes < 0:
        return "Invalid size"

    units = ['B', 'KB', 'MB', 'GB', 'TB']
    size = float(size_bytes)
    unit_index = 0

    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {units[unit_index]}"
    return f"{size:.1f} {units[unit_index]}"


def format_megabytes(size_bytes: Union[int, float]) -> str:
    """Format byte size as megabytes with two decimals

    Examples:
        >>> format_megabytes(3365929)
        '3.21 MB'
    """
    return f"{size_bytes / BYTES_PER_MB:.2f} MB"


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human readable format

    Args:
        seconds: Duration in seconds

    Returns:
        Human readable duration string

    Examples:
        >>> format_duration(1.5)
        '1.5s'
        >>> format_duration(65)
        '1m 5s'
    """
    if seconds < 0:
        return "Invalid duration"

    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes}m"


def format_clock(seconds: float) -> str:
    """Format duration as ``MM:SS minutes`` for the statistics log

    Examples:
        >>> format_clock(42)
        '00:42 minutes'
        >>> format_clock(125.7)
        '02:05 minutes'
    """
    total = int(max(seconds, 0))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d} minutes"


def pluralize(count: int, singular: str, plural: str = None) -> str:
    """Pluralize a word based on count

    Args:
        count: Number of items
        singular: Singular form
        plural: Plural form (optional, will add 's' if not provided)

    Returns:
        Pluralized string with count
    """
    if plural is None:
        plural = singular + 's'

    word = singular if count == 1 else plural
    return f"{count} {word}"
