# birdhouse_deploy/utils/__init__.py
"""Utility functions for birdhouse-deploy"""

from .file_utils import (
    to_posix,
    walk_files,
    copy_tree_files,
    clear_directory,
)

from .formatting import (
    format_size,
    format_megabytes,
    format_duration,
    format_clock,
    pluralize,
)

from .async_utils import (
    run_async,
    run_blocking,
)

__all__ = [
    # File utilities
    "to_posix",
    "walk_files",
    "copy_tree_files",
    "clear_directory",

    # Formatting
    "format_size",
    "format_megabytes",
    "format_duration",
    "format_clock",
    "pluralize",

    # Async utilities
    "run_async",
    "run_blocking",
]
