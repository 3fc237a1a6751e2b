"""CLI utility functions"""

from .output import (
    console,
    format_image_reports,
    format_release_result,
    print_warning,
    show_information,
)
from .progress import ProgressManager, upload_callback

__all__ = [
    # Output utilities
    'console',
    'format_image_reports',
    'format_release_result',
    'print_warning',
    'show_information',

    # Progress utilities
    'ProgressManager',
    'upload_callback',
]
