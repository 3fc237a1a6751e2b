"""Run statistics log"""

import logging
from pathlib import Path

from ..constants import STATISTICS_TIME_FORMAT
from ..models.result import RunStatistics
from ..utils.formatting import format_clock, format_megabytes

logger = logging.getLogger(__name__)

LABEL_WIDTH = 17


def format_statistics(stats: RunStatistics) -> str:
    """Render one log block, terminated by a blank line

    Example::

        Version:         1.2.3.5
        Finished:        19/10/2026 14:03:11
        Arguments:       release -p -c
        Process Time:    00:42 minutes
        Uploaded files:  37
        Cached files:    120
        Cache file size: 3.21 MB
        Minified size:   2.10 MB
    """
    rows = [
        ("Version:", stats.version),
        ("Finished:", stats.finished.strftime(STATISTICS_TIME_FORMAT)),
        ("Arguments:", stats.arguments),
        ("Process Time:", format_clock(stats.duration)),
        ("Uploaded files:", str(stats.uploaded_files)),
        ("Cached files:", str(stats.cached_files)),
        ("Cache file size:", format_megabytes(stats.cache_size)),
    ]
    if stats.minified_size is not None:
        rows.append(("Minified size:", format_megabytes(stats.minified_size)))

    return "\n".join(f"{label:<{LABEL_WIDTH}}{value}" for label, value in rows) + "\n\n"


class StatisticsLog:
    """Log file with the newest run first"""

    def __init__(self, log_path: Path):
        self.log_path = log_path

    def prepend(self, stats: RunStatistics) -> None:
        """Insert a block for ``stats`` at the top of the log"""
        previous = ""
        if self.log_path.exists():
            previous = self.log_path.read_text(encoding="utf-8")

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.log_path.write_text(format_statistics(stats) + previous, encoding="utf-8")
        logger.info(f"Statistics written to {self.log_path.name}")
