"""Tests for the run statistics log."""

from datetime import datetime

from birdhouse_deploy.core import StatisticsLog, format_statistics
from birdhouse_deploy.models.result import RunStatistics


def make_stats(**overrides) -> RunStatistics:
    values = dict(
        version="1.2.3.5",
        finished=datetime(2026, 10, 19, 14, 3, 11),
        arguments="release -p -c",
        duration=42.4,
        uploaded_files=37,
        cached_files=120,
        cache_size=3365929,
    )
    values.update(overrides)
    return RunStatistics(**values)


def test_format_statistics_block() -> None:
    block = format_statistics(make_stats(minified_size=2202010))

    assert block == (
        "Version:         1.2.3.5\n"
        "Finished:        19/10/2026 14:03:11\n"
        "Arguments:       release -p -c\n"
        "Process Time:    00:42 minutes\n"
        "Uploaded files:  37\n"
        "Cached files:    120\n"
        "Cache file size: 3.21 MB\n"
        "Minified size:   2.10 MB\n"
        "\n"
    )


def test_minified_size_only_when_minifying() -> None:
    block = format_statistics(make_stats())

    assert "Minified size" not in block
    assert block.endswith("Cache file size: 3.21 MB\n\n")


def test_newest_block_comes_first(tmp_path) -> None:
    log = StatisticsLog(tmp_path / "pipeline-log.txt")

    log.prepend(make_stats(version="1.0.0.1"))
    log.prepend(make_stats(version="1.0.0.2"))

    content = (tmp_path / "pipeline-log.txt").read_text()
    assert content.index("1.0.0.2") < content.index("1.0.0.1")
    assert content.count("Version:") == 2
