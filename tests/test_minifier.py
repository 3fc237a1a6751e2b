"""Tests for JavaScript and CSS minification."""

import pytest

from birdhouse_deploy.api.exceptions import MinifyError
from birdhouse_deploy.core import Minifier
from tests.conftest import SCRIPT, STYLE, write


def test_minify_writes_side_copies(path_resolver, project) -> None:
    report = Minifier(path_resolver).minify(["src/app.js", "src/theme.css", "index.html"])

    minified_js = path_resolver.get_minified_path("src/app.js")
    minified_css = path_resolver.get_minified_path("src/theme.css")

    assert minified_js.is_file()
    assert minified_css.is_file()
    assert "// sum of both" not in minified_js.read_text()
    assert len(minified_css.read_text()) < len(STYLE)
    assert not path_resolver.get_minified_path("index.html").exists()

    # Originals untouched
    assert (project / "src/app.js").read_text() == SCRIPT


def test_report_totals(path_resolver, project) -> None:
    html_size = (project / "index.html").stat().st_size

    report = Minifier(path_resolver).minify(["src/app.js", "index.html"])

    assert [f.path for f in report.files] == ["src/app.js"]
    assert report.original_size == len(SCRIPT) + html_size
    assert report.minified_size < report.original_size
    assert report.saved_bytes == report.original_size - report.minified_size


def test_previous_output_is_cleared(path_resolver, project) -> None:
    stale = write(project, "Birdhouse/minified/old.js", "stale")

    Minifier(path_resolver).minify(["src/app.js"])

    assert not stale.exists()


def test_missing_files_are_skipped(path_resolver) -> None:
    report = Minifier(path_resolver).minify(["src/gone.js"])

    assert report.files == []
    assert report.original_size == 0


def test_undecodable_file_raises(path_resolver, project) -> None:
    (project / "src/binary.js").write_bytes(b"\xff\xfe\x00bad")

    with pytest.raises(MinifyError, match="src/binary.js"):
        Minifier(path_resolver).minify(["src/binary.js"])
