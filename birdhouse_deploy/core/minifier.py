"""JavaScript and CSS minification into a side directory"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

import rcssmin
import rjsmin

from .path_resolver import PathResolver
from ..api.exceptions import MinifyError
from ..models.result import MinifyReport
from ..utils.file_utils import clear_directory
from ..utils.formatting import format_size

logger = logging.getLogger(__name__)

MINIFIERS: Dict[str, Callable[[str], str]] = {
    ".js": rjsmin.jsmin,
    ".css": rcssmin.cssmin,
}


class Minifier:
    """Writes minified copies of JS and CSS files to ``Birdhouse/minified``

    Originals are never modified; the upload stage picks the minified copy
    when one exists.
    """

    def __init__(self, path_resolver: PathResolver):
        self.path_resolver = path_resolver

    def minify_file(self, relative: str) -> Optional[Path]:
        """Minify one project file

        Args:
            relative: Project-relative path

        Returns:
            Path of the minified copy, or ``None`` for other file types

        Raises:
            MinifyError: If the file cannot be read, minified or written
        """
        source = self.path_resolver.resolve(relative)
        minify = MINIFIERS.get(source.suffix.lower())
        if minify is None:
            return None

        target = self.path_resolver.get_minified_path(relative)
        try:
            content = source.read_text(encoding="utf-8")
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(minify(content), encoding="utf-8")
        except (OSError, UnicodeDecodeError, ValueError) as e:
            raise MinifyError(relative, str(e))

        return target

    def minify(self, files: Iterable[str]) -> MinifyReport:
        """Minify every JS and CSS file of ``files``

        Args:
            files: Project-relative paths, usually the manifest

        Returns:
            Report with original and minified byte totals

        Raises:
            MinifyError: On the first file that fails
        """
        clear_directory(self.path_resolver.minified_dir)
        report = MinifyReport()

        for relative in files:
            source = self.path_resolver.resolve(relative)
            if not source.is_file():
                continue

            original_size = source.stat().st_size
            target = self.minify_file(relative)
            if target is None:
                report.add_unchanged(original_size)
                continue

            minified_size = target.stat().st_size
            report.add(relative, original_size, minified_size)
            logger.info(
                f"Minified {relative}: {format_size(original_size)} -> "
                f"{format_size(minified_size)}"
            )

        logger.info(
            f"Minification saved {format_size(max(report.saved_bytes, 0))} "
            f"({len(report.files)} files)"
        )
        return report
