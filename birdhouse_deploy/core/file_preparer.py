"""Per-file preparation before upload"""

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from bs4 import BeautifulSoup

from .path_resolver import PathResolver

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


def set_base_href(html: str, base_path: str) -> str:
    """Set, insert or remove the ``<base href>`` of an HTML document

    Args:
        html: Document source
        base_path: New base path, an empty value removes the tag

    Returns:
        Rewritten document
    """
    soup = BeautifulSoup(html, 'html.parser')
    base = soup.find('base')

    if not base_path:
        if base is not None:
            base.decompose()
        return str(soup)

    if base is not None:
        base['href'] = base_path
        return str(soup)

    tag = soup.new_tag('base', href=base_path)
    head = soup.find('head')
    if head is not None:
        head.insert(0, tag)
    elif soup.find('html') is not None:
        head = soup.new_tag('head')
        head.append(tag)
        soup.find('html').insert(0, head)
    else:
        soup.insert(0, tag)
    return str(soup)


class FilePreparer:
    """Chooses the local file that is uploaded for a project file"""

    def __init__(self, path_resolver: PathResolver, base_path: str = "/",
                 use_minified: bool = False):
        """Initialize file preparer

        Args:
            path_resolver: Resolver of the project paths
            base_path: ``<base href>`` written into ``index.html``
            use_minified: Prefer copies from the minified directory
        """
        self.path_resolver = path_resolver
        self.base_path = base_path
        self.use_minified = use_minified

    def source_for(self, relative: str) -> Path:
        """Local file to upload for ``relative``"""
        if self.use_minified:
            minified = self.path_resolver.get_minified_path(relative)
            if minified.is_file():
                return minified
        return self.path_resolver.resolve(relative)

    @contextmanager
    def prepare(self, relative: str) -> Iterator[Path]:
        """Yield the path to upload, cleaning up temporary copies afterwards"""
        source = self.source_for(relative)

        if relative != INDEX_FILE:
            yield source
            return

        content = set_base_href(source.read_text(encoding="utf-8"), self.base_path)
        fd, temp_name = tempfile.mkstemp(suffix=".html", prefix="index-")
        try:
            with os.fdopen(fd, 'w', encoding="utf-8") as f:
                f.write(content)
            logger.debug(f"Prepared {relative} with base href '{self.base_path}'")
            yield Path(temp_name)
        finally:
            Path(temp_name).unlink(missing_ok=True)
