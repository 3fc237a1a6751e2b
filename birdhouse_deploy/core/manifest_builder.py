"""Collects the project files that are uploaded and cached"""

import logging
from pathlib import Path
from typing import Iterable, List

from .path_resolver import PathResolver
from ..api.exceptions import MissingFilesError
from ..constants import CACHE_FILE, DEFAULT_FILES_TO_CACHE, FRAMEWORK_CACHED_DIRS
from ..models.config import PipelineConfig
from ..models.manifest import FileManifest
from ..utils.file_utils import to_posix, walk_files

logger = logging.getLogger(__name__)


class ManifestBuilder:
    """Builds the file manifest of a project

    The manifest is seeded with the framework's fixed files and extended with
    every file below the configured directories.
    """

    def __init__(self, path_resolver: PathResolver, pipeline: PipelineConfig):
        """Initialize manifest builder

        Args:
            path_resolver: Resolver of the project paths
            pipeline: Pipeline configuration
        """
        self.path_resolver = path_resolver
        self.pipeline = pipeline
        self._ignored = {ext.lower() for ext in pipeline.ignored_file_types}

    @property
    def directories(self) -> List[str]:
        """Directories walked for the manifest, configured ones first"""
        dirs = list(self.pipeline.directories_to_include)
        dirs.extend(d for d in FRAMEWORK_CACHED_DIRS if d not in dirs)
        return dirs

    def is_ignored(self, path: Path) -> bool:
        return path.suffix.lower() in self._ignored

    def read_directory(self, directory: str) -> List[str]:
        """Project-relative paths of the non-ignored files below ``directory``

        A missing directory is created empty. The walk starts below the
        project root without resolving symlinks, so a symlinked directory
        keeps its project-relative paths.
        """
        root = self.path_resolver.project_root / directory
        if not root.exists():
            logger.debug(f"Creating missing directory {directory}")
            root.mkdir(parents=True, exist_ok=True)
            return []

        base = self.path_resolver.project_root
        return [
            to_posix(path, base)
            for path in walk_files(root)
            if not self.is_ignored(path)
        ]

    def build(self) -> FileManifest:
        """Build the manifest

        Returns:
            Sorted, duplicate-free manifest with per-extension statistics
        """
        files = list(DEFAULT_FILES_TO_CACHE)
        for directory in self.directories:
            files.extend(self.read_directory(directory))

        manifest = FileManifest(files=files)

        for relative in manifest:
            path = self.path_resolver.resolve(relative)
            if path.is_file():
                manifest.record(path.suffix, path.stat().st_size)

        logger.info(f"Manifest contains {len(manifest)} files")
        return manifest

    def cache_entries(self, manifest: FileManifest) -> List[str]:
        """Manifest entries the service worker caches"""
        return manifest.cache_entries(self.pipeline.directories_to_exclude_from_cache)

    def check_files_exist(self, manifest: FileManifest) -> None:
        """Fail when any manifest file is missing on disk

        Raises:
            MissingFilesError: Listing every missing path
        """
        missing = [
            relative for relative in manifest
            if not self.path_resolver.resolve(relative).is_file()
        ]
        if missing:
            raise MissingFilesError(missing)

    def write_cache_file(self, entries: Iterable[str]) -> Path:
        """Render the cache list into ``Birdhouse/filesToCache.js``"""
        cache_file = self.path_resolver.cache_file
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        cache_file.write_text(FileManifest.render_cache_list(entries), encoding="utf-8")
        logger.info(f"Wrote cache list to {CACHE_FILE}")
        return cache_file

    def compute_cache_size(self, entries: Iterable[str]) -> int:
        """Bytes the service worker downloads: cache list plus cached files"""
        total = 0
        for relative in set(entries) | {CACHE_FILE}:
            path = self.path_resolver.resolve(relative)
            if path.is_file():
                total += path.stat().st_size
        return total

    def collect_directory(self, directory: str) -> List[str]:
        """Files of ``directory`` to upload without caching them

        Unlike :meth:`read_directory` nothing is filtered by extension and a
        missing directory yields an empty list.
        """
        if not directory:
            return []

        root = self.path_resolver.project_root / directory
        if not root.is_dir():
            return []

        return [to_posix(path, self.path_resolver.project_root) for path in walk_files(root)]
