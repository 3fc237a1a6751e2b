"""File manifest model"""

from dataclasses import dataclass, field
from typing import Dict, List, Iterable


@dataclass
class ExtensionStats:
    """Count and total byte size of one file extension"""
    count: int = 0
    size: int = 0


@dataclass
class FileManifest:
    """Sorted, duplicate-free list of project-relative POSIX paths

    The same list is used for upload planning and, minus the excluded
    directories, for the service worker cache list.
    """

    files: List[str] = field(default_factory=list)
    extensions: Dict[str, ExtensionStats] = field(default_factory=dict)

    def __post_init__(self):
        self.files = sorted(set(self.files))

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self):
        return iter(self.files)

    def __contains__(self, path: str) -> bool:
        return path in self.files

    def add(self, paths: Iterable[str]) -> None:
        """Add paths, keeping the list sorted and unique"""
        self.files = sorted(set(self.files).union(paths))

    def record(self, extension: str, size: int) -> None:
        """Account one file of ``extension`` ("" for none) with ``size`` bytes"""
        stats = self.extensions.setdefault(extension, ExtensionStats())
        stats.count += 1
        stats.size += size

    @property
    def total_size(self) -> int:
        return sum(s.size for s in self.extensions.values())

    def cache_entries(self, excluded_dirs: Iterable[str]) -> List[str]:
        """Entries that are not inside any of ``excluded_dirs``

        A directory matches on path boundaries, so ``img/up`` does not
        exclude ``img/uploads/a.jpg``.
        """
        prefixes = [d.strip("/") for d in excluded_dirs if d and d.strip("/")]
        return [
            f for f in self.files
            if not any(f == p or f.startswith(p + "/") for p in prefixes)
        ]

    @staticmethod
    def render_cache_list(entries: Iterable[str]) -> str:
        """Render entries as the service worker's ``self.filesToCache`` script"""
        lines = "\n".join(f"'/{entry}'," for entry in entries)
        return f"self.filesToCache = [\n{lines}\n];"
