"""Upload batch composition and ordering"""

import fnmatch
import posixpath
from typing import Iterable, List, Optional, Sequence

from ..constants import CACHE_FILE, UPLOAD_LAST_PATTERNS


def _tail_rank(path: str) -> Optional[int]:
    name = posixpath.basename(path)
    for rank, pattern in enumerate(UPLOAD_LAST_PATTERNS):
        if fnmatch.fnmatchcase(name, pattern):
            return rank
    return None


def order_for_upload(files: Sequence[str]) -> List[str]:
    """Order files so the config scripts and the service worker go last

    Ordinary files keep their input order. Files named ``config.*``,
    ``config-sw.*`` and ``service-worker.*`` follow in that order, so the
    service worker is always the final upload.

    Args:
        files: Project-relative paths

    Returns:
        Reordered copy of ``files``
    """
    head = [f for f in files if _tail_rank(f) is None]
    tail = [f for f in files if _tail_rank(f) is not None]
    tail.sort(key=_tail_rank)
    return head + tail


def build_upload_batch(manifest_files: Iterable[str],
                       extra_files: Iterable[str] = (),
                       skip_dir: Optional[str] = None) -> List[str]:
    """Files of one upload run, de-duplicated and ordered

    Args:
        manifest_files: Manifest entries
        extra_files: Files uploaded without being cached (database files)
        skip_dir: Directory whose manifest entries are left out

    Returns:
        Ordered upload batch
    """
    prefix = skip_dir.strip("/") if skip_dir else ""
    batch = []
    seen = set()

    candidates = list(manifest_files) + [CACHE_FILE] + list(extra_files)
    for path in candidates:
        if prefix and (path == prefix or path.startswith(prefix + "/")):
            continue
        if path not in seen:
            seen.add(path)
            batch.append(path)

    return order_for_upload(batch)


def remote_directories(files: Iterable[str], root: str) -> List[str]:
    """Remote directories needed by ``files``, shallow ones first

    Args:
        files: Project-relative paths
        root: Remote application directory, e.g. ``/my_app``

    Returns:
        Absolute remote directory paths, each parent before its children
    """
    dirs = set()
    for path in files:
        parent = posixpath.dirname(path)
        while parent:
            dirs.add(parent)
            parent = posixpath.dirname(parent)

    ordered = sorted(dirs, key=lambda d: (d.count("/"), d))
    return [posixpath.join(root, d) for d in ordered]
