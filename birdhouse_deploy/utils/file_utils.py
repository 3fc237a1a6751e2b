# birdhouse_deploy/utils/file_utils.py
"""File operation utilities"""

import os
import shutil
from pathlib import Path
from typing import Iterator, List


def to_posix(path: Path, base: Path) -> str:
    """Relative POSIX form of ``path`` below ``base``"""
    return path.relative_to(base).as_posix()


def walk_files(directory: Path) -> Iterator[Path]:
    """
    Yield files below ``directory`` in a stable order

    Entries whose name starts with a dot are skipped, directories included.
    ``directory`` itself may be a symlink; symlinked subdirectories
    below it are not descended into.

    Args:
        directory: Directory to walk
    """
    for root, dirs, files in os.walk(directory, followlinks=False):
        dirs[:] = sorted(d for d in dirs if not d.startswith('.'))
        for name in sorted(files):
            if not name.startswith('.'):
                yield Path(root) / name


def copy_tree_files(src_dir: Path, dst_dir: Path, overwrite: bool = True) -> List[Path]:
    """
    Copy every file of ``src_dir`` into ``dst_dir``, keeping relative paths

    Args:
        src_dir: Source directory
        dst_dir: Destination directory
        overwrite: Replace files that already exist

    Returns:
        Destination paths that were written
    """
    written = []
    for src in sorted(p for p in src_dir.rglob('*') if p.is_file()):
        dst = dst_dir / src.relative_to(src_dir)
        if dst.exists() and not overwrite:
            continue
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)
        written.append(dst)
    return written


def clear_directory(directory: Path) -> None:
    """
    Remove everything inside ``directory``, keeping the directory itself

    Args:
        directory: Directory to clear (created when missing)
    """
    directory.mkdir(parents=True, exist_ok=True)
    for child in directory.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
