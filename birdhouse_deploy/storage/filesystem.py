"""Filesystem storage backend implementation"""

import shutil
from pathlib import Path
from typing import List, Optional, Dict, Any, Callable

import aiofiles

from .base import StorageBackend
from ..api.exceptions import StorageError
from ..utils.async_utils import run_blocking

DEFAULT_CHUNK_SIZE = 1024 * 1024


class FileSystemStorage(StorageBackend):
    """Local filesystem storage implementation

    Remote paths are mapped below ``base_path``; the local build writes into
    the dist directory this way.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize filesystem storage

        Args:
            config: Configuration including:
                - base_path: Directory that stands for the remote root
                - name: Display name
        """
        super().__init__(config)
        base_path = self.config.get('base_path')
        if not base_path:
            raise StorageError("Filesystem storage requires a base_path")
        self.base_path = Path(base_path)

    def _get_full_path(self, remote_path: str) -> Path:
        return self.base_path / remote_path.lstrip("/")

    async def _do_initialize(self) -> None:
        """Initialize filesystem storage (ensure base directory exists)"""
        self.base_path.mkdir(parents=True, exist_ok=True)

    async def _copy(self, src: Path, dst: Path,
                    callback: Optional[Callable[[int, int], None]]) -> None:
        total_size = src.stat().st_size
        bytes_transferred = 0

        async with aiofiles.open(src, 'rb') as fsrc:
            async with aiofiles.open(dst, 'wb') as fdst:
                while True:
                    chunk = await fsrc.read(DEFAULT_CHUNK_SIZE)
                    if not chunk:
                        break

                    await fdst.write(chunk)
                    bytes_transferred += len(chunk)

                    if callback:
                        callback(bytes_transferred, total_size)

    async def upload(self,
                     local_path: Path,
                     remote_path: str,
                     callback: Optional[Callable[[int, int], None]] = None) -> None:
        """Copy a local file into the storage directory"""
        await self.initialize()

        local_path = Path(local_path)
        full_path = self._get_full_path(remote_path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            await self._copy(local_path, full_path, callback)
        except OSError as e:
            raise StorageError(f"Upload of {local_path} to {remote_path} failed: {e}")

    async def download(self,
                       remote_path: str,
                       local_path: Path,
                       callback: Optional[Callable[[int, int], None]] = None) -> None:
        """Copy a file out of the storage directory"""
        await self.initialize()

        full_path = self._get_full_path(remote_path)
        if not full_path.is_file():
            raise StorageError(f"Remote file not found: {remote_path}")

        local_path = Path(local_path)
        try:
            local_path.parent.mkdir(parents=True, exist_ok=True)
            await self._copy(full_path, local_path, callback)
        except OSError as e:
            raise StorageError(f"Download of {remote_path} failed: {e}")

    async def exists(self, remote_path: str) -> bool:
        """Check if file or directory exists"""
        await self.initialize()
        return self._get_full_path(remote_path).exists()

    async def is_dir(self, remote_path: str) -> bool:
        await self.initialize()
        return self._get_full_path(remote_path).is_dir()

    async def make_dirs(self, remote_path: str) -> None:
        await self.initialize()
        try:
            self._get_full_path(remote_path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Could not create directory {remote_path}: {e}")

    async def delete(self, remote_path: str) -> None:
        """Delete file or directory tree"""
        await self.initialize()
        full_path = self._get_full_path(remote_path)

        try:
            if full_path.is_dir():
                await run_blocking(shutil.rmtree, full_path)
            elif full_path.exists():
                full_path.unlink()
        except OSError as e:
            raise StorageError(f"Delete of {remote_path} failed: {e}")

    async def list(self, prefix: str = "/") -> List[str]:
        """List files below a directory"""
        await self.initialize()

        search_path = self._get_full_path(prefix)
        results = []

        if search_path.is_dir():
            for item in sorted(search_path.rglob("*")):
                if item.is_file():
                    relative = item.relative_to(self.base_path).as_posix()
                    results.append("/" + relative)
        elif search_path.is_file():
            results.append("/" + search_path.relative_to(self.base_path).as_posix())

        return results
