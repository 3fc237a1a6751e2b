# birdhouse_deploy/storage/base.py
"""Storage backend abstract base class"""

import posixpath
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Dict, Any, Callable


class StorageBackend(ABC):
    """Abstract base class for all storage backends

    Remote paths are absolute POSIX paths such as ``/my_app/index.html``.
    Failing operations raise :class:`StorageError`.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize storage backend

        Args:
            config: Backend-specific configuration
        """
        self.config = config or {}
        self._initialized = False

    @property
    def display_name(self) -> str:
        return self.config.get('name', self.__class__.__name__)

    async def initialize(self) -> None:
        """Initialize storage backend (e.g., establish connections)"""
        if not self._initialized:
            await self._do_initialize()
            self._initialized = True

    @abstractmethod
    async def _do_initialize(self) -> None:
        """Actual initialization logic to be implemented by subclasses"""
        pass

    @abstractmethod
    async def upload(self,
                     local_path: Path,
                     remote_path: str,
                     callback: Optional[Callable[[int, int], None]] = None) -> None:
        """
        Upload file to storage

        Args:
            local_path: Local file path
            remote_path: Remote storage path
            callback: Progress callback (bytes_transferred, total_bytes)
        """
        pass

    @abstractmethod
    async def download(self,
                       remote_path: str,
                       local_path: Path,
                       callback: Optional[Callable[[int, int], None]] = None) -> None:
        """
        Download file from storage

        Args:
            remote_path: Remote storage path
            local_path: Local file path
            callback: Progress callback (bytes_transferred, total_bytes)
        """
        pass

    @abstractmethod
    async def exists(self, remote_path: str) -> bool:
        """
        Check if a file or directory exists in storage

        Args:
            remote_path: Remote storage path

        Returns:
            True if exists
        """
        pass

    @abstractmethod
    async def is_dir(self, remote_path: str) -> bool:
        """Check if ``remote_path`` is a directory"""
        pass

    @abstractmethod
    async def make_dirs(self, remote_path: str) -> None:
        """
        Create a directory and its missing parents

        Args:
            remote_path: Remote directory path
        """
        pass

    @abstractmethod
    async def delete(self, remote_path: str) -> None:
        """
        Delete a file, or a directory recursively

        Args:
            remote_path: Remote storage path
        """
        pass

    @abstractmethod
    async def list(self, prefix: str = "/") -> List[str]:
        """
        List files below a directory recursively

        Args:
            prefix: Remote directory

        Returns:
            Remote file paths
        """
        pass

    async def upload_directory(self,
                               local_dir: Path,
                               remote_prefix: str,
                               callback: Optional[Callable[[str, int, int], None]] = None) -> int:
        """
        Upload entire directory to storage

        Args:
            local_dir: Local directory path
            remote_prefix: Remote path prefix
            callback: Progress callback (filename, bytes_transferred, total_bytes)

        Returns:
            Number of uploaded files
        """
        if not local_dir.is_dir():
            raise ValueError(f"Not a directory: {local_dir}")

        files = sorted(p for p in local_dir.rglob("*") if p.is_file())
        created = set()
        count = 0

        for local_file in files:
            relative_path = local_file.relative_to(local_dir).as_posix()
            remote_path = posixpath.join(remote_prefix, relative_path)

            remote_dir = posixpath.dirname(remote_path)
            if remote_dir not in created:
                await self.make_dirs(remote_dir)
                created.add(remote_dir)

            file_callback = None
            if callback:
                file_callback = lambda transferred, total, name=relative_path: callback(
                    name, transferred, total
                )

            await self.upload(local_file, remote_path, file_callback)
            count += 1

        return count

    async def download_directory(self,
                                 remote_prefix: str,
                                 local_dir: Path,
                                 callback: Optional[Callable[[str, int, int], None]] = None) -> int:
        """
        Download directory from storage

        Args:
            remote_prefix: Remote path prefix
            local_dir: Local directory path
            callback: Progress callback (filename, bytes_transferred, total_bytes)

        Returns:
            Number of downloaded files
        """
        files = await self.list(remote_prefix)

        for remote_path in files:
            relative_path = posixpath.relpath(remote_path, remote_prefix)
            local_path = local_dir / relative_path
            local_path.parent.mkdir(parents=True, exist_ok=True)

            file_callback = None
            if callback:
                file_callback = lambda transferred, total, name=relative_path: callback(
                    name, transferred, total
                )

            await self.download(remote_path, local_path, file_callback)

        return len(files)

    async def copy_tree(self, source: str, destination: str) -> int:
        """
        Copy a remote directory by downloading it and uploading it again

        Args:
            source: Remote source directory
            destination: Remote destination directory

        Returns:
            Number of copied files
        """
        with tempfile.TemporaryDirectory(prefix="birdhouse-") as temp_dir:
            await self.download_directory(source, Path(temp_dir))
            await self.make_dirs(destination)
            return await self.upload_directory(Path(temp_dir), destination)

    async def close(self) -> None:
        """Close storage backend connections"""
        if self._initialized:
            await self._do_close()
            self._initialized = False

    async def _do_close(self) -> None:
        """Actual cleanup logic to be implemented by subclasses"""
        pass

    async def __aenter__(self):
        """Async context manager entry"""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
