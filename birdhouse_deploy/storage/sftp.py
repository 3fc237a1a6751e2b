"""SFTP storage backend implementation"""

import asyncio
import logging
import posixpath
import stat
from pathlib import Path
from typing import List, Optional, Dict, Any, Callable

import paramiko

from .base import StorageBackend
from ..api.exceptions import StorageError
from ..constants import DEFAULT_SFTP_PORT, DEFAULT_SFTP_TIMEOUT

logger = logging.getLogger(__name__)


class SftpStorage(StorageBackend):
    """Remote web server reached over SFTP

    paramiko is synchronous; every call runs in the default executor.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize SFTP storage

        Args:
            config: SFTP configuration including:
                - host: Server host name
                - port: SSH port
                - username: Login user
                - password: Login password
                - private_key: Optional key file
                - strict_host_keys: Reject unknown host keys
        """
        super().__init__(config)
        self.client: Optional[paramiko.SSHClient] = None
        self.sftp: Optional[paramiko.SFTPClient] = None
        self.host = self.config.get('host', 'localhost')
        self.port = int(self.config.get('port', DEFAULT_SFTP_PORT))

    @property
    def display_name(self) -> str:
        return f"sftp://{self.config.get('username', '')}@{self.host}:{self.port}"

    async def _run(self, func, *args):
        return await asyncio.get_event_loop().run_in_executor(None, func, *args)

    async def _do_initialize(self) -> None:
        """Open the SSH connection and the SFTP session"""
        def _connect():
            client = paramiko.SSHClient()
            client.load_system_host_keys()
            if self.config.get('strict_host_keys'):
                client.set_missing_host_key_policy(paramiko.RejectPolicy())
            else:
                client.set_missing_host_key_policy(paramiko.WarningPolicy())

            client.connect(
                hostname=self.host,
                port=self.port,
                username=self.config.get('username'),
                password=self.config.get('password') or None,
                key_filename=self.config.get('private_key') or None,
                timeout=DEFAULT_SFTP_TIMEOUT,
            )
            return client, client.open_sftp()

        try:
            self.client, self.sftp = await self._run(_connect)
        except (paramiko.SSHException, OSError) as e:
            raise StorageError(f"Failed to connect to {self.display_name}: {e}")

        logger.info(f"Connected to {self.display_name}")

    async def _do_close(self) -> None:
        """Close the SFTP session and the SSH connection"""
        def _close():
            if self.sftp:
                self.sftp.close()
            if self.client:
                self.client.close()

        await self._run(_close)
        self.sftp = None
        self.client = None
        logger.info("SFTP connection closed")

    async def upload(self,
                     local_path: Path,
                     remote_path: str,
                     callback: Optional[Callable[[int, int], None]] = None) -> None:
        """Upload file over SFTP"""
        await self.initialize()
        try:
            await self._run(lambda: self.sftp.put(str(local_path), remote_path, callback=callback))
        except (paramiko.SSHException, OSError) as e:
            raise StorageError(f"Upload of {local_path} to {remote_path} failed: {e}")

    async def download(self,
                       remote_path: str,
                       local_path: Path,
                       callback: Optional[Callable[[int, int], None]] = None) -> None:
        """Download file over SFTP"""
        await self.initialize()
        Path(local_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            await self._run(lambda: self.sftp.get(remote_path, str(local_path), callback=callback))
        except (paramiko.SSHException, OSError) as e:
            raise StorageError(f"Download of {remote_path} failed: {e}")

    async def _stat(self, remote_path: str) -> Optional[paramiko.SFTPAttributes]:
        await self.initialize()
        try:
            return await self._run(self.sftp.stat, remote_path)
        except FileNotFoundError:
            return None
        except (paramiko.SSHException, OSError) as e:
            raise StorageError(f"Could not stat {remote_path}: {e}")

    async def exists(self, remote_path: str) -> bool:
        return await self._stat(remote_path) is not None

    async def is_dir(self, remote_path: str) -> bool:
        attributes = await self._stat(remote_path)
        return attributes is not None and stat.S_ISDIR(attributes.st_mode)

    async def make_dirs(self, remote_path: str) -> None:
        """Create a directory and its missing parents, shallow first"""
        await self.initialize()

        current = "/" if remote_path.startswith("/") else ""
        for part in [p for p in remote_path.split("/") if p]:
            current = posixpath.join(current, part)
            if await self.is_dir(current):
                continue
            try:
                await self._run(self.sftp.mkdir, current)
            except (paramiko.SSHException, OSError) as e:
                raise StorageError(f"Could not create directory {current}: {e}")

    def _remove_tree(self, remote_path: str) -> None:
        for entry in self.sftp.listdir_attr(remote_path):
            child = posixpath.join(remote_path, entry.filename)
            if stat.S_ISDIR(entry.st_mode):
                self._remove_tree(child)
            else:
                self.sftp.remove(child)
        self.sftp.rmdir(remote_path)

    async def delete(self, remote_path: str) -> None:
        """Delete a remote file or directory tree"""
        attributes = await self._stat(remote_path)
        if attributes is None:
            return

        try:
            if stat.S_ISDIR(attributes.st_mode):
                await self._run(self._remove_tree, remote_path)
            else:
                await self._run(self.sftp.remove, remote_path)
        except (paramiko.SSHException, OSError) as e:
            raise StorageError(f"Delete of {remote_path} failed: {e}")

    def _walk(self, remote_path: str) -> List[str]:
        files = []
        for entry in sorted(self.sftp.listdir_attr(remote_path), key=lambda e: e.filename):
            child = posixpath.join(remote_path, entry.filename)
            if stat.S_ISDIR(entry.st_mode):
                files.extend(self._walk(child))
            else:
                files.append(child)
        return files

    async def list(self, prefix: str = "/") -> List[str]:
        """List remote files below a directory recursively"""
        if not await self.is_dir(prefix):
            return [prefix] if await self.exists(prefix) else []

        try:
            return await self._run(self._walk, prefix)
        except (paramiko.SSHException, OSError) as e:
            raise StorageError(f"Listing of {prefix} failed: {e}")
