"""Exclusive run lock of a project"""

import logging
import os
import time
from pathlib import Path
from typing import Optional

from ..api.exceptions import LockError

logger = logging.getLogger(__name__)

# An empty lock file younger than this is still being written by its holder
PID_WRITE_GRACE = 10  # seconds


def is_process_alive(pid: int) -> bool:
    """Check whether a process with ``pid`` exists"""
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists, but owned by another user
        return True
    return True


class PipelineLock:
    """Lock file holding the PID of the running pipeline

    Use as a context manager; the lock is released on normal exit and when an
    exception (Ctrl-C included) leaves the block.
    """

    def __init__(self, lock_path: Path):
        self.lock_path = lock_path
        self._held = False

    def read_pid(self) -> Optional[int]:
        """PID stored in the lock file, ``None`` when unreadable"""
        try:
            return int(self.lock_path.read_text().strip())
        except (OSError, ValueError):
            return None

    def _age(self) -> float:
        """Seconds since the lock file was last written"""
        try:
            return time.time() - self.lock_path.stat().st_mtime
        except OSError:
            return PID_WRITE_GRACE

    def _create(self) -> None:
        fd = os.open(str(self.lock_path), os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        with os.fdopen(fd, 'w') as f:
            f.write(str(os.getpid()))

    def acquire(self) -> None:
        """Create the lock file

        Raises:
            LockError: If a live process holds the lock
        """
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._create()
        except FileExistsError:
            pid = self.read_pid()
            if pid is None and self._age() < PID_WRITE_GRACE:
                raise LockError(str(self.lock_path))
            if pid is not None and is_process_alive(pid):
                raise LockError(str(self.lock_path), pid)

            logger.warning(f"Removing stale lock {self.lock_path} (process {pid} is gone)")
            self.lock_path.unlink(missing_ok=True)
            try:
                self._create()
            except FileExistsError:
                raise LockError(str(self.lock_path), self.read_pid())

        self._held = True
        logger.debug(f"Acquired lock {self.lock_path}")

    def release(self) -> None:
        """Remove the lock file if this process holds it"""
        if self._held:
            self.lock_path.unlink(missing_ok=True)
            self._held = False
            logger.debug(f"Released lock {self.lock_path}")

    def __enter__(self) -> 'PipelineLock':
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
