"""Tests for the exclusive pipeline lock."""

import os
import time

import pytest

from birdhouse_deploy.api.exceptions import LockError
from birdhouse_deploy.core import PipelineLock
from birdhouse_deploy.core.lock import PID_WRITE_GRACE


def test_lock_holds_current_pid(tmp_path) -> None:
    lock_path = tmp_path / "Birdhouse" / "pipeline.lock"

    with PipelineLock(lock_path) as lock:
        assert lock.read_pid() == os.getpid()

    assert not lock_path.exists()


def test_second_run_is_rejected(tmp_path) -> None:
    lock_path = tmp_path / "pipeline.lock"

    with PipelineLock(lock_path):
        with pytest.raises(LockError) as exc_info:
            PipelineLock(lock_path).acquire()

    assert exc_info.value.pid == os.getpid()


def test_stale_lock_is_replaced(tmp_path) -> None:
    lock_path = tmp_path / "pipeline.lock"
    lock_path.write_text("999999999")

    with PipelineLock(lock_path) as lock:
        assert lock.read_pid() == os.getpid()


def test_lock_is_released_on_error(tmp_path) -> None:
    lock_path = tmp_path / "pipeline.lock"

    with pytest.raises(RuntimeError):
        with PipelineLock(lock_path):
            raise RuntimeError("boom")

    assert not lock_path.exists()


def test_rejected_lock_leaves_holder_file(tmp_path) -> None:
    lock_path = tmp_path / "pipeline.lock"
    holder = PipelineLock(lock_path)
    holder.acquire()

    other = PipelineLock(lock_path)
    with pytest.raises(LockError):
        other.acquire()
    other.release()

    assert lock_path.exists()
    holder.release()


def test_lock_being_written_counts_as_held(tmp_path) -> None:
    lock_path = tmp_path / "pipeline.lock"
    lock_path.write_text("")

    with pytest.raises(LockError) as exc_info:
        PipelineLock(lock_path).acquire()

    assert exc_info.value.pid is None
    assert lock_path.exists()


def test_old_empty_lock_is_replaced(tmp_path) -> None:
    lock_path = tmp_path / "pipeline.lock"
    lock_path.write_text("")
    long_ago = time.time() - PID_WRITE_GRACE - 60
    os.utime(lock_path, (long_ago, long_ago))

    with PipelineLock(lock_path) as lock:
        assert lock.read_pid() == os.getpid()
