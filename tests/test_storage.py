"""Tests for storage backends."""

import pytest

from birdhouse_deploy.api.exceptions import StorageError
from birdhouse_deploy.constants import Target
from birdhouse_deploy.models.config import SftpConfig
from birdhouse_deploy.storage import FileSystemStorage, SftpStorage, StorageFactory
from tests.conftest import write


@pytest.mark.asyncio
async def test_upload_list_and_download(remote, tmp_path) -> None:
    local = write(tmp_path, "local/index.html", "hello")

    async with remote:
        await remote.upload(local, "/app/index.html")
        await remote.upload(local, "/app/src/copy.html")

        assert await remote.list("/app") == ["/app/index.html", "/app/src/copy.html"]
        assert await remote.is_dir("/app/src")

        await remote.download("/app/src/copy.html", tmp_path / "back.html")

    assert (tmp_path / "back.html").read_text() == "hello"


@pytest.mark.asyncio
async def test_copy_tree_and_delete(remote, tmp_path) -> None:
    write(tmp_path, "server/app/a.txt", "a")
    write(tmp_path, "server/app/deep/b.txt", "b")

    async with remote:
        count = await remote.copy_tree("/app", "/app_BACKUP")
        assert count == 2
        assert await remote.list("/app_BACKUP") == ["/app_BACKUP/a.txt", "/app_BACKUP/deep/b.txt"]

        await remote.delete("/app")
        assert not await remote.exists("/app")


@pytest.mark.asyncio
async def test_download_of_missing_file_raises(remote, tmp_path) -> None:
    with pytest.raises(StorageError):
        await remote.download("/nothing.txt", tmp_path / "x")


def test_filesystem_requires_base_path() -> None:
    with pytest.raises(StorageError):
        FileSystemStorage({})


def test_factory_creates_backend_per_target(tmp_path) -> None:
    local = StorageFactory.create_for_target(Target.LOCAL, dist_dir=tmp_path / "dist")
    assert isinstance(local, FileSystemStorage)
    assert local.base_path == tmp_path / "dist"

    sftp = StorageFactory.create_for_target(
        Target.STAGING, sftp_config=SftpConfig(host="example.org", port=2222, username="deploy")
    )
    assert isinstance(sftp, SftpStorage)
    assert sftp.display_name == "sftp://deploy@example.org:2222"

    with pytest.raises(ValueError):
        StorageFactory.create_for_target(Target.PRODUCTION)
    with pytest.raises(ValueError):
        StorageFactory.create_for_target(Target.NONE)
