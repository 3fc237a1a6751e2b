"""Tests for image compression and icon generation."""

import os

import pytest
from PIL import Image

from birdhouse_deploy.constants import APP_ICON_SIZES
from birdhouse_deploy.core import ImageProcessor
from birdhouse_deploy.models.result import OperationStatus


def make_image(path, size=(1600, 1200), fmt="PNG", mode="RGBA"):
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new(mode, size, (200, 40, 40, 255) if mode == "RGBA" else (200, 40, 40)).save(path, fmt)
    return path


@pytest.mark.asyncio
async def test_compress_directory_resizes_to_800_wide(tmp_path) -> None:
    source = tmp_path / "uncompressed"
    target = tmp_path / "uploads"
    make_image(source / "a.png")
    make_image(source / "nested" / "b.jpg", size=(400, 200), fmt="JPEG", mode="RGB")

    report = await ImageProcessor(tmp_path).compress_directory(source, target)

    assert report.status == OperationStatus.SUCCESS
    assert sorted(report.processed) == ["uncompressed/a.png", "uncompressed/nested/b.jpg"]
    with Image.open(target / "a.png") as image:
        assert image.size == (800, 600)
        assert image.format == "PNG"
    with Image.open(target / "nested" / "b.jpg") as image:
        assert image.size == (800, 400)
        assert image.format == "JPEG"


@pytest.mark.asyncio
async def test_compress_skips_up_to_date_files(tmp_path) -> None:
    source = make_image(tmp_path / "uncompressed" / "a.png")
    target = make_image(tmp_path / "uploads" / "a.png", size=(10, 10))
    os.utime(source, (1_000_000, 1_000_000))

    report = await ImageProcessor(tmp_path).compress_directory(source.parent, target.parent)

    assert report.skipped == ["uncompressed/a.png"]
    assert report.status == OperationStatus.SKIPPED
    with Image.open(target) as image:
        assert image.size == (10, 10)


@pytest.mark.asyncio
async def test_broken_image_is_collected(tmp_path) -> None:
    source = tmp_path / "uncompressed"
    make_image(source / "good.png")
    (source / "broken.jpg").write_bytes(b"not an image")

    report = await ImageProcessor(tmp_path).compress_directory(source, tmp_path / "uploads")

    assert report.status == OperationStatus.PARTIAL
    assert report.failed == ["uncompressed/broken.jpg"]
    assert report.processed == ["uncompressed/good.png"]


@pytest.mark.asyncio
async def test_missing_source_directory_is_skipped(tmp_path) -> None:
    report = await ImageProcessor(tmp_path).compress_directory(tmp_path / "none", tmp_path / "out")

    assert report.status == OperationStatus.SKIPPED


@pytest.mark.asyncio
async def test_generate_sizes(tmp_path) -> None:
    source = make_image(tmp_path / "logo.png", size=(300, 200))

    report = await ImageProcessor(tmp_path).generate_sizes(
        source, tmp_path / "icons", "Icon", [16, 48]
    )

    assert report.status == OperationStatus.SUCCESS
    for size in (16, 48):
        with Image.open(tmp_path / "icons" / f"Icon-{size}x{size}.png") as image:
            assert image.size == (size, size)


@pytest.mark.asyncio
async def test_generate_sizes_without_source_warns(tmp_path) -> None:
    report = await ImageProcessor(tmp_path).generate_sizes(
        tmp_path / "missing.png", tmp_path / "icons", "Icon", [16]
    )

    assert report.status == OperationStatus.SKIPPED
    assert report.warnings
    assert not (tmp_path / "icons").exists()


@pytest.mark.asyncio
async def test_generate_app_icon(tmp_path) -> None:
    source = make_image(tmp_path / "Logo.png", size=(512, 512))

    report = await ImageProcessor(tmp_path).generate_app_icon(source, tmp_path / "app-icons")

    assert report.processed == ["app-icons/Logo.ico"]
    with Image.open(tmp_path / "app-icons" / "Logo.ico") as icon:
        assert icon.format == "ICO"
        assert max(icon.info["sizes"]) == (max(APP_ICON_SIZES), max(APP_ICON_SIZES))
