"""Tests for project bootstrap and icon generation."""

import pytest
import yaml
from PIL import Image

from birdhouse_deploy.models.result import OperationStatus
from birdhouse_deploy.services import IconKind, ProjectService
from tests.conftest import write


def set_pipeline_values(project, **values) -> None:
    path = project / "pipeline-config.yaml"
    data = yaml.safe_load(path.read_text())
    data.update(values)
    path.write_text(yaml.safe_dump(data, sort_keys=False))


def make_logo(project, relative: str, fmt: str = "PNG") -> None:
    path = project / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (320, 240), (20, 120, 60)).save(path, fmt)


@pytest.fixture
def small_icons(project):
    """Logos in place and small icon sizes configured"""
    make_logo(project, "img/logos-originals/Birdhouse-Logo.jpg", "JPEG")
    make_logo(project, "img/logos-originals/Birdhouse-Logo.png")
    set_pipeline_values(project, favicon_sizes=[16, 32], manifest_icon_sizes=[48])
    return project


def test_copy_root_files_overwrites(path_resolver, project) -> None:
    write(project, "Birdhouse/root/robots.txt", "User-agent: *\n")
    write(project, "Birdhouse/root/well-known/info.txt", "info")

    copied = ProjectService(path_resolver).copy_root_files()

    assert copied == 2
    assert (project / "robots.txt").read_text() == "User-agent: *\n"
    assert (project / "well-known/info.txt").read_text() == "info"


def test_copy_root_files_without_directory(path_resolver) -> None:
    assert ProjectService(path_resolver).copy_root_files() == 0


@pytest.mark.asyncio
async def test_init_copies_template_without_overwriting(path_resolver, small_icons) -> None:
    project = small_icons
    write(project, "Birdhouse/root_EXAMPLE/index.html", "template index")
    write(project, "Birdhouse/root_EXAMPLE/about.html", "about")
    write(project, "Birdhouse/root_EXAMPLE/.htaccess", "RewriteBase LOCALHOST_PATH/\n")

    result = await ProjectService(path_resolver).init_project()

    assert result.status == OperationStatus.SUCCESS
    assert (project / "index.html").read_text() != "template index"
    assert (project / "about.html").read_text() == "about"
    assert (project / ".htaccess").read_text() == "RewriteBase /my_app/\n"
    assert (project / "config.yaml").exists()
    assert (project / "img/favicons/Favicon-32x32.png").exists()
    assert (project / "img/icons/Icon-48x48.png").exists()
    assert not (project / "img/app-icons").exists()


@pytest.mark.asyncio
async def test_init_without_template_is_skipped(path_resolver, project) -> None:
    result = await ProjectService(path_resolver).init_project()

    assert result.status == OperationStatus.SKIPPED
    assert "root_EXAMPLE" in result.warnings[0]
    assert not (project / "config.yaml").exists()


@pytest.mark.asyncio
async def test_manifest_icons_use_manifest_sizes(path_resolver, small_icons) -> None:
    reports = await ProjectService(path_resolver).generate_icons(IconKind.MANIFEST)

    assert len(reports) == 1
    assert reports[0].processed == ["img/icons/Icon-48x48.png"]


@pytest.mark.asyncio
async def test_all_icons_include_app_icon(path_resolver, small_icons) -> None:
    reports = await ProjectService(path_resolver).generate_icons(IconKind.ALL)

    assert [r.status for r in reports] == [OperationStatus.SUCCESS] * 3
    assert (small_icons / "img/app-icons/Birdhouse-Logo.ico").exists()


@pytest.mark.asyncio
async def test_unconfigured_app_icon_fails(path_resolver, project) -> None:
    set_pipeline_values(project, app_icon_source_path="")

    reports = await ProjectService(path_resolver).generate_icons(IconKind.APP)

    assert reports[0].status == OperationStatus.FAILED
