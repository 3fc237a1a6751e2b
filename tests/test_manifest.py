"""Tests for the file manifest and its builder."""

import pytest

from birdhouse_deploy.api.exceptions import MissingFilesError
from birdhouse_deploy.constants import CACHE_FILE, DEFAULT_FILES_TO_CACHE
from birdhouse_deploy.core import ManifestBuilder
from birdhouse_deploy.models.config import PipelineConfig
from birdhouse_deploy.models.manifest import FileManifest
from tests.conftest import write


def make_builder(path_resolver, **overrides) -> ManifestBuilder:
    values = {"directories_to_include": ["assets"], "directories_to_exclude_from_cache": []}
    values.update(overrides)
    return ManifestBuilder(path_resolver, PipelineConfig(**values))


def test_ignored_types_are_left_out(path_resolver, project) -> None:
    write(project, "assets/a.js", "a")
    write(project, "assets/b.md", "b")
    write(project, "assets/c.css", "c")

    files = make_builder(path_resolver).read_directory("assets")

    assert files == ["assets/a.js", "assets/c.css"]


def test_ignored_types_match_case_insensitively(path_resolver, project) -> None:
    write(project, "assets/README.MD", "readme")

    assert make_builder(path_resolver).read_directory("assets") == []


def test_missing_directory_is_created(path_resolver, project) -> None:
    assert make_builder(path_resolver).read_directory("fonts") == []
    assert (project / "fonts").is_dir()


def test_build_seeds_defaults_sorted_and_unique(path_resolver, project) -> None:
    write(project, "assets/index.html", "dup")
    manifest = make_builder(path_resolver, directories_to_include=["assets", "assets"]).build()

    assert manifest.files == sorted(set(manifest.files))
    assert set(DEFAULT_FILES_TO_CACHE) <= set(manifest.files)
    assert "assets/index.html" in manifest
    assert (project / "Birdhouse" / "src").is_dir()


def test_build_records_extension_statistics(path_resolver, project) -> None:
    write(project, "assets/one.js", "12345")
    write(project, "assets/two.js", "123")

    manifest = make_builder(path_resolver).build()

    js = manifest.extensions[".js"]
    assert js.count >= 2
    assert manifest.total_size == sum(s.size for s in manifest.extensions.values())


def test_cache_entries_exclude_on_directory_boundaries() -> None:
    manifest = FileManifest(files=["img/up/a.jpg", "img/uploads/b.jpg", "img/up", "index.html"])

    assert manifest.cache_entries(["img/up/"]) == ["img/uploads/b.jpg", "index.html"]


def test_render_cache_list() -> None:
    rendered = FileManifest.render_cache_list(["index.html", "src/app.js"])

    assert rendered == "self.filesToCache = [\n'/index.html',\n'/src/app.js',\n];"


def test_write_cache_file(path_resolver, project) -> None:
    builder = make_builder(path_resolver)
    builder.write_cache_file(["index.html"])

    assert (project / CACHE_FILE).read_text() == "self.filesToCache = [\n'/index.html',\n];"


def test_check_files_exist_lists_every_missing_file(path_resolver, project) -> None:
    (project / "robots.txt").unlink()
    (project / "sitemap.xml").unlink()
    builder = make_builder(path_resolver)

    with pytest.raises(MissingFilesError) as exc_info:
        builder.check_files_exist(builder.build())

    assert exc_info.value.missing == ["robots.txt", "sitemap.xml"]


def test_cache_size_counts_cache_file_once(path_resolver, project) -> None:
    write(project, "index.html", "x" * 10)
    write(project, CACHE_FILE, "y" * 5)

    size = make_builder(path_resolver).compute_cache_size(["index.html", CACHE_FILE])

    assert size == 15


def test_collect_directory_keeps_every_extension(path_resolver, project) -> None:
    write(project, "database/readme.md", "notes")

    files = make_builder(path_resolver).collect_directory("database")

    assert files == ["database/data.json", "database/readme.md"]
    assert make_builder(path_resolver).collect_directory("nowhere") == []


def test_build_is_idempotent(path_resolver, project) -> None:
    write(project, "assets/z.js", "z")
    write(project, "assets/nested/a.css", "a")
    builder = make_builder(path_resolver)

    assert builder.build().files == builder.build().files


def test_symlinked_directory_keeps_project_paths(path_resolver, project, tmp_path) -> None:
    shared = tmp_path / "shared_uploads"
    write(shared, "a.jpg", "jpg")
    write(shared, "nested/b.png", "png")
    (project / "media").symlink_to(shared, target_is_directory=True)

    builder = make_builder(path_resolver, directories_to_include=["media"])
    manifest = builder.build()

    assert "media/a.jpg" in manifest
    assert "media/nested/b.png" in manifest
    builder.check_files_exist(manifest)


def test_symlinked_subdirectory_is_not_descended(path_resolver, project, tmp_path) -> None:
    write(tmp_path / "elsewhere", "c.js", "c")
    write(project, "assets/a.js", "a")
    (project / "assets" / "linked").symlink_to(tmp_path / "elsewhere", target_is_directory=True)

    files = make_builder(path_resolver).read_directory("assets")

    assert files == ["assets/a.js"]
