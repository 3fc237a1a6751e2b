"""Shared fixtures: a minimal Birdhouse project on disk"""

from pathlib import Path

import pytest
import yaml

from birdhouse_deploy.constants import DEFAULT_FILES_TO_CACHE
from birdhouse_deploy.core import PathResolver
from birdhouse_deploy.models.config import AppConfig, PipelineConfig
from birdhouse_deploy.services import PipelineContext
from birdhouse_deploy.storage import FileSystemStorage

SERVICE_WORKER = (
    'self.CACHE_VERSION = "1.0.0.0";\n'
    "self.addEventListener('install', () => self.skipWaiting());\n"
)

INDEX_HTML = "<html><head><title>My App</title></head><body><p>Hi</p></body></html>"

SCRIPT = "function add(first, second) {\n    // sum of both\n    return first + second;\n}\n"

STYLE = "body {\n    color : red ;\n    margin : 0 ;\n}\n"


def write(root: Path, relative: str, content: str = "") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project directory with every framework file and a pipeline config"""
    root = tmp_path / "my_app"
    (root / "Birdhouse").mkdir(parents=True)

    for relative in DEFAULT_FILES_TO_CACHE:
        write(root, relative, f"/* {relative} */\n")

    write(root, "service-worker.js", SERVICE_WORKER)
    write(root, "index.html", INDEX_HTML)
    write(root, "everywhere.js", SCRIPT)
    write(root, "style.css", STYLE)

    write(root, "src/app.js", SCRIPT)
    write(root, "src/notes.md", "# notes\n")
    write(root, "src/theme.css", STYLE)
    write(root, "img/screenshots/home.txt", "screenshot")
    write(root, "database/data.json", '{"rows": []}\n')
    write(root, "UPLOAD-THIS.htaccess", "RewriteEngine On\n")

    pipeline = PipelineConfig(
        production_path="app_production",
        staging_path="app_staging",
        directories_to_include=["src", "img/screenshots"],
        directories_to_exclude_from_cache=["img/screenshots"],
    )
    write(root, "pipeline-config.yaml", yaml.safe_dump(pipeline.to_dict(), sort_keys=False))
    return root


@pytest.fixture
def path_resolver(project: Path) -> PathResolver:
    return PathResolver(project)


@pytest.fixture
def context(path_resolver: PathResolver) -> PipelineContext:
    """Loaded configuration of the project, without SFTP settings"""
    return PipelineContext.load(path_resolver)


@pytest.fixture
def remote(tmp_path: Path) -> FileSystemStorage:
    """Filesystem directory standing in for the web server"""
    return FileSystemStorage({"base_path": str(tmp_path / "server"), "name": "server"})


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig.defaults("my_app")
