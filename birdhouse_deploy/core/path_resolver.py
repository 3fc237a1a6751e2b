"""Path resolution module for birdhouse-deploy"""

import os
from pathlib import Path
from typing import Optional, Union

from ..api.exceptions import ProjectNotFoundError
from ..constants import (
    APP_CONFIG_FILE,
    PIPELINE_CONFIG_FILE,
    CONFIG_JS_FILE,
    CONFIG_SW_FILE,
    SERVICE_WORKER_FILE,
    FRAMEWORK_DIR,
    FRAMEWORK_ROOT_DIR,
    FRAMEWORK_TEMPLATE_DIR,
    CACHE_FILE,
    MINIFIED_DIR,
    LOCK_FILE,
    ENV_PROJECT_ROOT,
)


class PathResolver:
    """Resolves paths within a Birdhouse project"""

    def __init__(self, project_root: Union[str, Path, None] = None):
        """Initialize path resolver

        Args:
            project_root: Root directory of the project. Defaults to the
                ``BIRDHOUSE_PROJECT_ROOT`` environment variable, then the
                current directory.
        """
        if project_root is None:
            project_root = os.environ.get(ENV_PROJECT_ROOT) or Path.cwd()
        self.project_root = Path(project_root).resolve()

    @property
    def project_name(self) -> str:
        return self.project_root.name

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve a path relative to project root

        Args:
            path: Path to resolve (can be relative or absolute)

        Returns:
            Resolved absolute path
        """
        path = Path(path)

        if path.is_absolute():
            return path

        return (self.project_root / path).resolve()

    def expand_path(self, path: str) -> Path:
        """Expand a path with environment variables and user home

        Args:
            path: Path string to expand

        Returns:
            Expanded path
        """
        path = os.path.expandvars(path)
        path = os.path.expanduser(path)
        return self.resolve(path)

    def make_relative(self, path: Union[str, Path]) -> str:
        """POSIX path relative to the project root

        Args:
            path: Path to make relative

        Returns:
            Relative path, or the absolute path when outside the project
        """
        path = Path(path).resolve()

        try:
            return path.relative_to(self.project_root).as_posix()
        except ValueError:
            return path.as_posix()

    def ensure_project(self) -> None:
        """Check that the root holds the Birdhouse framework directory

        Raises:
            ProjectNotFoundError: If the framework directory is missing
        """
        if not self.framework_dir.is_dir():
            raise ProjectNotFoundError()

    @property
    def framework_dir(self) -> Path:
        return self.project_root / FRAMEWORK_DIR

    @property
    def framework_root_dir(self) -> Path:
        return self.project_root / FRAMEWORK_ROOT_DIR

    @property
    def template_dir(self) -> Path:
        return self.project_root / FRAMEWORK_TEMPLATE_DIR

    @property
    def app_config_file(self) -> Path:
        return self.project_root / APP_CONFIG_FILE

    @property
    def pipeline_config_file(self) -> Path:
        return self.project_root / PIPELINE_CONFIG_FILE

    @property
    def config_js_file(self) -> Path:
        return self.project_root / CONFIG_JS_FILE

    @property
    def config_sw_file(self) -> Path:
        return self.project_root / CONFIG_SW_FILE

    @property
    def service_worker_file(self) -> Path:
        return self.project_root / SERVICE_WORKER_FILE

    @property
    def cache_file(self) -> Path:
        return self.project_root / CACHE_FILE

    @property
    def minified_dir(self) -> Path:
        return self.project_root / MINIFIED_DIR

    @property
    def lock_file(self) -> Path:
        return self.project_root / LOCK_FILE

    def get_minified_path(self, relative: str) -> Path:
        """Location of the minified copy of a project file"""
        return self.minified_dir / relative

    def get_dist_dir(self, dist_path: str) -> Path:
        return self.resolve(dist_path)

    def get_sftp_config_file(self, sftp_config_file: Optional[str]) -> Optional[Path]:
        if not sftp_config_file:
            return None
        return self.expand_path(sftp_config_file)
