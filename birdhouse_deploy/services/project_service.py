# birdhouse_deploy/services/project_service.py
"""Project bootstrap service"""

import logging
import shutil
from enum import Enum
from typing import List, Tuple

from ..core import ConfigStore, ImageProcessor, PathResolver
from ..constants import (
    ErrorCode,
    HTACCESS_LOCALHOST_PLACEHOLDER,
    REMOTE_HTACCESS_NAME,
)
from ..models.config import AppConfig, PipelineConfig
from ..models.result import ImageReport, OperationStatus, Result
from ..utils.file_utils import copy_tree_files

logger = logging.getLogger(__name__)


class IconKind(Enum):
    """Icon sets the project can generate"""
    FAVICONS = "favicons"
    MANIFEST = "manifest"
    APP = "app"
    ALL = "all"


class ProjectService:
    """Initializes projects and maintains their framework files"""

    def __init__(self, path_resolver: PathResolver):
        """
        Initialize project service

        Args:
            path_resolver: Resolver of the project paths
        """
        self.path_resolver = path_resolver
        self.config_store = ConfigStore(path_resolver)
        self.image_processor = ImageProcessor(path_resolver.project_root)

    def update_configs(self) -> Tuple[AppConfig, PipelineConfig]:
        """Merge both config files with the current defaults"""
        return self.config_store.update()

    def copy_root_files(self) -> int:
        """Copy every file of ``Birdhouse/root`` into the project root

        Existing files are overwritten.

        Returns:
            Number of copied files
        """
        source = self.path_resolver.framework_root_dir
        if not source.is_dir():
            logger.warning(f"Framework root directory not found: {source}")
            return 0

        copied = copy_tree_files(source, self.path_resolver.project_root, overwrite=True)
        logger.info(f"Copied {len(copied)} root files")
        return len(copied)

    def copy_template(self, localhost_path: str) -> int:
        """Copy the project template, keeping files that already exist

        The placeholder in ``.htaccess`` is replaced with ``localhost_path``.

        Returns:
            Number of copied files
        """
        source = self.path_resolver.template_dir
        target_root = self.path_resolver.project_root
        copied = 0

        for src in sorted(p for p in source.rglob("*") if p.is_file()):
            dst = target_root / src.relative_to(source)
            if dst.exists():
                logger.info(f"File {self.path_resolver.make_relative(dst)} already exists. Skipping.")
                continue

            dst.parent.mkdir(parents=True, exist_ok=True)
            if src.name == REMOTE_HTACCESS_NAME:
                content = src.read_text(encoding="utf-8")
                dst.write_text(
                    content.replace(HTACCESS_LOCALHOST_PLACEHOLDER, localhost_path),
                    encoding="utf-8"
                )
            else:
                shutil.copy2(src, dst)
            copied += 1

        return copied

    async def init_project(self) -> Result:
        """Create a new project from the framework template

        Copies the template, writes both config files, copies the root
        files and generates favicons and manifest icons.
        """
        result = Result(status=OperationStatus.IN_PROGRESS)

        if not self.path_resolver.template_dir.is_dir():
            message = (
                "The root_EXAMPLE directory does not exist. Please pull/download "
                "the framework again. Skipping initialization."
            )
            logger.warning(message)
            result.add_warning(message)
            result.complete(OperationStatus.SKIPPED)
            return result

        default_config = self.config_store.default_app_config()
        copied = self.copy_template(default_config.localhost_path)
        logger.info(f"Copied {copied} template files")

        self.update_configs()
        self.copy_root_files()

        for report in await self.generate_icons(IconKind.ALL, include_app=False):
            for error in report.errors:
                result.add_error(error.code, error.message, **error.context)
            result.warnings.extend(report.warnings)

        result.message = "Project initialized"
        result.complete(OperationStatus.PARTIAL if result.errors else OperationStatus.SUCCESS)
        return result

    async def generate_icons(self, kind: IconKind, include_app: bool = True) -> List[ImageReport]:
        """Generate one or all icon sets from the pipeline config

        Args:
            kind: Icon set to generate
            include_app: Whether ``ALL`` includes the app ``.ico``

        Returns:
            One report per generated set
        """
        pipeline = self.config_store.load_pipeline_config()
        resolve = self.path_resolver.resolve
        reports = []

        def optional_path(value: str):
            return resolve(value) if value else None

        if kind in (IconKind.FAVICONS, IconKind.ALL):
            reports.append(await self.image_processor.generate_sizes(
                optional_path(pipeline.favicon_path),
                optional_path(pipeline.favicons_output_dir),
                pipeline.favicons_file_name,
                pipeline.get_favicon_sizes(),
            ))

        if kind in (IconKind.MANIFEST, IconKind.ALL):
            reports.append(await self.image_processor.generate_sizes(
                optional_path(pipeline.manifest_icon_path),
                optional_path(pipeline.manifest_icon_output_dir),
                pipeline.manifest_icon_file_name,
                pipeline.get_manifest_icon_sizes(),
            ))

        if kind == IconKind.APP or (kind == IconKind.ALL and include_app):
            if not pipeline.app_icon_source_path or not pipeline.app_icon_output_dir:
                report = ImageReport()
                report.add_error(ErrorCode.IMAGE_FAILED, "App icon source or output directory not configured")
                reports.append(report.finalize())
            else:
                reports.append(await self.image_processor.generate_app_icon(
                    resolve(pipeline.app_icon_source_path),
                    resolve(pipeline.app_icon_output_dir),
                ))

        return reports
