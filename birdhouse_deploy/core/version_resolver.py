"""Version resolution and propagation"""

import dataclasses
import logging
from typing import Dict, Optional

from .config_store import dump_yaml, render_config_js, render_config_sw
from .path_resolver import PathResolver
from ..api.exceptions import VersionWriteError
from ..constants import SERVICE_WORKER_VERSION_PATTERN, UpdateMode
from ..models.config import AppConfig
from ..models.version import AppVersion

logger = logging.getLogger(__name__)


def select_mode(forced: bool = False, silent: bool = False) -> UpdateMode:
    """Update mode from the command line flags, forced wins over silent"""
    if forced:
        return UpdateMode.FORCED
    if silent:
        return UpdateMode.SILENT
    return UpdateMode.REGULAR


def resolve_version(current: AppVersion,
                    target: Optional[str],
                    mode: UpdateMode = UpdateMode.REGULAR) -> AppVersion:
    """Compute the version of this run

    Args:
        current: Version stored in the app config
        target: ``None`` keeps the current number, ``""`` bumps the fourth
            component, anything else is an explicit x[.x[.x[.x]]] version
        mode: Update mode marker to apply

    Returns:
        New version, marker included

    Raises:
        VersionFormatError: If ``target`` is not a valid version
    """
    if target is None:
        version = AppVersion(parts=current.parts)
    elif target == "":
        version = AppVersion(parts=current.parts).bump()
    else:
        version = AppVersion.parse_target(target)
        if version.to_packaging() < current.to_packaging():
            logger.warning(
                f"Target version {version.numbers} is lower than the current "
                f"version {current.numbers}"
            )

    return version.with_mode(mode)


class VersionWriter:
    """Writes a version into the app config and the service worker"""

    def __init__(self, path_resolver: PathResolver):
        self.path_resolver = path_resolver

    def stage(self, app_config: AppConfig, version: AppVersion) -> Dict[str, str]:
        """New file contents keyed by project-relative path, nothing is written

        Raises:
            VersionWriteError: If the service worker or its version
                assignment is missing
        """
        new_config = dataclasses.replace(app_config, version=str(version))
        sw_path = self.path_resolver.service_worker_file

        if not sw_path.exists():
            raise VersionWriteError(f"Service worker not found: {sw_path}")

        content = sw_path.read_text(encoding="utf-8")
        new_content, count = SERVICE_WORKER_VERSION_PATTERN.subn(
            lambda m: f"{m.group(1)}{version}{m.group(3)}", content, count=1
        )
        if count == 0:
            raise VersionWriteError(
                f"No 'self.CACHE_VERSION = \"...\";' assignment found in {sw_path.name}"
            )

        resolver = self.path_resolver
        return {
            resolver.make_relative(resolver.app_config_file): dump_yaml(new_config.to_dict()),
            resolver.make_relative(resolver.config_js_file): render_config_js(new_config),
            resolver.make_relative(resolver.config_sw_file): render_config_sw(new_config),
            resolver.make_relative(sw_path): new_content,
        }

    def apply(self, app_config: AppConfig, version: AppVersion) -> AppConfig:
        """Stage all new contents, then write them

        Args:
            app_config: Current app config
            version: Version to write

        Returns:
            App config carrying the new version
        """
        staged = self.stage(app_config, version)

        for relative, content in staged.items():
            self.path_resolver.resolve(relative).write_text(content, encoding="utf-8")

        logger.info(f"Version set to {version}")
        return dataclasses.replace(app_config, version=str(version))
