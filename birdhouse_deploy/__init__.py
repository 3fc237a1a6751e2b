"""Birdhouse Deploy - the release pipeline of Birdhouse web apps.

This tool versions a Birdhouse progressive web app, builds the list of files
its service worker caches, minifies and compresses assets and uploads the
project to a web server over SFTP, with backup and rollback.
"""

from .__version__ import __version__, __version_info__, __author__, __license__

# Core API (imported first, the core modules depend on api.exceptions)
from .api import Pipeline, release

# Data models
from .models.config import AppConfig, PipelineConfig, SftpConfig
from .models.manifest import FileManifest
from .models.result import ReleaseResult
from .models.version import AppVersion

# Services
from .services import ReleaseService, RunOptions, PipelineContext, ProjectService

# Exceptions
from .api.exceptions import (
    DeployToolError,
    ConfigError,
    MissingConfigError,
    VersionFormatError,
    VersionWriteError,
    PathError,
    ProjectNotFoundError,
    MissingFilesError,
    StorageError,
    RollbackError,
    MinifyError,
    LockError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__license__",

    # Main classes
    "Pipeline",
    "ReleaseService",
    "RunOptions",
    "PipelineContext",
    "ProjectService",

    # Core API functions
    "release",

    # Data models
    "AppConfig",
    "PipelineConfig",
    "SftpConfig",
    "FileManifest",
    "ReleaseResult",
    "AppVersion",

    # Exceptions
    "DeployToolError",
    "ConfigError",
    "MissingConfigError",
    "VersionFormatError",
    "VersionWriteError",
    "PathError",
    "ProjectNotFoundError",
    "MissingFilesError",
    "StorageError",
    "RollbackError",
    "MinifyError",
    "LockError",
]
