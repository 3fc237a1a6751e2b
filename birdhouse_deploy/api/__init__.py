# birdhouse_deploy/api/__init__.py
"""API layer for birdhouse-deploy"""

from .pipeline import Pipeline, release
from .exceptions import (
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
    # Main classes
    "Pipeline",

    # Convenience functions
    "release",

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
