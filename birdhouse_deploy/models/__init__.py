# birdhouse_deploy/models/__init__.py
"""Data models for birdhouse-deploy"""

from .config import AppConfig, PipelineConfig, SftpConfig
from .manifest import FileManifest, ExtensionStats
from .version import AppVersion
from .result import (
    OperationStatus,
    ErrorDetail,
    Result,
    MinifyReport,
    ImageReport,
    ReleaseResult,
    RunStatistics,
)

__all__ = [
    # Config models
    "AppConfig",
    "PipelineConfig",
    "SftpConfig",

    # Manifest models
    "FileManifest",
    "ExtensionStats",

    # Version model
    "AppVersion",

    # Result models
    "OperationStatus",
    "ErrorDetail",
    "Result",
    "MinifyReport",
    "ImageReport",
    "ReleaseResult",
    "RunStatistics",
]
