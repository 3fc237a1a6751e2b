"""Core functionality for birdhouse-deploy"""

from .path_resolver import PathResolver
from .config_store import ConfigStore
from .version_resolver import VersionWriter, resolve_version, select_mode
from .manifest_builder import ManifestBuilder
from .upload_planner import order_for_upload, build_upload_batch, remote_directories
from .minifier import Minifier
from .image_processor import ImageProcessor
from .file_preparer import FilePreparer
from .script_runner import ScriptRunner
from .lock import PipelineLock
from .statistics import StatisticsLog, format_statistics

__all__ = [
    "PathResolver",
    "ConfigStore",
    "VersionWriter",
    "resolve_version",
    "select_mode",
    "ManifestBuilder",
    "order_for_upload",
    "build_upload_batch",
    "remote_directories",
    "Minifier",
    "ImageProcessor",
    "FilePreparer",
    "ScriptRunner",
    "PipelineLock",
    "StatisticsLog",
    "format_statistics",
]
