"""Global constants for birdhouse-deploy"""

from enum import Enum
import re

APP_NAME = "birdhouse"
LOG_FORMAT = "%(message)s"

# Project files
APP_CONFIG_FILE = "config.yaml"
PIPELINE_CONFIG_FILE = "pipeline-config.yaml"
CONFIG_JS_FILE = "config.js"
CONFIG_SW_FILE = "config-sw.js"
SERVICE_WORKER_FILE = "service-worker.js"
CONFIG_BACKUP_SUFFIX = ".bak"

# Framework directory structure
FRAMEWORK_DIR = "Birdhouse"
FRAMEWORK_ROOT_DIR = "Birdhouse/root"
FRAMEWORK_TEMPLATE_DIR = "Birdhouse/root_EXAMPLE"
CACHE_FILE = "Birdhouse/filesToCache.js"
MINIFIED_DIR = "Birdhouse/minified"
LOCK_FILE = "Birdhouse/pipeline.lock"
FRAMEWORK_CACHED_DIRS = ["Birdhouse/src", "Birdhouse/fonts"]

# Files every Birdhouse app caches, whatever the pipeline config says
DEFAULT_FILES_TO_CACHE = [
    "index.html",
    "sitemap.xml",
    "robots.txt",
    SERVICE_WORKER_FILE,
    CONFIG_SW_FILE,
    "everywhere.js",
    CONFIG_JS_FILE,
    "updateNotes.js",
    "manifest.json",
    "admin-style.css",
    "style.css",
    "Birdhouse/default-style.css",
    CACHE_FILE,
    "Birdhouse/service-worker-registration.js",
]

# Upload ordering: basenames matching these patterns are uploaded last, in
# this order, so clients never see a cache list naming missing assets
UPLOAD_LAST_PATTERNS = ["config.*", "config-sw.*", "service-worker.*"]

# Remote layout
BACKUP_SUFFIX = "_BACKUP"
REMOTE_HTACCESS_NAME = ".htaccess"
HTACCESS_LOCALHOST_PLACEHOLDER = "LOCALHOST_PATH"

# Icon and image defaults
DEFAULT_FAVICON_SIZES = [16, 32, 64, 128, 152, 167, 180, 192, 196]
DEFAULT_MANIFEST_ICON_SIZES = [48, 72, 464, 3000]
APP_ICON_SIZES = [16, 24, 32, 48, 64, 128, 256]
IMAGE_EXTENSIONS = [".jpg", ".jpeg", ".png"]
IMAGE_COMPRESS_WIDTH = 800
IMAGE_COMPRESS_QUALITY = 100

# SFTP defaults
DEFAULT_SFTP_PORT = 22
DEFAULT_SFTP_TIMEOUT = 30  # seconds, connect only

# Release scripts
SCRIPT_INTERPRETERS = {
    ".js": ["node"],
    ".sh": ["sh"],
}

# Statistics
STATISTICS_TIME_FORMAT = "%d/%m/%Y %H:%M:%S"
BYTES_PER_MB = 1048576


class Target(Enum):
    """Where a pipeline run goes"""
    PRODUCTION = "production"
    STAGING = "staging"
    LOCAL = "local"
    NONE = "none"

    @property
    def is_remote(self) -> bool:
        return self in (Target.PRODUCTION, Target.STAGING)


class Operation(Enum):
    """Terminal operation of a pipeline run"""
    RELEASE = "release"
    DELETE = "delete"
    ROLLBACK = "rollback"


class UpdateMode(Enum):
    """Client-side update behaviour encoded in the version marker"""
    REGULAR = ""
    FORCED = "f"
    SILENT = "s"


# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "BH001"
    PROJECT_NOT_FOUND = "BH002"
    VERSION_FORMAT_ERROR = "BH003"
    STORAGE_CONNECTION_FAILED = "BH004"
    VERSION_WRITE_FAILED = "BH005"
    FILES_MISSING = "BH006"
    MINIFY_FAILED = "BH007"
    LOCK_HELD = "BH008"
    BACKUP_NOT_FOUND = "BH009"
    MISSING_REQUIRED_CONFIG = "BH010"
    IMAGE_FAILED = "BH011"
    REMOTE_OPERATION_FAILED = "BH012"
    SCRIPT_FAILED = "BH013"


# Environment variables
ENV_PROJECT_ROOT = "BIRDHOUSE_PROJECT_ROOT"

# Validation patterns
VERSION_TARGET_PATTERN = re.compile(r"[0-9]+(\.[0-9]+){0,3}")
VERSION_PATTERN = re.compile(r"(?P<numbers>[0-9]+(?:\.[0-9]+){0,3})(?:-(?P<mode>[fs]))?")
SERVICE_WORKER_VERSION_PATTERN = re.compile(r'(self\.CACHE_VERSION\s*=\s*")([^"]*)(";)')
LEGACY_CONFIG_JS_PATTERN = re.compile(r"export default (\{[\s\S]*\});?\s*$")

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_ROCKET = "🚀"

# Messages templates
MSG_RELEASE_SUCCESS = f"{EMOJI_SUCCESS} Release process of version {{version}} completed successfully."
MSG_BUILD_SUCCESS = f"{EMOJI_SUCCESS} Build process of version {{version}} completed successfully."
MSG_ROLLBACK_SUCCESS = f"{EMOJI_SUCCESS} Rolled back {{path}} from {{backup}}"
MSG_DELETE_SUCCESS = f"{EMOJI_SUCCESS} Deleted {{path}}"
