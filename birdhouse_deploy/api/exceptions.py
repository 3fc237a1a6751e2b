"""Exception definitions for birdhouse-deploy"""

from typing import List


class DeployToolError(Exception):
    """Base exception for birdhouse-deploy"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(DeployToolError):
    """Configuration error"""

    def __init__(self, message: str, error_code: str = "BH001"):
        super().__init__(message, error_code)


class MissingConfigError(ConfigError):
    """Required configuration keys are missing or empty"""

    def __init__(self, source: str, missing: List[str]):
        message = (
            f"Missing necessary configuration values in {source}: "
            f"{', '.join(missing)}"
        )
        super().__init__(message, "BH010")
        self.source = source
        self.missing = missing


class VersionFormatError(DeployToolError):
    """Version string does not have the expected shape"""

    def __init__(self, version: str, message: str = None):
        if message is None:
            message = (
                f"Invalid version number format: '{version}'. "
                "Expected format is x, x.x, x.x.x, or x.x.x.x"
            )
        super().__init__(message, "BH003")
        self.version = version


class VersionWriteError(DeployToolError):
    """New version could not be written into a project file"""

    def __init__(self, message: str):
        super().__init__(message, "BH005")


class PathError(DeployToolError):
    """Path related error"""
    pass


class ProjectNotFoundError(PathError):
    """Project root not found error"""

    def __init__(self, message: str = None):
        if message is None:
            message = (
                "No Birdhouse project found. Please ensure:\n"
                "1. You are in the project root directory\n"
                "2. The project root contains the Birdhouse framework directory\n"
                "3. Or use --project-root to specify the project location\n"
                "\n"
                "Initialize a new project: birdhouse init"
            )
        super().__init__(message, "BH002")


class MissingFilesError(PathError):
    """Files of the manifest do not exist on disk"""

    def __init__(self, missing: List[str]):
        message = "One or more files are missing:\n" + "\n".join(f"  {m}" for m in missing)
        super().__init__(message, "BH006")
        self.missing = missing


class StorageError(DeployToolError):
    """Storage operation error"""

    def __init__(self, message: str):
        super().__init__(message, "BH004")


class RollbackError(StorageError):
    """No backup available to roll back to"""

    def __init__(self, backup_path: str):
        super().__init__(f"No backup version found for rollback: {backup_path}")
        self.error_code = "BH009"
        self.backup_path = backup_path


class MinifyError(DeployToolError):
    """Minification of a file failed"""

    def __init__(self, file_path: str, reason: str):
        super().__init__(f"Failed to minify {file_path}: {reason}", "BH007")
        self.file_path = file_path


class LockError(DeployToolError):
    """Another pipeline run holds the project lock"""

    def __init__(self, lock_path: str, pid: int = None):
        holder = f" (held by process {pid})" if pid else ""
        message = (
            f"Pipeline lock {lock_path} exists{holder}. "
            "Another pipeline run is in progress."
        )
        super().__init__(message, "BH008")
        self.lock_path = lock_path
        self.pid = pid
