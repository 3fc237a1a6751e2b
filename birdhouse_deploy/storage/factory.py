"""Storage backend factory"""

from pathlib import Path
from typing import Dict, Any, Optional, Type

from .base import StorageBackend
from .filesystem import FileSystemStorage
from .sftp import SftpStorage
from ..constants import Target
from ..models.config import SftpConfig


class StorageFactory:
    """Factory for creating storage backend instances"""

    # Registry of storage backends
    _backends: Dict[str, Type[StorageBackend]] = {
        "filesystem": FileSystemStorage,
        "sftp": SftpStorage,
    }

    @classmethod
    def create_for_target(cls,
                          target: Target,
                          dist_dir: Optional[Path] = None,
                          sftp_config: Optional[SftpConfig] = None) -> StorageBackend:
        """Create the storage backend a pipeline target writes to

        Args:
            target: Pipeline target
            dist_dir: Local build directory (local target)
            sftp_config: Server settings (remote targets)

        Returns:
            Storage backend instance

        Raises:
            ValueError: If the target has no storage or settings are missing
        """
        if target == Target.LOCAL:
            if dist_dir is None:
                raise ValueError("Local builds require a dist directory")
            return cls.create_from_dict("filesystem", {"base_path": str(dist_dir), "name": "dist"})

        if target.is_remote:
            if sftp_config is None:
                raise ValueError(f"Target {target.value} requires SFTP settings")
            return cls.create_from_dict("sftp", sftp_config.to_dict())

        raise ValueError(f"Target {target.value} has no storage backend")

    @classmethod
    def create_from_dict(cls, storage_type: str, config: Dict[str, Any]) -> StorageBackend:
        """Create storage backend from type and configuration dict

        Args:
            storage_type: Storage type string
            config: Configuration dictionary

        Returns:
            Storage backend instance

        Raises:
            ValueError: If storage type is not supported
        """
        if storage_type not in cls._backends:
            raise ValueError(f"Unsupported storage type: {storage_type}")

        backend_class = cls._backends[storage_type]
        return backend_class(config)
