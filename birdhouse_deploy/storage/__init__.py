# birdhouse_deploy/storage/__init__.py
"""Storage backends for birdhouse-deploy"""

from .base import StorageBackend
from .filesystem import FileSystemStorage
from .sftp import SftpStorage
from .factory import StorageFactory

__all__ = [
    'StorageBackend',
    'FileSystemStorage',
    'SftpStorage',
    'StorageFactory',
]
