"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Any

from ..constants import Operation, Target
from .manifest import FileManifest


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"
    SKIPPED = "skipped"
    IN_PROGRESS = "in_progress"


@dataclass
class ErrorDetail:
    """Detailed error information"""

    code: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat()
        }


@dataclass
class Result:
    """Base result class"""

    status: OperationStatus = OperationStatus.IN_PROGRESS
    message: str = ""
    errors: List[ErrorDetail] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status == OperationStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        """Check if operation failed"""
        return self.status == OperationStatus.FAILED

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_error(self, code: str, message: str, **context) -> None:
        """Add an error"""
        self.errors.append(ErrorDetail(code=code, message=message, context=context))

    def add_warning(self, message: str) -> None:
        """Add a warning"""
        self.warnings.append(message)

    def complete(self, status: Optional[OperationStatus] = None) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.now()
        if status:
            self.status = status


@dataclass
class MinifiedFile:
    """Size change of one minified file"""
    path: str
    original_size: int
    minified_size: int


@dataclass
class MinifyReport:
    """Outcome of the minification stage"""

    files: List[MinifiedFile] = field(default_factory=list)
    original_size: int = 0
    minified_size: int = 0

    def add(self, path: str, original_size: int, minified_size: int) -> None:
        """Account one minified file"""
        self.files.append(MinifiedFile(path, original_size, minified_size))
        self.original_size += original_size
        self.minified_size += minified_size

    def add_unchanged(self, size: int) -> None:
        """Account a file that is uploaded as is"""
        self.original_size += size
        self.minified_size += size

    @property
    def saved_bytes(self) -> int:
        return self.original_size - self.minified_size


@dataclass
class ImageReport(Result):
    """Outcome of image compression or icon generation"""

    processed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def failed(self) -> List[str]:
        return [e.context.get("path", e.message) for e in self.errors]

    def finalize(self) -> 'ImageReport':
        """Complete with a status derived from the collected outcome"""
        if self.errors and not self.processed:
            status = OperationStatus.FAILED
        elif self.errors:
            status = OperationStatus.PARTIAL
        elif not self.processed:
            status = OperationStatus.SKIPPED
        else:
            status = OperationStatus.SUCCESS
        self.complete(status)
        return self


@dataclass
class ReleaseResult(Result):
    """Result of a release, delete or rollback run"""

    operation: Operation = Operation.RELEASE
    target: Target = Target.NONE
    version: Optional[str] = None
    application_path: Optional[str] = None
    files_uploaded: int = 0
    cached_files: int = 0
    cache_size: int = 0
    minify_report: Optional[MinifyReport] = None
    image_report: Optional[ImageReport] = None
    manifest: Optional[FileManifest] = None

    @property
    def minified_size(self) -> Optional[int]:
        if self.minify_report is None:
            return None
        return self.minify_report.minified_size

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "message": self.message,
            "operation": self.operation.value,
            "target": self.target.value,
            "version": self.version,
            "application_path": self.application_path,
            "files_uploaded": self.files_uploaded,
            "cached_files": self.cached_files,
            "cache_size": self.cache_size,
            "minified_size": self.minified_size,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": self.warnings,
            "duration": self.duration
        }


@dataclass
class RunStatistics:
    """One block of the pipeline statistics log"""

    version: str
    finished: datetime
    arguments: str
    duration: float
    uploaded_files: int
    cached_files: int
    cache_size: int
    minified_size: Optional[int] = None

    @classmethod
    def from_result(cls, result: ReleaseResult, arguments: str) -> 'RunStatistics':
        """Create from a completed run"""
        return cls(
            version=result.version or "",
            finished=result.end_time or datetime.now(),
            arguments=arguments,
            duration=result.duration or 0.0,
            uploaded_files=result.files_uploaded,
            cached_files=result.cached_files,
            cache_size=result.cache_size,
            minified_size=result.minified_size,
        )
