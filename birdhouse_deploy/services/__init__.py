# birdhouse_deploy/services/__init__.py
"""Business logic services for birdhouse-deploy"""

from .project_service import ProjectService, IconKind
from .release_service import ReleaseService, RunOptions, PipelineContext

__all__ = [
    "ProjectService",
    "IconKind",
    "ReleaseService",
    "RunOptions",
    "PipelineContext",
]
