# birdhouse_deploy/cli/decorators/__init__.py
"""CLI decorators"""

from .project import project_required, handle_errors

__all__ = [
    'project_required',
    'handle_errors',
]
