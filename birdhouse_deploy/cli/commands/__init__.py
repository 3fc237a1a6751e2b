# birdhouse_deploy/cli/commands/__init__.py
"""CLI commands"""

from . import init
from . import update
from . import root
from . import icons
from . import release
from . import delete
from . import rollback

__all__ = [
    "init",
    "update",
    "root",
    "icons",
    "release",
    "delete",
    "rollback",
]
