"""Project context and error decorators for CLI commands"""

from functools import wraps
from typing import Callable

import click

from ..utils.output import console
from ...api.exceptions import DeployToolError, ProjectNotFoundError
from ...constants import EMOJI_ERROR


def project_required(func: Callable) -> Callable:
    """Decorator that ensures command runs in a Birdhouse project

    The project root comes from ``--project-root``, the
    ``BIRDHOUSE_PROJECT_ROOT`` environment variable or the current
    directory, and must contain the ``Birdhouse`` framework directory.

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()

        try:
            ctx.obj.require_project()
        except ProjectNotFoundError as e:
            console.print(
                f"[red]{EMOJI_ERROR} {e}[/red]"
            )
            ctx.exit(1)

        return func(*args, **kwargs)

    return wrapper


def handle_errors(func: Callable) -> Callable:
    """Decorator that prints pipeline errors in red and exits with 1"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DeployToolError as e:
            console.print(f"[red]{EMOJI_ERROR} {e}[/red]")
            if e.error_code:
                console.print(f"[dim]Error code: {e.error_code}[/dim]")
            click.get_current_context().exit(1)

    return wrapper
