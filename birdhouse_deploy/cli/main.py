# birdhouse_deploy/cli/main.py
"""Main CLI entry point for birdhouse-deploy"""

import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..__version__ import __version__
from ..constants import APP_NAME, LOG_FORMAT
from ..core import PathResolver
from .utils.output import console

# Import all commands
from .commands import (
    init,
    update,
    root,
    icons,
    release,
    delete,
    rollback,
)


def setup_logging(info: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        info: Enable information output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif info:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.disable(logging.NOTSET)

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiofiles").setLevel(logging.WARNING)
    logging.getLogger("paramiko").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


class Context:
    """CLI context object with lazy project initialization

    The path resolver is only created when a command accesses it, so
    ``--help`` works outside of a project.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """Initialize CLI context"""
        self._project_root = project_root
        self._path_resolver: Optional[PathResolver] = None
        self.info: bool = False
        self.debug: bool = False
        self.quiet: bool = False

    @property
    def path_resolver(self) -> PathResolver:
        """Get path resolver instance (lazy loading)"""
        if self._path_resolver is None:
            self._path_resolver = PathResolver(self._project_root)
            if self.debug:
                console.print(f"[dim]Project root: {self._path_resolver.project_root}[/dim]")
        return self._path_resolver

    def require_project(self) -> PathResolver:
        """Get the path resolver of an existing project

        Raises:
            ProjectNotFoundError: If the root holds no Birdhouse framework
        """
        self.path_resolver.ensure_project()
        return self.path_resolver


@click.group(name=APP_NAME)
@click.option(
    '--project-root',
    type=click.Path(file_okay=False, path_type=Path),
    help='Project directory (defaults to BIRDHOUSE_PROJECT_ROOT or the current directory)'
)
@click.option('-i', '--info', is_flag=True, help='Show detailed information and INFO logging')
@click.option('--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.version_option(version=__version__, prog_name=APP_NAME)
@click.pass_context
def cli(ctx, project_root, info, debug, quiet):
    """Birdhouse - release pipeline for Birdhouse web apps

    Versions the app, builds the service worker cache list, minifies and
    compresses assets and uploads the project over SFTP with backup and
    rollback.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(info=info, debug=debug)

    # Create context with lazy initialization
    ctx.obj = Context(project_root)
    ctx.obj.info = info
    ctx.obj.debug = debug
    ctx.obj.quiet = quiet


# Register commands
cli.add_command(init.init)
cli.add_command(update.update)
cli.add_command(root.root)
cli.add_command(icons.icons)
cli.add_command(release.release)
cli.add_command(delete.delete)
cli.add_command(rollback.rollback)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts (exit code 130)
    - Usage errors (exit code 2)
    - Unexpected exceptions with proper error display
    """
    try:
        code = cli.main(prog_name=APP_NAME, standalone_mode=False)
        sys.exit(code if isinstance(code, int) else 0)

    except click.exceptions.Abort:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
