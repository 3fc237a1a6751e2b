"""Initialize command for new Birdhouse projects"""

import click

from ..decorators import handle_errors, project_required
from ..utils.output import console, print_warning
from ...constants import EMOJI_ROCKET, EMOJI_SUCCESS
from ...models.result import OperationStatus
from ...services import ProjectService
from ...utils.async_utils import run_async


@click.command()
@click.pass_context
@project_required
@handle_errors
def init(ctx):
    """Initialize a new project from the framework template

    Copies Birdhouse/root_EXAMPLE into the project root without
    overwriting existing files, writes both config files, copies the
    root files and generates favicons and manifest icons.

    Examples:
        birdhouse init
    """
    service = ProjectService(ctx.obj.path_resolver)
    result = run_async(service.init_project())

    if result.status == OperationStatus.SKIPPED:
        for warning in result.warnings:
            print_warning(warning)
        return

    for error in result.errors:
        print_warning(error.message)

    console.print(f"\n{EMOJI_SUCCESS} [green]Project initialized[/green] in {ctx.obj.path_resolver.project_root}")
    console.print(f"\n{EMOJI_ROCKET} Next steps:")
    console.print("  1. Fill in the missing values of config.yaml and pipeline-config.yaml")
    console.print("  2. Run 'birdhouse release -l' for a local build")
