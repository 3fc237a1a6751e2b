"""Root command"""

import click

from ..decorators import handle_errors, project_required
from ..utils.output import console
from ...constants import EMOJI_SUCCESS
from ...services import ProjectService
from ...utils.formatting import pluralize


@click.command()
@click.pass_context
@project_required
@handle_errors
def root(ctx):
    """Copy the framework root files into the project root"""
    copied = ProjectService(ctx.obj.path_resolver).copy_root_files()
    console.print(f"{EMOJI_SUCCESS} Copied {pluralize(copied, 'root file')}")
