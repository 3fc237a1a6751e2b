"""Update command"""

import click

from ..decorators import handle_errors, project_required
from ..utils.output import console
from ...constants import EMOJI_SUCCESS
from ...services import ProjectService


@click.command()
@click.pass_context
@project_required
@handle_errors
def update(ctx):
    """Merge the config files with the current defaults

    Existing values are kept, new keys are added with their default
    values and config.js and config-sw.js are rendered again.
    """
    path_resolver = ctx.obj.path_resolver
    ProjectService(path_resolver).update_configs()

    for path in (path_resolver.app_config_file, path_resolver.pipeline_config_file):
        console.print(f"{EMOJI_SUCCESS} Updated {path_resolver.make_relative(path)}")
