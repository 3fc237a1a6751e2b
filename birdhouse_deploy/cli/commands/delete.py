"""Delete command"""

import click

from ..decorators import handle_errors, project_required
from ...constants import Operation, Target
from ...services import RunOptions
from .release import describe_arguments, execute, select_target


@click.command()
@click.option('-p', '--production', is_flag=True, help='Delete the production application')
@click.option('-s', '--staging', is_flag=True, help='Delete the staging application')
@click.option('-l', '--local', is_flag=True, help='Clear the local dist directory')
@click.option('-nl', '--no-log', is_flag=True, help='Do not write the statistics log')
@click.pass_context
@project_required
@handle_errors
def delete(ctx, production, staging, local, no_log):
    """Delete a deployed application

    Examples:
        birdhouse delete -s
        birdhouse delete -l
    """
    target = select_target(production, staging, local)
    if target == Target.NONE:
        raise click.UsageError("Choose the application to delete with -p, -s or -l")

    flags = [('-p', production), ('-s', staging), ('-l', local), ('-nl', no_log)]
    execute(ctx, RunOptions(
        operation=Operation.DELETE,
        target=target,
        write_log=not no_log,
        arguments=describe_arguments('delete', flags),
    ))
