"""Rollback command"""

import click

from ..decorators import handle_errors, project_required
from ...constants import Operation, Target
from ...services import RunOptions
from .release import describe_arguments, execute, select_target


@click.command()
@click.option('-p', '--production', is_flag=True, help='Roll back the production application')
@click.option('-s', '--staging', is_flag=True, help='Roll back the staging application')
@click.option('-nl', '--no-log', is_flag=True, help='Do not write the statistics log')
@click.pass_context
@project_required
@handle_errors
def rollback(ctx, production, staging, no_log):
    """Restore an application from its backup

    The backup made by ``release -b`` is copied over the application.

    Examples:
        birdhouse rollback -p
    """
    target = select_target(production, staging)
    if target == Target.NONE:
        raise click.UsageError("Choose the application to roll back with -p or -s")

    flags = [('-p', production), ('-s', staging), ('-nl', no_log)]
    execute(ctx, RunOptions(
        operation=Operation.ROLLBACK,
        target=target,
        write_log=not no_log,
        arguments=describe_arguments('rollback', flags),
    ))
