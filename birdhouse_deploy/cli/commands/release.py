"""Release command and the shared run helpers of delete and rollback"""

from typing import List, Tuple

import click

from ..decorators import handle_errors, project_required
from ..utils.output import console, format_release_result, show_information
from ..utils.progress import ProgressManager
from ...constants import Operation, Target
from ...core import select_mode
from ...models.version import AppVersion
from ...services import PipelineContext, ReleaseService, RunOptions
from ...utils.async_utils import run_async


def select_target(production: bool = False, staging: bool = False, local: bool = False) -> Target:
    """Resolve the target flags, local overrides production, production wins over staging"""
    if local:
        return Target.LOCAL
    if production:
        return Target.PRODUCTION
    if staging:
        return Target.STAGING
    return Target.NONE


def describe_arguments(command: str, flags: List[Tuple[str, bool]], version=None) -> str:
    """Command line as recorded in the statistics log

    Args:
        command: Subcommand name
        flags: (flag, enabled) pairs in display order
        version: Value of ``-v``, ``None`` when not given

    Returns:
        e.g. ``release -p -c -v 1.2``
    """
    parts = [command]
    parts.extend(flag for flag, enabled in flags if enabled)
    if version is not None:
        parts.append(f"-v {version}".strip())
    return " ".join(parts)


def execute(ctx: click.Context, options: RunOptions) -> None:
    """Run the pipeline for ``options`` and display the result

    Exits with 1 when the run fails.
    """
    context = PipelineContext.load(ctx.obj.path_resolver, options.target)
    progress = ProgressManager(console, enabled=not ctx.obj.quiet)

    with progress.upload_progress() as callback:
        service = ReleaseService(context, progress=callback)
        result = run_async(service.run(options))

    if ctx.obj.info:
        show_information(context, result)

    backup_path = context.backup_path(options.target) if options.target.is_remote else None
    format_release_result(result, backup_path)

    if result.is_failed:
        ctx.exit(1)


@click.command()
@click.option('-p', '--production', is_flag=True, help='Release to the production path')
@click.option('-s', '--staging', is_flag=True, help='Release to the staging path')
@click.option('-l', '--local', is_flag=True, help='Build into the local dist directory')
@click.option(
    '-v', '--version', 'target_version',
    is_flag=False, flag_value='', default=None, metavar='[X.X.X.X]',
    help='New version, increments the last number when given without a value'
)
@click.option('-c', '--cache', is_flag=True, help='Update the service worker cache list')
@click.option('-m', '--minify', is_flag=True, help='Upload minified JS and CSS files')
@click.option('-b', '--backup', is_flag=True, help='Back up the remote application first')
@click.option('--forced', is_flag=True, help='Force clients to update')
@click.option('--silent', is_flag=True, help='Update clients silently')
@click.option('-su', '--skip-compressed', is_flag=True, help='Skip image compression and compressed uploads')
@click.option('-nl', '--no-log', is_flag=True, help='Do not write the statistics log')
@click.pass_context
@project_required
@handle_errors
def release(ctx, production, staging, local, target_version, cache, minify, backup,
            forced, silent, skip_compressed, no_log):
    """Version, build and upload the project

    Without a target only the local stages run: version, file list,
    cache list and minification.

    Examples:
        birdhouse release -c
        birdhouse release -s -v -c -m
        birdhouse release -p -v 2.0 --forced -b
        birdhouse release -l
    """
    # Validated before any file is touched
    if target_version:
        AppVersion.parse_target(target_version)

    target = select_target(production, staging, local)
    flags = [
        ('-p', production), ('-s', staging), ('-l', local),
        ('-c', cache), ('-m', minify), ('-b', backup),
        ('--forced', forced), ('--silent', silent),
        ('-su', skip_compressed), ('-nl', no_log),
    ]

    execute(ctx, RunOptions(
        operation=Operation.RELEASE,
        target=target,
        target_version=target_version,
        mode=select_mode(forced=forced, silent=silent),
        update_cache=cache,
        minify=minify,
        backup=backup,
        skip_compressed=skip_compressed,
        write_log=not no_log,
        arguments=describe_arguments('release', flags, target_version),
    ))
