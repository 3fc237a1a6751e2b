"""Icons command"""

import click

from ..decorators import handle_errors, project_required
from ..utils.output import format_image_reports
from ...models.result import OperationStatus
from ...services import IconKind, ProjectService
from ...utils.async_utils import run_async


@click.command()
@click.argument('kind', type=click.Choice([k.value for k in IconKind]), default=IconKind.ALL.value)
@click.pass_context
@project_required
@handle_errors
def icons(ctx, kind):
    """Generate favicons, manifest icons or the app icon

    Sizes, sources and output directories come from
    pipeline-config.yaml.

    Examples:
        birdhouse icons favicons
        birdhouse icons all
    """
    service = ProjectService(ctx.obj.path_resolver)
    reports = run_async(service.generate_icons(IconKind(kind)))

    format_image_reports(reports, title=f"Icons ({kind})")

    if any(report.status == OperationStatus.FAILED for report in reports):
        ctx.exit(1)
