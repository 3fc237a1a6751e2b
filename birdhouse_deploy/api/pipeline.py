"""Pipeline API for scripted releases"""

from pathlib import Path
from typing import Optional, Union

from ..constants import Operation, Target, UpdateMode
from ..core import PathResolver
from ..models.result import ReleaseResult
from ..services import PipelineContext, ReleaseService, RunOptions
from ..utils.async_utils import run_async


class Pipeline:
    """Release pipeline of one Birdhouse project"""

    def __init__(self, project_root: Union[str, Path, None] = None):
        """
        Initialize pipeline

        Args:
            project_root: Project directory (defaults to the current directory)

        Raises:
            ProjectNotFoundError: If the directory holds no Birdhouse framework
        """
        self.path_resolver = PathResolver(project_root)
        self.path_resolver.ensure_project()

    def run(self, options: RunOptions) -> ReleaseResult:
        """
        Run the pipeline synchronously

        Args:
            options: Run options

        Returns:
            ReleaseResult: Run result
        """
        context = PipelineContext.load(self.path_resolver, options.target)
        return run_async(ReleaseService(context).run(options))

    def release(self,
                target: Target = Target.STAGING,
                version: Optional[str] = None,
                mode: UpdateMode = UpdateMode.REGULAR,
                **options) -> ReleaseResult:
        """
        Release the project

        Args:
            target: Where to release to
            version: ``None`` keeps the version, ``""`` bumps it, otherwise
                the new x[.x[.x[.x]]] version
            mode: Client update mode
            **options: Further :class:`RunOptions` fields

        Returns:
            ReleaseResult: Release result
        """
        return self.run(RunOptions(
            operation=Operation.RELEASE,
            target=target,
            target_version=version,
            mode=mode,
            **options
        ))

    def delete(self, target: Target, write_log: bool = True) -> ReleaseResult:
        """Delete the deployment of ``target``"""
        return self.run(RunOptions(operation=Operation.DELETE, target=target, write_log=write_log))

    def rollback(self, target: Target, write_log: bool = True) -> ReleaseResult:
        """Restore the deployment of ``target`` from its backup"""
        return self.run(RunOptions(operation=Operation.ROLLBACK, target=target, write_log=write_log))


def release(project_root: Union[str, Path, None] = None, **kwargs) -> ReleaseResult:
    """
    Convenience function for releasing a project

    Args:
        project_root: Project directory
        **kwargs: Arguments of :meth:`Pipeline.release`

    Returns:
        ReleaseResult: Release result
    """
    return Pipeline(project_root).release(**kwargs)
