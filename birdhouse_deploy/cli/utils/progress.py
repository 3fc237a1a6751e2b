# birdhouse_deploy/cli/utils/progress.py
"""Progress display utilities"""

from contextlib import contextmanager
from typing import Callable, Generator, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

# (relative path, files done, files total)
UploadCallback = Callable[[str, int, int], None]


class ProgressManager:
    """Centralized progress management"""

    def __init__(self, console: Console = None, enabled: bool = True):
        self.console = console or Console()
        self.enabled = enabled

    @contextmanager
    def upload_progress(self, description: str = "Uploading") -> Generator[Optional[UploadCallback], None, None]:
        """Progress bar fed by the per-file upload callback

        Yields ``None`` when disabled, so the caller can pass the value on
        unchanged.
        """
        if not self.enabled:
            yield None
            return

        with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(bar_width=None),
                MofNCompleteColumn(),
                TextColumn("[dim]{task.fields[filename]}"),
                TimeElapsedColumn(),
                console=self.console,
                transient=True,
        ) as progress:
            task_id = progress.add_task(description, total=None, filename="")
            yield upload_callback(progress, task_id)

    @contextmanager
    def status(self, description: str) -> Generator[None, None, None]:
        """Simple spinner while a stage runs"""
        if not self.enabled:
            yield
            return

        with self.console.status(description):
            yield


def upload_callback(progress: Progress, task_id: TaskID) -> UploadCallback:
    """Create an upload callback updating ``task_id``

    Returns a function with signature (path, completed, total).
    """

    def callback(path: str, completed: int, total: int) -> None:
        progress.update(task_id, completed=completed, total=total, filename=path)

    return callback
