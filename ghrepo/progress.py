"""
Progress reporting for paginated fetches.

Progress goes to stderr so stdout stays clean for the table or JSON output.
The total page count is only known once the first page's Link header has
been read, so the bar is started lazily.
"""

import os
import sys
from typing import Optional

from rich.console import Console
from rich.progress import Progress, BarColumn, TextColumn, TaskID


class NullProgress:
    """Progress indicator that discards every update."""

    def start(self, total: int, completed: int = 1) -> None:
        pass

    def advance(self, amount: int = 1) -> None:
        pass

    def stop(self) -> None:
        pass


class PageProgress:
    """
    Page-count progress bar on stderr.

    Example:
        progress = PageProgress()
        progress.start(total=5)   # first page already fetched
        progress.advance()        # fetching page 2
        progress.stop()
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)
        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

    def start(self, total: int, completed: int = 1) -> None:
        """Start the bar scaled to `total` pages. Later calls are ignored."""
        if self._progress is not None:
            return
        self._progress = Progress(
            TextColumn("[{task.percentage:>3.0f}%]"),
            BarColumn(complete_style="bright_green"),
            TextColumn("({task.completed} / {task.total} pages)"),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        self._task = self._progress.add_task("pages", total=total, completed=completed)

    def advance(self, amount: int = 1) -> None:
        """Advance by `amount` pages. A no-op until the bar is started."""
        if self._progress is not None and self._task is not None:
            self._progress.update(self._task, advance=amount)

    def stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task = None


def get_progress(enabled: Optional[bool] = None):
    """
    Get a progress indicator for a fetch.

    Args:
        enabled: Override auto-detection (progress shown when stderr is a TTY)

    Returns:
        PageProgress or NullProgress
    """
    env = os.environ.get('GHREPO_PROGRESS')
    if env == '0':
        enabled = False
    elif env == '1' and enabled is None:
        enabled = True

    if enabled is None:
        enabled = sys.stderr.isatty()

    return PageProgress() if enabled else NullProgress()
