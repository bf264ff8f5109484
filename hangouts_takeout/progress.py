"""console reporting of a conversion run: phases, outcomes and the summary."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    ProgressColumn,
    SpinnerColumn,
    TaskID,
    TextColumn,
)

from hangouts_takeout.core.parser import ConversionOutcome


class ProgressHandler:
    """
    tracks conversion outcomes and reports them on stderr.

    The handler owns the converted and failed counts of a run. Failures are
    always printed; the bar, phase messages and the summary follow the
    ``quiet`` and ``show_progress`` flags.
    """

    def __init__(self, quiet: bool = False, show_progress: bool = False) -> None:
        self.quiet = quiet
        self.show_progress = show_progress
        self.converted = 0
        self.failed = 0
        self.current_file: Optional[str] = None
        self._console = Console(stderr=True)
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None

    def __enter__(self) -> "ProgressHandler":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self._stop()

    def _stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task_id = None

    def _show(self, description: str, total: Optional[int], *columns: ProgressColumn) -> None:
        """replaces the current display with a new one of the given columns."""
        self._stop()
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            *columns,
            console=self._console,
            transient=True,
        )
        self._progress.start()
        self._task_id = self._progress.add_task(
            description, total=total, failed=self.failed, title=""
        )

    def start_discovery(self) -> None:
        """shows a spinner while export files are found and counted."""
        if self.show_progress:
            self._show("Counting conversations...", None)

    def set_total(self, total: int) -> None:
        """switches to a bar over the counted conversations."""
        if self.show_progress:
            self._show(
                "Converting",
                total,
                BarColumn(),
                MofNCompleteColumn(),
                TextColumn("[red]{task.fields[failed]} failed"),
                TextColumn("{task.fields[title]}"),
            )

    def start_file(self, path: Path) -> None:
        """names the file whose conversations are converted next."""
        self.current_file = path.name
        if self._progress is not None and self._task_id is not None:
            self._progress.update(self._task_id, description=f"Reading {escape(path.name)}")
        else:
            self.log_info(f"Reading {path.name}")

    def record(self, outcome: ConversionOutcome) -> None:
        """counts one conversation, printing its error if it failed."""
        if outcome.conversation is not None:
            self.converted += 1
            title = outcome.conversation.name or outcome.conversation_id or ""
        else:
            self.failed += 1
            title = outcome.conversation_id or f"#{outcome.index}"
            self.log_error(f"Failed: {self.current_file} - {title}: {outcome.error}")

        if self._progress is not None and self._task_id is not None:
            self._progress.update(
                self._task_id, advance=1, failed=self.failed, title=escape(title)
            )

    def record_read_error(self, path: Path, error: Exception) -> None:
        """counts a file that could not be read as one failure."""
        self.failed += 1
        self.log_error(f"Failed to read {path.name}: {error}")

    def log_error(self, message: str) -> None:
        """prints error message (always shown, even in quiet mode)."""
        self._console.print(f"[red]ERROR:[/red] {escape(message)}")

    def log_info(self, message: str) -> None:
        """prints info message (only when not quiet and progress disabled)."""
        if not (self.quiet or self.show_progress):
            self._console.print(escape(message))

    def finish(self) -> None:
        """stops the display and prints the run summary unless quiet."""
        self._stop()
        if not self.quiet:
            self._console.print(
                f"Processed {self.converted + self.failed} conversation(s): "
                f"{self.converted} converted, {self.failed} failed"
            )
