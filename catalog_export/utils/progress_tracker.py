"""Console output and progress bars for command-line runs."""

from rich.console import Console
from rich.progress import (
    Progress,
    BarColumn,
    TextColumn,
    TimeRemainingColumn,
    MofNCompleteColumn,
)


class ProgressTracker:
    """Manages progress bar configurations and console messages."""

    def __init__(self, console: Console = None):
        """Initialize progress tracker with console."""
        self.console = console or Console()

    def create_progress_bar(self) -> Progress:
        """
        Create configured Progress instance.

        Returns:
            Configured Progress instance for context manager use
        """
        return Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            "•",
            MofNCompleteColumn(),
            "•",
            TimeRemainingColumn(),
            console=self.console,
            expand=True
        )

    def print_header(self, message: str):
        self.console.print(f"[bold magenta]{message}[/bold magenta]\n")

    def print_info(self, message: str):
        self.console.print(message)

    def print_success(self, message: str):
        self.console.print(f"[green][OK][/green] {message}")

    def print_error(self, message: str):
        self.console.print(f"[bold red][ERROR][/bold red] {message}")

    def print_warning(self, message: str):
        self.console.print(f"[yellow][WARNING][/yellow] {message}")
