"""Stats panel widget showing reporting period statistics."""

from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Static

from folha.hours import format_hours
from folha.models import PeriodStats

PROGRESS_WIDTH = 20


def progress_bar(ratio: float, width: int = PROGRESS_WIDTH) -> str:
    """Render a ratio between 0 and 1 as a text progress bar."""
    filled = round(max(0.0, min(1.0, ratio)) * width)
    return "█" * filled + "░" * (width - filled)


class StatsPanel(Container):
    """Panel displaying the current and previous period statistics."""

    def compose(self) -> ComposeResult:
        """Compose the stats panel."""
        with Horizontal(id="stats-row"):
            with Vertical(classes="stat-box"):
                yield Static("Loading...", id="stat-period")
                yield Static("", id="stat-days")
                yield Static("", id="stat-progress")

            with Vertical(classes="stat-box"):
                yield Static("", id="stat-hours")
                yield Static("", id="stat-hours-breakdown")
                yield Static("", id="stat-extra")

            with Vertical(classes="stat-box"):
                yield Static("", id="stat-leave")
                yield Static("", id="stat-leave-breakdown")
                yield Static("", id="stat-previous")

    def update_stats(self, stats: PeriodStats, previous: PeriodStats) -> None:
        """Update the displayed statistics."""
        self.query_one("#stat-period", Static).update(
            f"[bold]Period:[/bold] {stats.period.label} "
            f"({stats.period.start:%d/%m} - {stats.period.end:%d/%m})"
        )
        self.query_one("#stat-days", Static).update(
            f"[bold]Filled:[/bold] {stats.filled_days} / {stats.working_days} working days"
        )
        status = "green" if stats.missing_days == 0 else "yellow"
        self.query_one("#stat-progress", Static).update(
            f"[{status}]{progress_bar(stats.fill_ratio)}[/{status}] {stats.fill_ratio:.0%}"
        )

        self.query_one("#stat-hours", Static).update(
            f"[bold]Hours:[/bold] {format_hours(stats.total_hours)}"
        )
        self.query_one("#stat-hours-breakdown", Static).update(
            f"Regular {format_hours(stats.regular_hours)} | "
            f"Reduced {format_hours(stats.reduced_hours)} | "
            f"Weekend {format_hours(stats.weekend_hours)}"
        )
        self.query_one("#stat-extra", Static).update(
            f"[bold]Extra hours:[/bold] {format_hours(stats.extra_hours)}"
        )

        self.query_one("#stat-leave", Static).update(
            f"[bold]Leave days:[/bold] {stats.leave_days}"
        )
        self.query_one("#stat-leave-breakdown", Static).update(
            f"[magenta]Vacation {stats.vacation_days}[/magenta] | "
            f"[red]Sick {stats.sick_days}[/red] | "
            f"[yellow]Absent {stats.absent_days}[/yellow]"
        )
        self.query_one("#stat-previous", Static).update(
            f"[dim]Previous {previous.period.label}: "
            f"{previous.filled_days}/{previous.working_days} days, "
            f"{format_hours(previous.total_hours)}[/dim]"
        )

        self.refresh()
