"""Main Textual application."""

from datetime import date, datetime
from typing import ClassVar

from loguru import logger
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.widgets import Footer, Header, LoadingIndicator

from folha.api import ApiSession
from folha.config import Config
from folha.errors import FolhaError
from folha.models import PeriodStats, ReportingPeriod, TimeRecord
from folha.periods import (
    compute_period_statistics,
    compute_reporting_period,
    generate_period_calendar,
    is_well_formed,
    next_reporting_period,
    previous_reporting_period,
)
from folha.records import LOCAL_TZ
from folha.widgets import CalendarTable, StatsPanel
from folha.widgets.record_dialog import RecordDialog


def log_malformed_records(records: list[TimeRecord]) -> int:
    """Warn about records without usable dates and return how many there are."""
    malformed = [record for record in records if not is_well_formed(record)]
    for record in malformed:
        logger.warning(
            "Record {} ({}) has no usable dates, left out of the statistics",
            record.id,
            record.work_type.value,
        )
    return len(malformed)


def period_statistics(
    records: list[TimeRecord], period: ReportingPeriod
) -> tuple[PeriodStats, PeriodStats]:
    """Compute statistics for a period and the one before it."""
    previous = previous_reporting_period(period)
    return (
        compute_period_statistics(records, period.start, period.end),
        compute_period_statistics(records, previous.start, previous.end),
    )


class FolhaApp(App):
    """Folha TUI application."""

    CSS = """
    #main-container {
        height: 100%;
    }

    Vertical {
        height: 100%;
    }

    #loading-indicator {
        layer: overlay;
        offset: 50% 50%;
        width: auto;
        height: auto;
        display: none;
    }

    #loading-indicator.visible {
        display: block;
    }

    #stats-panel {
        height: 1fr;
        padding: 1;
        background: $panel;
        border: solid $primary;
    }

    #stats-row {
        height: 100%;
        width: 100%;
    }

    .stat-box {
        width: 1fr;
        padding: 0 1;
    }

    #calendar-table {
        height: 4fr;
        border: solid $primary;
        width: 100%;
    }
    """

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("q", "quit", "Quit"),
        ("r", "refresh", "Refresh"),
        ("a", "add_record", "Add Record"),
        ("c", "current_period", "Current Period"),
        ("n", "next_period", "Next Period"),
        ("b", "prev_period", "Prev Period"),
        ("?", "help", "Help"),
    ]

    def __init__(self, config: Config, today: date | None = None) -> None:
        super().__init__()
        self.config = config
        self.today = today or datetime.now(LOCAL_TZ).date()
        self.period = compute_reporting_period(self.today)
        self.records: list[TimeRecord] = []

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Header(show_clock=True)
        with Container(id="main-container"), Vertical():
            yield LoadingIndicator(id="loading-indicator")
            yield StatsPanel(id="stats-panel")
            yield CalendarTable(id="calendar-table")
        yield Footer()

    def on_mount(self) -> None:
        """Load data when the app starts."""
        self._update_title()
        self.load_data_async()

    def _update_title(self) -> None:
        self.title = f"Folha - {self.period.label}"

    def _session(self) -> ApiSession:
        return ApiSession(
            api_url=self.config.api_url,
            email=self.config.email,
            password=self.config.password,
        )

    def load_data_async(self) -> None:
        """Start async data loading."""
        loading = self.query_one("#loading-indicator", LoadingIndicator)
        loading.add_class("visible")
        self.run_worker(self._fetch_and_update, exclusive=True, thread=True)

    def _fetch_and_update(self) -> None:
        """Load time records from the backend and compute the period statistics."""
        try:
            with self._session() as session:
                self.records = session.get_time_records()
        except (OSError, ValueError, FolhaError) as e:
            logger.error("Failed to fetch time records: {}", e)
            self.call_from_thread(self._fetch_failed, e)
            return

        log_malformed_records(self.records)
        self.call_from_thread(self._update_ui)

    def _fetch_failed(self, error: Exception) -> None:
        self.query_one("#loading-indicator", LoadingIndicator).remove_class("visible")
        self.notify(f"Failed to fetch time records: {error}", severity="error")

    def _update_ui(self) -> None:
        """Recompute statistics for the selected period and refresh widgets."""
        stats, previous = period_statistics(self.records, self.period)

        stats_panel = self.query_one("#stats-panel", StatsPanel)
        stats_panel.update_stats(stats, previous)

        calendar_table = self.query_one("#calendar-table", CalendarTable)
        calendar_table.load_days(generate_period_calendar(self.period, self.records), self.today)

        loading = self.query_one("#loading-indicator", LoadingIndicator)
        loading.remove_class("visible")

        calendar_table.focus()

    def _show_period(self, period: ReportingPeriod) -> None:
        # Records are already fetched, only the aggregation changes
        self.period = period
        self._update_title()
        self._update_ui()

    def action_refresh(self) -> None:
        """Refresh data from the backend."""
        self.notify("Refreshing data...", severity="information")
        self.load_data_async()

    def action_next_period(self) -> None:
        """Navigate to the next reporting period."""
        self._show_period(next_reporting_period(self.period))

    def action_prev_period(self) -> None:
        """Navigate to the previous reporting period."""
        self._show_period(previous_reporting_period(self.period))

    def action_current_period(self) -> None:
        """Navigate to the period containing today."""
        self._show_period(compute_reporting_period(self.today))

    def action_add_record(self) -> None:
        """Open the record dialog for the selected date."""
        calendar_table = self.query_one("#calendar-table", CalendarTable)

        target_date = self.today
        if calendar_table.is_valid_coordinate(calendar_table.cursor_coordinate):
            row_key, _ = calendar_table.coordinate_to_cell_key(calendar_table.cursor_coordinate)
            # The row key's value is the ISO date string
            if row_key.value:
                target_date = date.fromisoformat(row_key.value)

        self.push_screen(RecordDialog(target_date), self.handle_record_result)

    def handle_record_result(self, record: TimeRecord | None) -> None:
        """Send the record built by the dialog to the backend."""
        if record is None:
            return
        self.run_worker(lambda: self._create_record(record), thread=True)

    def _create_record(self, record: TimeRecord) -> None:
        try:
            with self._session() as session:
                session.create_time_record(record)
        except (OSError, FolhaError) as e:
            logger.error("Failed to create {} record: {}", record.work_type.value, e)
            self.call_from_thread(
                self.notify, f"Failed to save record: {e}", severity="error"
            )
            return

        self.call_from_thread(
            self.notify, f"Saved {record.work_type.label.lower()} record", severity="information"
        )
        self.call_from_thread(self.load_data_async)

    def action_help(self) -> None:
        """Show help message."""
        help_text = """
        [bold]Folha - Keyboard Shortcuts[/bold]

        [cyan]q[/cyan] - Quit application
        [cyan]r[/cyan] - Refresh data from the backend
        [cyan]a[/cyan] - Add a record on the selected day
        [cyan]n[/cyan] / [cyan]b[/cyan] - Next / previous period
        [cyan]c[/cyan] - Current period
        [cyan]?[/cyan] - Show this help

        [bold]Reporting period:[/bold]
        • Runs from the 21st of the previous month to the 20th
        • Working days are Monday to Friday
        • Vacation and sick leave count day by day
        """
        self.notify(help_text, title="Help", timeout=10)
