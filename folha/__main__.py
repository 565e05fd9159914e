"""Main entry point for folha."""

import sys
from datetime import date, datetime

from loguru import logger
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from folha.api import ApiSession
from folha.app import FolhaApp, log_malformed_records, period_statistics
from folha.config import DEFAULT_API_URL, DEFAULT_CONFIG_PATH, Config
from folha.hours import format_hours
from folha.logs import configure_logging
from folha.models import PeriodStats
from folha.periods import compute_reporting_period
from folha.records import LOCAL_TZ


def configure() -> Config:
    """Ask for the backend URL and credentials and store them."""
    console = Console()
    console.rule("[bold]Folha setup[/bold]")
    config = Config(
        api_url=Prompt.ask("Backend URL", default=DEFAULT_API_URL, console=console),
        email=Prompt.ask("Email", console=console),
        password=Prompt.ask("Password", password=True, console=console),
    )
    config.save()
    console.print(f"[green]Saved to {DEFAULT_CONFIG_PATH}[/green]")
    return config


def build_stats_table(stats: PeriodStats, previous: PeriodStats) -> Table:
    """Render current and previous period statistics side by side."""
    table = Table(title="Reporting period statistics")
    table.add_column("")
    table.add_column(f"{stats.period.label}", justify="right")
    table.add_column(f"{previous.period.label}", justify="right", style="dim")

    rows = [
        ("Period", lambda s: f"{s.period.start:%d/%m/%Y} - {s.period.end:%d/%m/%Y}"),
        ("Working days", lambda s: str(s.working_days)),
        ("Filled days", lambda s: f"{s.filled_days} ({s.fill_ratio:.0%})"),
        ("Regular hours", lambda s: format_hours(s.regular_hours)),
        ("Reduced hours", lambda s: format_hours(s.reduced_hours)),
        ("Weekend hours", lambda s: format_hours(s.weekend_hours)),
        ("Extra hours", lambda s: format_hours(s.extra_hours)),
        ("Vacation days", lambda s: str(s.vacation_days)),
        ("Sick days", lambda s: str(s.sick_days)),
        ("Absent days", lambda s: str(s.absent_days)),
    ]
    for name, render in rows:
        table.add_row(name, render(stats), render(previous))
    return table


def print_stats(config: Config, reference_date: date) -> None:
    """Fetch records and print the statistics of the period containing the date."""
    with ApiSession(
        api_url=config.api_url, email=config.email, password=config.password
    ) as session:
        records = session.get_time_records()

    log_malformed_records(records)
    period = compute_reporting_period(reference_date)
    stats, previous = period_statistics(records, period)
    Console().print(build_stats_table(stats, previous))


def main() -> None:
    """Main entry point."""
    configure_logging()

    if len(sys.argv) > 1 and sys.argv[1] == "config":
        configure()
        return

    # Check if config exists
    config = Config.from_env() or Config.load()
    if not config:
        config = configure()

    today = datetime.now(LOCAL_TZ).date()

    if len(sys.argv) > 1 and sys.argv[1] == "stats":
        reference_date = date.fromisoformat(sys.argv[2]) if len(sys.argv) > 2 else today
        logger.info("Printing statistics for {}", reference_date)
        print_stats(config, reference_date)
        return

    # Run the TUI
    app = FolhaApp(config, today=today)
    app.run()


if __name__ == "__main__":
    main()
