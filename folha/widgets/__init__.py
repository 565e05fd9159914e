"""Textual widgets for the TUI."""

from folha.widgets.calendar_table import CalendarTable
from folha.widgets.stats_panel import StatsPanel

__all__ = ["CalendarTable", "StatsPanel"]
