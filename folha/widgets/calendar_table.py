"""Calendar table widget showing the days of a reporting period."""

from datetime import date as date_type

from rich.text import Text
from textual.widgets import DataTable

from folha.hours import format_hours
from folha.models import CalendarDay, WorkType

# Row colours per work type, leave types take precedence over work
WORK_TYPE_STYLES = {
    WorkType.VACATION: "magenta",
    WorkType.SICK_LEAVE: "red",
    WorkType.ABSENCE: "dark_orange",
    WorkType.REGULAR: "green",
    WorkType.REDUCED: "green",
    WorkType.WEEKEND: "green",
}
STYLE_PRIORITY = (
    WorkType.SICK_LEAVE,
    WorkType.VACATION,
    WorkType.ABSENCE,
    WorkType.WEEKEND,
    WorkType.REGULAR,
    WorkType.REDUCED,
)


class CalendarTable(DataTable):
    """Table displaying each day of the period with its records."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.show_cursor = True
        self.zebra_stripes = True
        self.can_focus = True

    def on_mount(self) -> None:
        """Set up the table columns."""
        # Date format is "DD/MM (Day)" = 11 chars
        self.add_column("Date", width=11)
        self.add_column("Type", width=24)
        self.add_column("Hours", width=9)
        self.add_column("Extra", width=9)
        self.add_column("Location", width=18)
        self.add_column("Status", width=9)
        self.add_column("Note")

    def load_days(self, days: list[CalendarDay], today: date_type) -> None:
        """Load calendar days into the table."""
        self.clear()
        today_row_index = None

        for idx, day in enumerate(days):
            date_display = f"{day.date:%d/%m} {day.date:(%a)}"
            types = ", ".join(record.work_type.label for record in day.records)
            hours_str = format_hours(day.hours)
            extra_str = format_hours(day.extra_hours)
            locations = ", ".join(
                sorted({record.work_location for record in day.records if record.work_location})
            )
            statuses = ", ".join(
                sorted({record.status.value for record in day.records})
            )
            note = " | ".join(record.description for record in day.records if record.description)
            if len(day.records) > 1:
                note = f"[{len(day.records)} records] {note}"

            if day.date == today:
                style = "bold yellow"
                today_row_index = idx
            elif day.records:
                style = self._style_for(day)
            elif day.is_weekend:
                style = "blue"
            elif day.date < today:
                # Working day in the past without any record
                style = "dim red"
            else:
                style = "dim"

            self.add_row(
                Text(date_display, style=style),
                Text(types or "--", style=style),
                Text(hours_str, style=style),
                Text(extra_str, style=style),
                Text(locations, style=style),
                Text(statuses, style=style),
                Text(note, style=style),
                key=day.date.isoformat(),
            )

        if today_row_index is not None and len(self.rows) > 0:
            self.move_cursor(row=today_row_index)

    @staticmethod
    def _style_for(day: CalendarDay) -> str:
        """Pick the colour of the most significant record of the day."""
        present = {record.work_type for record in day.records}
        for work_type in STYLE_PRIORITY:
            if work_type in present:
                return WORK_TYPE_STYLES[work_type]
        return ""
