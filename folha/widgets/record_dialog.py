"""Dialog for registering a new time record from a template."""

from datetime import date
from typing import ClassVar

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from folha.errors import InvalidRecordError
from folha.hours import parse_hours
from folha.templates import TEMPLATES, RecordTemplate, build_record

# Form rows that only some templates show
OPTIONAL_FIELDS = (
    "date",
    "start_date",
    "end_date",
    "site_manager",
    "work_location",
    "displacement",
    "extra_hours",
)


class RecordDialog(ModalScreen):
    """Modal dialog for registering a record on a given day."""

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("escape", "dismiss", "Cancel"),
    ]

    CSS = """
    RecordDialog {
        align: center middle;
    }

    #dialog {
        width: 70;
        height: auto;
        background: $panel;
        border: thick $primary;
        padding: 1 2;
    }

    #dialog-title {
        width: 100%;
        text-align: center;
        margin-bottom: 1;
        text-style: bold;
    }

    .input-row {
        height: auto;
        grid-size: 2;
        grid-columns: 20 1fr;
    }

    .input-label {
        padding-right: 1;
    }

    #button-row {
        width: 100%;
        height: auto;
        grid-size: 2;
        margin-top: 1;
    }

    Button {
        margin: 0 1;
    }
    """

    def __init__(self, target_date: date, **kwargs) -> None:
        super().__init__(**kwargs)
        self.target_date = target_date
        self._templates: list[RecordTemplate] = list(TEMPLATES.values())
        self._template_index = 0

    @property
    def template(self) -> RecordTemplate:
        """Currently selected template."""
        return self._templates[self._template_index]

    def compose(self) -> ComposeResult:
        """Compose the dialog."""
        day = self.target_date.isoformat()
        with Vertical(id="dialog"):
            yield Static(
                f"New record for {self.target_date.strftime('%Y-%m-%d (%a)')}", id="dialog-title"
            )

            with Grid(classes="input-row"):
                yield Label("Type:", classes="input-label")
                yield Button(self.template.name, id="template-toggle", variant="primary")

            with Grid(classes="input-row", id="row-date"):
                yield Label("Date:", classes="input-label")
                yield Input(value=day, placeholder="YYYY-MM-DD", id="date")

            with Grid(classes="input-row", id="row-start_date"):
                yield Label("Start date:", classes="input-label")
                yield Input(value=day, placeholder="YYYY-MM-DD", id="start_date")

            with Grid(classes="input-row", id="row-end_date"):
                yield Label("End date:", classes="input-label")
                yield Input(value=day, placeholder="YYYY-MM-DD", id="end_date")

            with Grid(classes="input-row", id="row-hours"):
                yield Label("Hours:", classes="input-label")
                yield Input(placeholder="8 or 8:30", id="hours")

            with Grid(classes="input-row", id="row-extra_hours"):
                yield Label("Extra hours:", classes="input-label")
                yield Input(placeholder="0", id="extra_hours")

            with Grid(classes="input-row", id="row-work_location"):
                yield Label("Work location:", classes="input-label")
                yield Input(id="work_location")

            with Grid(classes="input-row", id="row-site_manager"):
                yield Label("Site manager:", classes="input-label")
                yield Input(id="site_manager")

            with Grid(classes="input-row", id="row-displacement"):
                yield Label("Displacement:", classes="input-label")
                yield Button("No", id="displacement-toggle", variant="default")

            with Grid(classes="input-row"):
                yield Label("Description:", classes="input-label")
                yield Input(placeholder="Optional description", id="description")

            with Grid(id="button-row"):
                yield Button("Save", id="save-button", variant="primary")
                yield Button("Cancel", id="cancel-button", variant="default")

    def on_mount(self) -> None:
        """Apply the first template."""
        self.apply_template()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "cancel-button":
            self.dismiss(None)
        elif event.button.id == "save-button":
            self.save_record()
        elif event.button.id == "template-toggle":
            self._template_index = (self._template_index + 1) % len(self._templates)
            self.apply_template()
        elif event.button.id == "displacement-toggle":
            self.set_displacement(event.button.label != "Yes")

    def apply_template(self) -> None:
        """Show the fields of the current template and fill its defaults."""
        template = self.template
        self.query_one("#template-toggle", Button).label = template.name

        for field in OPTIONAL_FIELDS:
            self.query_one(f"#row-{field}", Grid).display = field in template.fields
        self.query_one("#row-hours", Grid).display = template.work_type.is_work

        hours = template.hours
        self.query_one("#hours", Input).value = f"{hours:g}" if hours is not None else ""
        self.query_one("#extra_hours", Input).value = f"{template.extra_hours:g}"
        self.query_one("#description", Input).placeholder = template.description
        self.set_displacement(template.displacement)

    def set_displacement(self, enabled: bool) -> None:
        """Update the displacement toggle."""
        button = self.query_one("#displacement-toggle", Button)
        button.label = "Yes" if enabled else "No"
        button.variant = "success" if enabled else "default"

    def _value(self, field: str) -> str:
        return self.query_one(f"#{field}", Input).value.strip()

    def _date_value(self, field: str) -> date | None:
        value = self._value(field)
        return date.fromisoformat(value) if value else None

    def save_record(self) -> None:
        """Build the record and dismiss the dialog with it."""
        template = self.template
        try:
            record = build_record(
                template,
                day=self._date_value("date"),
                start_date=self._date_value("start_date"),
                end_date=self._date_value("end_date"),
                hours=parse_hours(self._value("hours")),
                extra_hours=parse_hours(self._value("extra_hours"))
                if "extra_hours" in template.fields
                else 0.0,
                work_location=self._value("work_location"),
                site_manager=self._value("site_manager"),
                displacement=self.query_one("#displacement-toggle", Button).label == "Yes",
                description=self._value("description"),
            )
        except ValueError as e:
            self.notify(f"Invalid format: {e}", severity="error")
            return
        except InvalidRecordError as e:
            self.notify(str(e), severity="error")
            return

        self.dismiss(record)
