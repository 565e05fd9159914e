"""Record templates used to register new time records."""

from dataclasses import dataclass
from datetime import date

from folha.errors import InvalidRecordError
from folha.models import TimeRecord, WorkType

MIN_HOURS = 0.25
MAX_HOURS = 24.0


@dataclass(frozen=True)
class RecordTemplate:
    """Defaults and visible fields for one kind of record."""

    work_type: WorkType
    name: str
    description: str
    fields: tuple[str, ...]
    hours: float | None = None
    extra_hours: float = 0.0
    displacement: bool = False


TEMPLATES: dict[WorkType, RecordTemplate] = {
    WorkType.REGULAR: RecordTemplate(
        work_type=WorkType.REGULAR,
        name="Work - Regular hours",
        description="Regular working day",
        fields=("date", "site_manager", "work_location", "displacement", "extra_hours"),
        hours=8.0,
    ),
    WorkType.REDUCED: RecordTemplate(
        work_type=WorkType.REDUCED,
        name="Work - Reduced hours",
        description="Reduced hours working day",
        fields=("date", "site_manager", "work_location"),
        hours=4.0,
    ),
    WorkType.WEEKEND: RecordTemplate(
        work_type=WorkType.WEEKEND,
        name="Work - Weekend",
        description="Weekend work",
        fields=("date", "site_manager", "work_location", "displacement", "extra_hours"),
        hours=8.0,
        extra_hours=2.0,
        displacement=True,
    ),
    WorkType.VACATION: RecordTemplate(
        work_type=WorkType.VACATION,
        name="Vacation",
        description="Vacation period",
        fields=("start_date", "end_date"),
    ),
    WorkType.ABSENCE: RecordTemplate(
        work_type=WorkType.ABSENCE,
        name="Absence",
        description="Justified absence",
        fields=("date",),
    ),
    WorkType.SICK_LEAVE: RecordTemplate(
        work_type=WorkType.SICK_LEAVE,
        name="Sick leave",
        description="Sick leave period",
        fields=("start_date", "end_date"),
    ),
}


def build_record(
    template: RecordTemplate,
    *,
    day: date | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    hours: float | None = None,
    extra_hours: float | None = None,
    work_location: str = "",
    site_manager: str = "",
    displacement: bool | None = None,
    description: str = "",
) -> TimeRecord:
    """
    Build a new record from a template and form values.

    Missing hours, extra hours, displacement and description fall back to the
    template defaults. Raises InvalidRecordError when a required date is
    missing, a range is inverted or hours are out of bounds.
    """
    work_type = template.work_type
    description = description or template.description

    if work_type.is_range:
        if start_date is None or end_date is None:
            msg = f"{template.name} needs a start and an end date"
            raise InvalidRecordError(msg)
        if start_date > end_date:
            msg = f"Start date {start_date} is after end date {end_date}"
            raise InvalidRecordError(msg)
        return TimeRecord(
            work_type=work_type,
            start_date=start_date,
            end_date=end_date,
            description=description,
        )

    if day is None:
        msg = f"{template.name} needs a date"
        raise InvalidRecordError(msg)

    if not work_type.is_work:
        return TimeRecord(work_type=work_type, date=day, description=description)

    if hours is None:
        hours = template.hours
    if hours is None or not MIN_HOURS <= hours <= MAX_HOURS:
        msg = f"Hours must be between {MIN_HOURS} and {MAX_HOURS}"
        raise InvalidRecordError(msg)

    if extra_hours is None:
        extra_hours = template.extra_hours if "extra_hours" in template.fields else 0.0
    if extra_hours < 0:
        msg = "Extra hours cannot be negative"
        raise InvalidRecordError(msg)

    if displacement is None:
        displacement = template.displacement

    return TimeRecord(
        work_type=work_type,
        date=day,
        total_hours=hours,
        extra_hours=extra_hours,
        work_location=work_location,
        site_manager=site_manager,
        displacement=displacement,
        description=description,
    )
