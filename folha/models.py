"""Data models for time records and reporting periods."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date as date_type
from datetime import timedelta
from enum import Enum

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


class WorkType(str, Enum):
    """Category of a time record, as stored by the backend."""

    REGULAR = "trabalho_normal"
    REDUCED = "trabalho_reduzido"
    WEEKEND = "trabalho_fim_semana"
    VACATION = "ferias"
    SICK_LEAVE = "baixa"
    ABSENCE = "falta"

    @classmethod
    def parse(cls, value: str) -> "WorkType":
        """Parse a wire value, accepting the hyphenated template spelling."""
        return cls(value.strip().lower().replace("-", "_"))

    @property
    def is_work(self) -> bool:
        """Whether records of this type carry worked hours."""
        return self in (WorkType.REGULAR, WorkType.REDUCED, WorkType.WEEKEND)

    @property
    def is_range(self) -> bool:
        """Whether records of this type span a start/end date range."""
        return self in (WorkType.VACATION, WorkType.SICK_LEAVE)

    @property
    def label(self) -> str:
        """Human readable name."""
        return WORK_TYPE_LABELS[self]


WORK_TYPE_LABELS = {
    WorkType.REGULAR: "Regular work",
    WorkType.REDUCED: "Reduced hours",
    WorkType.WEEKEND: "Weekend work",
    WorkType.VACATION: "Vacation",
    WorkType.SICK_LEAVE: "Sick leave",
    WorkType.ABSENCE: "Absence",
}


class RecordStatus(str, Enum):
    """Approval state of a time record."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class TimeRecord:
    """A single time record fetched from the backend.

    Vacation and sick leave records carry ``start_date``/``end_date``; every
    other type carries a single ``date``.
    """

    work_type: WorkType
    date: date_type | None = None
    start_date: date_type | None = None
    end_date: date_type | None = None
    total_hours: float | None = None
    extra_hours: float | None = None
    id: int | str | None = None
    work_location: str = ""
    site_manager: str = ""
    displacement: bool = False
    description: str = ""
    status: RecordStatus = RecordStatus.PENDING


@dataclass(frozen=True)
class ReportingPeriod:
    """Inclusive 21st-to-20th reporting window."""

    start: date_type
    end: date_type

    def __contains__(self, target_date: object) -> bool:
        if not isinstance(target_date, date_type):
            return False
        return self.start <= target_date <= self.end

    def __iter__(self) -> Iterator[date_type]:
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    @property
    def label(self) -> str:
        """Short label such as 'Feb/Mar 2024'."""
        start_month = MONTH_ABBREVIATIONS[self.start.month - 1]
        end_month = MONTH_ABBREVIATIONS[self.end.month - 1]
        return f"{start_month}/{end_month} {self.end.year}"


@dataclass
class PeriodStats:
    """Statistics for a reporting period."""

    period: ReportingPeriod
    working_days: int
    filled_days: int = 0
    regular_hours: float = 0.0
    reduced_hours: float = 0.0
    weekend_hours: float = 0.0
    extra_hours: float = 0.0
    vacation_days: int = 0
    sick_days: int = 0
    absent_days: int = 0
    records_in_period: list[TimeRecord] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        """Hours across the three work categories."""
        return self.regular_hours + self.reduced_hours + self.weekend_hours

    @property
    def leave_days(self) -> int:
        """Vacation, sick leave and absence days combined."""
        return self.vacation_days + self.sick_days + self.absent_days

    @property
    def missing_days(self) -> int:
        """Working days still without a record (never negative)."""
        return max(0, self.working_days - self.filled_days)

    @property
    def fill_ratio(self) -> float:
        """Filled days over working days, capped at 1."""
        if self.working_days == 0:
            return 0.0
        return min(1.0, self.filled_days / self.working_days)


@dataclass
class CalendarDay:
    """A single day of a reporting period with its records."""

    date: date_type
    records: list[TimeRecord]

    @property
    def is_weekend(self) -> bool:
        """Saturday or Sunday."""
        # 5 = Saturday, 6 = Sunday
        return self.date.weekday() in (5, 6)

    @property
    def is_working_day(self) -> bool:
        return not self.is_weekend

    @property
    def hours(self) -> float:
        """Worked hours recorded on this day."""
        return sum(
            record.total_hours or 0.0 for record in self.records if record.work_type.is_work
        )

    @property
    def extra_hours(self) -> float:
        return sum(
            record.extra_hours or 0.0 for record in self.records if record.work_type.is_work
        )
