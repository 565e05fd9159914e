"""Reporting period arithmetic and statistics.

Rules:
- A reporting period runs from the 21st of the previous month to the 20th of
  the reference month.
- Working days are Monday to Friday; there is no holiday calendar.
- Vacation and sick leave records are attributed day by day, so a range that
  crosses a period boundary is split between the two periods.
- Malformed records are skipped, never raised.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from folha.errors import InvalidRangeError
from folha.models import CalendarDay, PeriodStats, ReportingPeriod, TimeRecord, WorkType

PERIOD_START_DAY = 21
PERIOD_END_DAY = 20


def compute_reporting_period(reference_date: date) -> ReportingPeriod:
    """Return the period ending on the 20th of the reference date's month."""
    if reference_date.month == 1:
        start = date(reference_date.year - 1, 12, PERIOD_START_DAY)
    else:
        start = date(reference_date.year, reference_date.month - 1, PERIOD_START_DAY)
    end = date(reference_date.year, reference_date.month, PERIOD_END_DAY)
    return ReportingPeriod(start=start, end=end)


def previous_reporting_period(period: ReportingPeriod) -> ReportingPeriod:
    """Return the period immediately before the given one."""
    # The start date lies in the previous period's end month
    return compute_reporting_period(period.start)


def next_reporting_period(period: ReportingPeriod) -> ReportingPeriod:
    """Return the period immediately after the given one."""
    # 20 + 15 always lands in the following month
    return compute_reporting_period(period.end + timedelta(days=15))


def count_working_days(start: date, end: date) -> int:
    """Count days in the inclusive range that are not Saturday or Sunday."""
    if start > end:
        raise InvalidRangeError(start, end)

    count = 0
    current = start
    while current <= end:
        # 5 = Saturday, 6 = Sunday
        if current.weekday() not in (5, 6):
            count += 1
        current += timedelta(days=1)
    return count


def is_well_formed(record: TimeRecord) -> bool:
    """Check that a record carries the date fields its work type requires."""
    if record.work_type.is_range:
        return (
            record.start_date is not None
            and record.end_date is not None
            and record.start_date <= record.end_date
        )
    return record.date is not None


def effective_days(record: TimeRecord) -> list[date]:
    """
    List the calendar days a record applies to.

    Range records expand to every day of their inclusive range; single-day
    records give their date. Malformed records give an empty list.
    """
    if not is_well_formed(record):
        return []
    if record.work_type.is_range:
        days = []
        current = record.start_date
        while current <= record.end_date:
            days.append(current)
            current += timedelta(days=1)
        return days
    return [record.date]


def compute_period_statistics(
    records: Iterable[TimeRecord], period_start: date, period_end: date
) -> PeriodStats:
    """
    Aggregate records into statistics for the inclusive period.

    Each effective day of a record is tested against the period on its own.
    Every in-period day adds one filled day; leave categories count days and
    the three work categories sum their hours.
    """
    working_days = count_working_days(period_start, period_end)
    stats = PeriodStats(
        period=ReportingPeriod(start=period_start, end=period_end),
        working_days=working_days,
    )

    for record in records:
        days_in_period = sum(
            1 for day in effective_days(record) if period_start <= day <= period_end
        )
        if days_in_period == 0:
            continue

        stats.records_in_period.append(record)
        stats.filled_days += days_in_period

        work_type = record.work_type
        if work_type.is_work:
            hours = record.total_hours or 0.0
            stats.extra_hours += record.extra_hours or 0.0
            if work_type == WorkType.REGULAR:
                stats.regular_hours += hours
            elif work_type == WorkType.REDUCED:
                stats.reduced_hours += hours
            else:
                stats.weekend_hours += hours
        elif work_type == WorkType.VACATION:
            stats.vacation_days += days_in_period
        elif work_type == WorkType.SICK_LEAVE:
            stats.sick_days += days_in_period
        else:
            stats.absent_days += days_in_period

    return stats


def index_records_by_day(records: Iterable[TimeRecord]) -> dict[date, list[TimeRecord]]:
    """
    Map each calendar day to the records that apply to it.

    Several records on the same day are all kept, in input order.
    """
    by_day: dict[date, list[TimeRecord]] = {}
    for record in records:
        for day in effective_days(record):
            by_day.setdefault(day, []).append(record)
    return by_day


def generate_period_calendar(
    period: ReportingPeriod, records: Iterable[TimeRecord]
) -> list[CalendarDay]:
    """Generate one CalendarDay per day of the period, with its records."""
    by_day = index_records_by_day(records)
    return [CalendarDay(date=day, records=by_day.get(day, [])) for day in period]
