"""Normalization of backend time records.

The backend mixes date-only strings, full timestamps, snake_case and camelCase
keys. Everything is converted to ``TimeRecord`` values here so the period
calculations only ever see ``datetime.date`` objects.
"""

from datetime import UTC, date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from loguru import logger

from folha.errors import InvalidRecordError
from folha.hours import parse_hours
from folha.models import RecordStatus, TimeRecord, WorkType

LOCAL_TZ = ZoneInfo("Europe/Lisbon")  # Timezone the backend users live in

# Accepted keys for each field, first match wins
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "work_type": ("work_type", "workType", "templateType", "template_type"),
    "date": ("date",),
    "start_date": ("start_date", "startDate"),
    "end_date": ("end_date", "endDate"),
    "total_hours": ("total_hours", "totalHours", "hours"),
    "extra_hours": ("extra_hours", "extraHours"),
    "work_location": ("work_location", "workLocation"),
    "site_manager": ("site_manager", "siteManager"),
    "displacement": ("displacement",),
    "description": ("description",),
    "status": ("status",),
}


def parse_date(value: date | datetime | str | float | None) -> date | None:
    """
    Convert a backend date value into a calendar date.

    Aware timestamps are converted to LOCAL_TZ first, so a value such as
    '2024-06-30T23:00:00.000Z' (local midnight of July 1st) lands on the day
    the user picked. Naive timestamps keep their own date and numbers
    are epoch milliseconds.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(LOCAL_TZ)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return parse_date(datetime.fromtimestamp(value / 1000, tz=UTC))
    if not isinstance(value, str):
        msg = f"Unsupported date value: {value!r}"
        raise TypeError(msg)

    text = value.strip()
    if not text:
        return None
    if len(text) == 10:
        return date.fromisoformat(text)
    return parse_date(datetime.fromisoformat(text))


def _lookup(raw: dict[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        if raw.get(key) not in (None, ""):
            return raw[key]
    return None


def parse_time_record(raw: dict[str, Any]) -> TimeRecord:
    """Parse one record from the backend JSON representation."""
    if not isinstance(raw, dict):
        msg = f"Expected a record object, got {type(raw).__name__}"
        raise InvalidRecordError(msg)

    work_type_value = _lookup(raw, "work_type")
    if work_type_value is None:
        msg = f"Record {raw.get('id')!r} has no work type"
        raise InvalidRecordError(msg)

    try:
        work_type = WorkType.parse(str(work_type_value))
        status_value = _lookup(raw, "status")
        status = RecordStatus(status_value) if status_value else RecordStatus.PENDING
        record = TimeRecord(
            id=_lookup(raw, "id"),
            work_type=work_type,
            date=parse_date(_lookup(raw, "date")),
            start_date=parse_date(_lookup(raw, "start_date")),
            end_date=parse_date(_lookup(raw, "end_date")),
            total_hours=parse_hours(_lookup(raw, "total_hours")),
            extra_hours=parse_hours(_lookup(raw, "extra_hours")),
            work_location=_lookup(raw, "work_location") or "",
            site_manager=_lookup(raw, "site_manager") or "",
            displacement=bool(_lookup(raw, "displacement")),
            description=_lookup(raw, "description") or "",
            status=status,
        )
    except (TypeError, ValueError, OverflowError, OSError) as e:
        msg = f"Record {raw.get('id')!r} is invalid: {e}"
        raise InvalidRecordError(msg) from e

    for hours in (record.total_hours, record.extra_hours):
        if hours is not None and hours < 0:
            msg = f"Record {record.id!r} has negative hours: {hours}"
            raise InvalidRecordError(msg)
    return record


def parse_time_records(raw_records: list[dict[str, Any]]) -> list[TimeRecord]:
    """Parse a list of backend records, skipping the ones that fail."""
    records = []
    for raw in raw_records:
        try:
            records.append(parse_time_record(raw))
        except InvalidRecordError as e:
            logger.warning("Skipping time record: {}", e)
    return records


def record_to_payload(record: TimeRecord) -> dict[str, Any]:
    """Serialize a record for creation through the backend API."""
    payload: dict[str, Any] = {
        "work_type": record.work_type.value,
        "description": record.description,
    }
    if record.work_type.is_range:
        payload["start_date"] = record.start_date.isoformat() if record.start_date else None
        payload["end_date"] = record.end_date.isoformat() if record.end_date else None
    else:
        payload["date"] = record.date.isoformat() if record.date else None

    if record.work_type.is_work:
        payload["total_hours"] = record.total_hours
        payload["extra_hours"] = record.extra_hours or 0
        payload["work_location"] = record.work_location
        payload["site_manager"] = record.site_manager
        payload["displacement"] = record.displacement
    return payload
