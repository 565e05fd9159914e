"""Tests for backend record normalization."""

from datetime import date, datetime, timezone

import pytest

from folha.errors import InvalidRecordError
from folha.models import RecordStatus, TimeRecord, WorkType
from folha.periods import compute_period_statistics
from folha.records import parse_date, parse_time_record, parse_time_records, record_to_payload


def test_parse_date_formats():
    """Date-only strings and timestamps give calendar dates."""
    assert parse_date("2024-03-01") == date(2024, 3, 1)
    assert parse_date("2024-03-01T00:00:00.000Z") == date(2024, 3, 1)
    assert parse_date("2024-03-01T23:30:00") == date(2024, 3, 1)
    assert parse_date(date(2024, 3, 1)) == date(2024, 3, 1)
    assert parse_date("") is None
    assert parse_date(None) is None


def test_parse_date_converts_to_local_time():
    """UTC timestamps are read in Lisbon time before taking the date."""
    # Lisbon is UTC+1 in summer
    assert parse_date("2024-06-30T23:00:00.000Z") == date(2024, 7, 1)
    assert parse_date(datetime(2024, 6, 30, 23, 0, tzinfo=timezone.utc)) == date(2024, 7, 1)
    # and UTC+0 in winter
    assert parse_date("2024-01-31T23:00:00+00:00") == date(2024, 1, 31)


def test_parse_date_invalid():
    with pytest.raises(ValueError):
        parse_date("not-a-day")


def test_parse_date_epoch_milliseconds():
    assert parse_date(1709251200000) == date(2024, 3, 1)
    # 23:00 UTC on June 30th is already July 1st in Lisbon
    assert parse_date(1719788400000) == date(2024, 7, 1)


def test_parse_date_unsupported_type():
    with pytest.raises(TypeError):
        parse_date([2024, 3, 1])
    with pytest.raises(TypeError):
        parse_date({"year": 2024})


def test_parse_camel_case_record():
    """Records using the form field names are understood."""
    record = parse_time_record(
        {
            "id": 7,
            "workType": "trabalho-normal",
            "date": "2024-03-01T00:00:00.000Z",
            "totalHours": "8.00",
            "extraHours": "1.5",
            "workLocation": "Obra Norte",
            "siteManager": "Rui",
            "displacement": True,
            "status": "approved",
        }
    )

    assert record == TimeRecord(
        id=7,
        work_type=WorkType.REGULAR,
        date=date(2024, 3, 1),
        total_hours=8.0,
        extra_hours=1.5,
        work_location="Obra Norte",
        site_manager="Rui",
        displacement=True,
        status=RecordStatus.APPROVED,
    )


def test_parse_snake_case_range_record():
    """Vacation records keep their range and no single date."""
    record = parse_time_record(
        {
            "id": "a1",
            "work_type": "ferias",
            "date": None,
            "start_date": "2024-02-25",
            "end_date": "2024-02-27T00:00:00.000Z",
            "description": "Summer",
        }
    )

    assert record.work_type == WorkType.VACATION
    assert record.date is None
    assert record.start_date == date(2024, 2, 25)
    assert record.end_date == date(2024, 2, 27)
    assert record.total_hours is None
    assert record.status == RecordStatus.PENDING
    assert record.description == "Summer"


def test_parse_record_hours_variants():
    """Hours may come as numbers, decimal strings or HH:MM."""
    base = {"work_type": "trabalho_reduzido", "date": "2024-03-04"}

    assert parse_time_record({**base, "total_hours": 4}).total_hours == 4.0
    assert parse_time_record({**base, "hours": "3:30"}).total_hours == 3.5
    assert parse_time_record({**base, "total_hours": ""}).total_hours is None


def test_parse_record_errors():
    """Unknown types and unparsable values raise InvalidRecordError."""
    with pytest.raises(InvalidRecordError):
        parse_time_record({"id": 1, "date": "2024-03-01"})
    with pytest.raises(InvalidRecordError):
        parse_time_record({"id": 2, "work_type": "overtime", "date": "2024-03-01"})
    with pytest.raises(InvalidRecordError):
        parse_time_record({"id": 3, "work_type": "falta", "date": "yesterday!"})
    with pytest.raises(InvalidRecordError):
        parse_time_record({"id": 4, "work_type": "trabalho_normal", "total_hours": "many"})


def test_parse_time_records_skips_invalid():
    """One bad record does not prevent the others from loading."""
    records = parse_time_records(
        [
            {"id": 1, "work_type": "falta", "date": "2024-03-05"},
            {"id": 2, "work_type": "unknown", "date": "2024-03-06"},
            {"id": 3, "work_type": "baixa", "start_date": "2024-03-07", "end_date": "2024-03-08"},
        ]
    )

    assert [record.id for record in records] == [1, 3]


def test_record_to_payload_work():
    """Work records send hours and site details."""
    record = TimeRecord(
        work_type=WorkType.WEEKEND,
        date=date(2024, 3, 2),
        total_hours=8.0,
        extra_hours=2.0,
        work_location="Obra Sul",
        site_manager="Ana",
        displacement=True,
        description="Weekend work",
    )

    assert record_to_payload(record) == {
        "work_type": "trabalho_fim_semana",
        "description": "Weekend work",
        "date": "2024-03-02",
        "total_hours": 8.0,
        "extra_hours": 2.0,
        "work_location": "Obra Sul",
        "site_manager": "Ana",
        "displacement": True,
    }


def test_record_to_payload_range():
    """Range records send their dates only."""
    record = TimeRecord(
        work_type=WorkType.SICK_LEAVE,
        start_date=date(2024, 3, 4),
        end_date=date(2024, 3, 8),
        description="Flu",
    )

    payload = record_to_payload(record)

    assert payload == {
        "work_type": "baixa",
        "description": "Flu",
        "start_date": "2024-03-04",
        "end_date": "2024-03-08",
    }
    assert parse_time_record(payload) == record


def test_parse_record_rejects_negative_hours():
    base = {"id": 5, "work_type": "trabalho_normal", "date": "2024-03-01"}

    with pytest.raises(InvalidRecordError, match="negative hours"):
        parse_time_record({**base, "total_hours": -8})
    with pytest.raises(InvalidRecordError, match="negative hours"):
        parse_time_record({**base, "total_hours": 8, "extra_hours": "-1:30"})


def test_negative_hours_do_not_reach_the_totals():
    records = parse_time_records(
        [
            {"id": 1, "work_type": "trabalho_normal", "date": "2024-03-01", "total_hours": -8},
            {"id": 2, "work_type": "trabalho_normal", "date": "2024-03-04", "total_hours": 8},
        ]
    )
    stats = compute_period_statistics(records, date(2024, 2, 21), date(2024, 3, 20))

    assert [record.id for record in records] == [2]
    assert stats.regular_hours == 8
    assert stats.filled_days == 1


def test_parse_record_unsupported_value_types():
    """Values of the wrong JSON type are reported as invalid records."""
    with pytest.raises(InvalidRecordError):
        parse_time_record("oops")
    with pytest.raises(InvalidRecordError):
        parse_time_record(["trabalho_normal", "2024-03-01"])
    with pytest.raises(InvalidRecordError):
        parse_time_record({"id": 1, "work_type": "falta", "date": [2024, 3, 1]})
    with pytest.raises(InvalidRecordError):
        parse_time_record(
            {"id": 2, "work_type": "trabalho_normal", "date": "2024-03-01", "total_hours": [8]}
        )


def test_parse_time_records_skips_wrong_types():
    records = parse_time_records(
        [
            {"id": 1, "work_type": "falta", "date": [2024, 3, 1]},
            "oops",
            None,
            {"id": 4, "work_type": "trabalho_normal", "date": 1709251200000, "total_hours": 8},
        ]
    )

    assert records == [
        TimeRecord(id=4, work_type=WorkType.REGULAR, date=date(2024, 3, 1), total_hours=8.0)
    ]
