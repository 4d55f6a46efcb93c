import pytest

from calendar_invoicer.domain import InvoiceLine, Month, RawEvent, format_decimal


def test_raw_event_from_api_reads_timed_fields() -> None:
    event = RawEvent.from_api(
        {
            "summary": "Acme-ProjectX",
            "description": "Review",
            "start": {"dateTime": "2024-03-01T09:00:00-05:00", "timeZone": "America/New_York"},
            "end": {"dateTime": "2024-03-01T10:00:00-05:00"},
            "colorId": "2",
        }
    )

    assert event == RawEvent(
        summary="Acme-ProjectX",
        description="Review",
        start="2024-03-01T09:00:00-05:00",
        end="2024-03-01T10:00:00-05:00",
        color_id="2",
    )


def test_raw_event_from_api_ignores_all_day_dates() -> None:
    event = RawEvent.from_api({"start": {"date": "2024-03-01"}, "end": {"date": "2024-03-02"}})

    assert event.start is None
    assert event.end is None
    assert event.summary is None
    assert event.color_id is None


@pytest.mark.parametrize(("value", "text"), [(8.0, "8"), (0.0, "0"), (7.5, "7.5"), (36.0 * 1.25, "45"), (40, "40")])
def test_format_decimal(value, text) -> None:
    assert format_decimal(value) == text


def test_invoice_line_row_order() -> None:
    line = InvoiceLine(
        client="Acme",
        sub_client="ProjectX",
        description="Review",
        date="2024-03-01",
        hours=1.5,
        rate=40.0,
        total=60.0,
    )

    assert line.to_row() == ["2024-03-01", "Acme", "ProjectX", "1.5", "Review", "40", "60"]


def test_month_codes_and_last_days() -> None:
    assert [month.code for month in Month][:3] == ["01", "02", "03"]
    assert Month.DECEMBER.code == "12"
    assert Month.FEBRUARY.last_day(2024) == 29
    assert Month.FEBRUARY.last_day(1900) == 28
    assert Month.DECEMBER.last_day(2024) == 31
    assert Month.SEPTEMBER.label == "September"


@pytest.mark.parametrize("value", ["Smarch", "13", 0])
def test_month_rejects_unknown_values(value) -> None:
    with pytest.raises(ValueError):
        Month.from_value(value)
