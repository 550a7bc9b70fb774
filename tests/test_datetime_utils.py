from datetime import date, datetime, timedelta

import pytest
import pytz

from pramuka.utils.datetime_utils import (
    format_archive_compact_label,
    format_archive_full_label,
    format_timestamp_label,
    get_friday_archive_window,
    parse_iso_date,
    parse_local_datetime,
)
from tests.conftest import jakarta


@pytest.mark.parametrize("day", [27, 28, 29, 30, 1, 2, 4, 5])
def test_non_friday_is_never_eligible(day):
    month = 4 if day > 20 else 5
    for hour in (0, 9, 15, 16, 23):
        window = get_friday_archive_window(jakarta(2024, month, day, hour, 30))
        assert window.eligible is False


def test_friday_boundary_is_inclusive():
    before = get_friday_archive_window(jakarta(2024, 5, 3, 14, 59, 59, 999000))
    at_cutoff = get_friday_archive_window(jakarta(2024, 5, 3, 15, 0, 0))
    late = get_friday_archive_window(jakarta(2024, 5, 3, 23, 59, 59))

    assert before.eligible is False
    assert at_cutoff.eligible is True
    assert late.eligible is True


def test_weekday_uses_reference_timezone_not_utc():
    # Thursday 20:30 UTC is already Friday 03:30 in Jakarta
    window = get_friday_archive_window(datetime(2024, 5, 2, 20, 30, tzinfo=pytz.UTC))
    assert window.iso_date == "2024-05-03"
    assert window.eligible is False

    # Friday 08:00 UTC is Friday 15:00 in Jakarta
    assert get_friday_archive_window(datetime(2024, 5, 3, 8, 0, tzinfo=pytz.UTC)).eligible is True


def test_range_covers_local_day_in_utc():
    window = get_friday_archive_window(jakarta(2024, 5, 3, 16, 0))

    assert window.iso_date == "2024-05-03"
    assert window.range_start_utc == datetime(2024, 5, 2, 17, 0, tzinfo=pytz.UTC)
    assert window.range_end_utc == datetime(2024, 5, 3, 16, 59, 59, 999000, tzinfo=pytz.UTC)


def test_naive_input_is_treated_as_utc():
    window = get_friday_archive_window(datetime(2024, 5, 3, 8, 0))
    assert window.eligible is True
    assert window.iso_date == "2024-05-03"


def test_injected_offset():
    # Friday 10:00 UTC is 17:00 in Jakarta, eligible only at +07:00
    instant = datetime(2024, 5, 3, 10, 0, tzinfo=pytz.UTC)

    utc_window = get_friday_archive_window(instant, offset=timedelta(0))
    assert utc_window.eligible is False
    assert utc_window.range_start_utc == datetime(2024, 5, 3, 0, 0, tzinfo=pytz.UTC)

    jakarta_window = get_friday_archive_window(instant)
    assert jakarta_window.eligible is True
    assert jakarta_window.range_start_utc == datetime(2024, 5, 2, 17, 0, tzinfo=pytz.UTC)

    # Friday 07:30 UTC is 14:30 in Jakarta, before the cutoff
    assert get_friday_archive_window(datetime(2024, 5, 3, 7, 30, tzinfo=pytz.UTC)).eligible is False
    assert get_friday_archive_window(
        datetime(2024, 5, 3, 15, 0, tzinfo=pytz.UTC), offset=timedelta(0)
    ).eligible is True


def test_parse_iso_date_requires_zero_padding():
    assert parse_iso_date("2024-05-03") == date(2024, 5, 3)
    assert parse_iso_date("2024-5-3") is None
    assert parse_iso_date("2024-02-30") is None
    assert parse_iso_date("") is None


def test_parse_local_datetime():
    assert parse_local_datetime("2024-05-03", "10:00") == datetime(2024, 5, 3, 3, 0, tzinfo=pytz.UTC)
    assert parse_local_datetime("2024-05-03", None) == datetime(2024, 5, 2, 17, 0, tzinfo=pytz.UTC)
    assert parse_local_datetime("2024-05-03", "25:00") is None
    assert parse_local_datetime(None, "10:00") is None


def test_indonesian_labels():
    assert format_archive_full_label(date(2024, 5, 3)) == "Jumat, 03 Mei 2024"
    assert format_archive_full_label("2024-08-16") == "Jumat, 16 Agustus 2024"
    assert format_archive_compact_label(date(2024, 5, 3)) == "03 Mei 2024"
    assert format_timestamp_label(datetime(2024, 5, 3, 8, 30, 5)) == "03 Mei 2024 pukul 15.30.05"
    assert format_timestamp_label(None) == "-"
