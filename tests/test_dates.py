from datetime import date, datetime, timezone

import pytest

from dashboard.metrics.dates import (
    InvalidDateError,
    end_of_month,
    end_of_week,
    format_day,
    is_same_day,
    local_day,
    parse_day,
    parse_timestamp,
    start_of_week,
    today,
)


class TestParsing:
    def test_parse_day_accepts_iso_strings_and_dates(self):
        assert parse_day("2024-03-05") == date(2024, 3, 5)
        assert parse_day(date(2024, 3, 5)) == date(2024, 3, 5)
        assert parse_day(datetime(2024, 3, 5, 18, 0)) == date(2024, 3, 5)

    @pytest.mark.parametrize("value", ["2024-3-5", "2024-13-01", "", None, "yesterday"])
    def test_parse_day_rejects_malformed_values(self, value):
        with pytest.raises(InvalidDateError):
            parse_day(value)

    def test_invalid_date_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_day("not-a-date")

    def test_parse_timestamp_reads_zulu_suffix_as_utc(self):
        parsed = parse_timestamp("2024-03-05T10:00:00Z")
        assert parsed == datetime(2024, 3, 5, 10, 0, tzinfo=timezone.utc)

    def test_naive_timestamps_are_utc(self):
        assert parse_timestamp("2024-03-05T10:00:00").tzinfo == timezone.utc


class TestLocalDays:
    """Instants become calendar days in an explicit timezone."""

    def test_evening_utc_instant_stays_on_same_day_west_of_utc(self):
        assert local_day("2024-03-05T23:30:00+00:00", "America/Sao_Paulo") == date(2024, 3, 5)

    def test_early_utc_instant_falls_on_previous_day_west_of_utc(self):
        assert local_day("2024-03-05T01:30:00Z", "America/Sao_Paulo") == date(2024, 3, 4)

    def test_plain_day_strings_are_not_shifted(self):
        assert local_day("2024-03-05", "Asia/Tokyo") == date(2024, 3, 5)

    def test_today_uses_the_given_zone(self):
        now = datetime(2024, 3, 5, 2, 0, tzinfo=timezone.utc)
        assert today("America/New_York", now=now) == date(2024, 3, 4)
        assert today("UTC", now=now) == date(2024, 3, 5)

    def test_unknown_timezone_is_rejected(self):
        with pytest.raises(InvalidDateError):
            today("Not/AZone")

    def test_is_same_day(self):
        assert is_same_day("2024-03-05T08:00:00Z", "2024-03-05")
        assert not is_same_day("2024-03-05T01:00:00Z", "2024-03-05", "America/New_York")


class TestCalendarBoundaries:
    def test_weeks_run_monday_to_sunday(self):
        wednesday = date(2024, 3, 6)
        assert start_of_week(wednesday) == date(2024, 3, 4)
        assert end_of_week(wednesday) == date(2024, 3, 10)

    def test_sunday_belongs_to_the_week_that_started_monday(self):
        assert start_of_week(date(2024, 3, 10)) == date(2024, 3, 4)

    def test_end_of_month_handles_leap_years(self):
        assert end_of_month(date(2024, 2, 10)) == date(2024, 2, 29)
        assert end_of_month(date(2023, 2, 10)) == date(2023, 2, 28)

    def test_format_day(self):
        assert format_day(date(2024, 1, 9)) == "2024-01-09"
