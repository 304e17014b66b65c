"""Tests for search, ordering and statistics."""

import time
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from cadastro.models import RecordFilter, RecordStats, RecordStatus, StatusFilter
from cadastro.query import compute_stats, filter_records, matches, month_start, sort_by_created
from cadastro.sample_data import sample_records

BRT = timezone(timedelta(hours=-3))


@pytest.fixture
def records():
    """The three sample records (two active, one inactive)."""
    return sample_records()


class TestFilterRecords:
    """Tests for filter_records."""

    def test_no_filter_returns_all_newest_first(self, records) -> None:
        result = filter_records(records)
        assert [r.id for r in result] == ["3", "2", "1"]

    def test_status_active(self, records) -> None:
        result = filter_records(records, RecordFilter(status=StatusFilter.ACTIVE))

        assert [r.id for r in result] == ["2", "1"]
        assert all(r.status == RecordStatus.ACTIVE for r in result)

    def test_status_inactive(self, records) -> None:
        result = filter_records(records, RecordFilter(status=StatusFilter.INACTIVE))
        assert [r.id for r in result] == ["3"]

    def test_status_all(self, records) -> None:
        assert len(filter_records(records, RecordFilter(status=StatusFilter.ALL))) == 3

    def test_status_as_plain_string(self, records) -> None:
        assert [r.id for r in filter_records(records, RecordFilter(status="inactive"))] == ["3"]

    def test_search_name_case_insensitive(self, records) -> None:
        result = filter_records(records, RecordFilter(search="maria"))
        assert [r.name for r in result] == ["Maria Silva Santos"]

    def test_search_email(self, records) -> None:
        result = filter_records(records, RecordFilter(search="JOAO.CARLOS@"))
        assert [r.id for r in result] == ["2"]

    def test_search_formatted_tax_id(self, records) -> None:
        result = filter_records(records, RecordFilter(search="456.789.123"))
        assert [r.id for r in result] == ["3"]

    def test_search_bare_tax_id_digits(self, records) -> None:
        result = filter_records(records, RecordFilter(search="98765432100"))
        assert [r.id for r in result] == ["2"]

    def test_search_does_not_match_other_fields(self, records) -> None:
        assert filter_records(records, RecordFilter(search="Paulista")) == []

    def test_empty_search_imposes_nothing(self, records) -> None:
        assert len(filter_records(records, RecordFilter(search=""))) == 3

    def test_search_and_status_compose(self, records) -> None:
        """Search matching an inactive record yields nothing under status=active."""
        assert filter_records(records, RecordFilter(search="ana", status=StatusFilter.ACTIVE)) == []
        assert [r.id for r in filter_records(records, RecordFilter(search="ana", status=StatusFilter.INACTIVE))] == ["3"]

    def test_input_not_mutated(self, records) -> None:
        before = [r.id for r in records]
        filter_records(records, RecordFilter(status=StatusFilter.ACTIVE))
        assert [r.id for r in records] == before


class TestMatches:
    """Tests for matches."""

    def test_none_filter_matches(self, records) -> None:
        assert matches(records[0], None)

    def test_search_miss(self, records) -> None:
        assert not matches(records[0], RecordFilter(search="zzz"))


class TestSortByCreated:
    """Tests for sort_by_created."""

    def test_descending(self, records) -> None:
        assert [r.created_at for r in sort_by_created(records)] == sorted(
            (r.created_at for r in records), reverse=True
        )


class TestMonthStart:
    """Tests for month_start."""

    def test_utc(self) -> None:
        now = datetime(2025, 6, 17, 15, 30, tzinfo=timezone.utc)
        assert month_start(now, timezone.utc) == datetime(2025, 6, 1, tzinfo=timezone.utc)

    def test_local_zone_shifts_month(self) -> None:
        """01:00 UTC on July 1st is still June in UTC-3."""
        now = datetime(2025, 7, 1, 1, 0, tzinfo=timezone.utc)
        assert month_start(now, BRT) == datetime(2025, 6, 1, tzinfo=BRT)

    def test_naive_treated_as_utc(self) -> None:
        assert month_start(datetime(2025, 6, 17), timezone.utc) == datetime(2025, 6, 1, tzinfo=timezone.utc)

    def test_zone_with_dst_change(self) -> None:
        """October 1st in Berlin is CEST even when "now" is already CET."""
        berlin = ZoneInfo("Europe/Berlin")
        now = datetime(2026, 10, 28, 12, tzinfo=timezone.utc)

        assert month_start(now, berlin) == datetime(2026, 9, 30, 22, tzinfo=timezone.utc)

    @pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
    def test_default_local_zone_with_dst_change(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TZ", "Europe/Berlin")
        time.tzset()
        try:
            start = month_start(datetime(2026, 10, 28, 12, tzinfo=timezone.utc))
        finally:
            monkeypatch.undo()
            time.tzset()

        assert start == datetime(2026, 9, 30, 22, tzinfo=timezone.utc)
        assert start.utcoffset() == timedelta(hours=2)


class TestComputeStats:
    """Tests for compute_stats."""

    def test_two_active_one_inactive_one_new(self, records) -> None:
        """Three records: 2 active, 1 inactive, 1 created this month."""
        now = datetime(2024, 3, 25, 12, 0, tzinfo=timezone.utc)

        stats = compute_stats(records, now=now, tz=timezone.utc)

        assert stats == RecordStats(total=3, active_count=2, inactive_count=1, new_this_month=1)

    def test_boundary_instant_counts(self, records) -> None:
        """A record created exactly at the first instant of the month is new."""
        now = datetime(2024, 2, 20, tzinfo=timezone.utc)
        boundary = replace(records[0], created_at=datetime(2024, 2, 1, tzinfo=timezone.utc))
        before = replace(records[1], created_at=datetime(2024, 1, 31, 23, 59, 59, tzinfo=timezone.utc))

        stats = compute_stats([boundary, before], now=now, tz=timezone.utc)

        assert stats.new_this_month == 1

    def test_uses_local_month(self, records) -> None:
        """Month start follows the given zone, not UTC."""
        now = datetime(2024, 3, 1, 1, 0, tzinfo=timezone.utc)  # still Feb 29 in UTC-3
        late_feb = replace(records[0], created_at=datetime(2024, 2, 15, tzinfo=timezone.utc))

        assert compute_stats([late_feb], now=now, tz=BRT).new_this_month == 1
        assert compute_stats([late_feb], now=now, tz=timezone.utc).new_this_month == 0

    def test_empty(self) -> None:
        assert compute_stats([]) == RecordStats(total=0, active_count=0, inactive_count=0, new_this_month=0)
