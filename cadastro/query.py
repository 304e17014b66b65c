"""Search, ordering and summary statistics over a record snapshot.

Nothing here mutates its input; results depend only on the records given
and the reference time.
"""

from datetime import datetime, timezone, tzinfo
from typing import Iterable

from cadastro.models import Record, RecordFilter, RecordStats, RecordStatus, StatusFilter
from cadastro.validation.identifiers import only_digits


def sort_by_created(records: Iterable[Record]) -> list[Record]:
    """Return records ordered most recent first."""
    return sorted(records, key=lambda r: r.created_at, reverse=True)


def _matches_search(record: Record, search: str) -> bool:
    term = search.lower()
    if term in record.name.lower() or term in record.email.lower():
        return True
    if search in record.tax_id:
        return True
    # "12345678909" also finds a CPF stored as "123.456.789-09"
    return search.isdigit() and search in only_digits(record.tax_id)


def matches(record: Record, record_filter: RecordFilter | None) -> bool:
    """Check a record against every criterion set in the filter."""
    if record_filter is None:
        return True
    if record_filter.search and not _matches_search(record, record_filter.search):
        return False
    status = record_filter.status
    if status is not None and status != StatusFilter.ALL:
        return record.status.value == StatusFilter(status).value
    return True


def filter_records(records: Iterable[Record], record_filter: RecordFilter | None = None) -> list[Record]:
    """Apply the filter and order the result by creation time, newest first."""
    return sort_by_created(r for r in records if matches(r, record_filter))


def month_start(now: datetime, tz: tzinfo | None = None) -> datetime:
    """First instant of ``now``'s calendar month in ``tz`` (default: local time)."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(tz)
    start = local.replace(day=1, hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
    # the offset on the 1st can differ from today's across a DST change
    if tz is None:
        return start.astimezone()
    return start.replace(tzinfo=tz)


def compute_stats(
    records: Iterable[Record],
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> RecordStats:
    """Count records by status and those created since the start of the month.

    Parameters
    ----------
    records : Iterable[Record]
        Snapshot of the collection.
    now : datetime | None
        Reference time (default: current time).
    tz : tzinfo | None
        Time zone whose calendar month is used (default: local time).

    Returns
    -------
    RecordStats
        Totals for the snapshot.
    """
    snapshot = list(records)
    start = month_start(now or datetime.now(timezone.utc), tz)
    return RecordStats(
        total=len(snapshot),
        active_count=sum(1 for r in snapshot if r.status == RecordStatus.ACTIVE),
        inactive_count=sum(1 for r in snapshot if r.status == RecordStatus.INACTIVE),
        new_this_month=sum(1 for r in snapshot if r.created_at >= start),
    )
