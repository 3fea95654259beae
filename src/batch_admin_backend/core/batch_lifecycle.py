'''
Batch lifecycle: deriving a batch's status from its dates.

Status is never stored. It is a pure function of (start, end, now), so a
change to either date is reflected on the next read.

Timezone policy: every instant is brought to UTC before comparing. Naive
datetimes are read as UTC and a bare calendar date means midnight UTC of that
day. Comparisons are on whole instants, never on date components alone.
'''
from datetime import date, datetime, time, timezone
from typing import Optional

from ..database.db_enums import BatchStatusEnum
from ..common.exceptions import InvalidBatchDatesError


def to_utc_instant(value: datetime | date | str) -> datetime:
    """
    Normalizes a datetime, date, or ISO-8601 string to an aware UTC datetime.
    """
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            value = date.fromisoformat(text)
        else:
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    raise TypeError(f"Cannot interpret {value!r} as an instant.")


def derive_status(
    start_date: datetime | date | str,
    end_date: datetime | date | str,
    now: Optional[datetime] = None
) -> BatchStatusEnum:
    """
    Maps a batch's dates to exactly one of upcoming / ongoing / completed.
    Both boundaries belong to 'ongoing'.
    """
    start = to_utc_instant(start_date)
    end = to_utc_instant(end_date)
    current = to_utc_instant(now) if now is not None else datetime.now(timezone.utc)

    if current < start:
        return BatchStatusEnum.UPCOMING
    if current > end:
        return BatchStatusEnum.COMPLETED
    return BatchStatusEnum.ONGOING


def ensure_valid_window(start_date: datetime | date | str, end_date: datetime | date | str) -> None:
    """Raises InvalidBatchDatesError when the batch would end before it starts."""
    if to_utc_instant(start_date) > to_utc_instant(end_date):
        raise InvalidBatchDatesError("startDate must be on or before endDate.")


def split_session_topics(raw: str | list[str] | None) -> list[str]:
    """
    Session topics arrive from the admin form as newline-joined text.
    Splits them into an ordered list, trimming and dropping blank lines.
    Lists are cleaned the same way.
    """
    if raw is None:
        return []
    lines = raw.splitlines() if isinstance(raw, str) else raw
    return [line.strip() for line in lines if line and line.strip()]
