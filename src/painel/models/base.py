from datetime import UTC, datetime
from typing import Protocol


def utc_now() -> datetime:
    """Current UTC time as a naive datetime; columns are TIMESTAMP WITHOUT TIME ZONE."""
    return datetime.now(UTC).replace(tzinfo=None)


class Timestamped(Protocol):
    updated_at: datetime


def touch(row: Timestamped) -> None:
    """Stamp updated_at before an edit is flushed. created_at is never rewritten."""
    row.updated_at = utc_now()
