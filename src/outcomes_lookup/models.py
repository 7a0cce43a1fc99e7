"""Data model for outcome lookups: filters, resolved ranges and outcome rows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import IntEnum
from typing import Any, Optional

from .exceptions import InvalidRange

# Bounds used when a side of the time window is not given.
FAR_PAST = datetime(1970, 1, 1)
FAR_FUTURE = datetime(9999, 12, 31, 23, 59, 59)

# Columns read from the outcomes table, in output order.
OUTCOME_COLUMNS = (
    "event_id",
    "project_id",
    "org_id",
    "key_id",
    "timestamp",
    "outcome",
    "reason",
)


class Outcome(IntEnum):
    """Known outcome codes stored in the ``outcome`` column."""

    ACCEPTED = 0
    FILTERED = 1
    RATE_LIMITED = 2
    INVALID = 3
    ABUSE = 4

    @classmethod
    def describe(cls, code: int) -> str:
        """Name for *code*, keeping the raw value for codes we don't know."""
        try:
            return cls(code).name
        except ValueError:
            return f"UNKNOWN({code})"


@dataclass(frozen=True)
class LookupFilter:
    """Filters supplied on the command line for a single lookup.

    ``day`` is mutually exclusive with ``from_``/``to``; the resolver rejects
    filters that set both.
    """

    project_id: int
    event_id: int
    day: Optional[date] = None
    from_: Optional[datetime] = None
    to: Optional[datetime] = None
    org_id: Optional[int] = None


@dataclass(frozen=True)
class ResolvedRange:
    """Half-open ``[start, end)`` window of naive UTC timestamps."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidRange(self.start, self.end)

    @classmethod
    def unbounded(cls) -> "ResolvedRange":
        return cls(start=FAR_PAST, end=FAR_FUTURE)

    @property
    def is_unbounded(self) -> bool:
        return self.start == FAR_PAST and self.end == FAR_FUTURE

    def __contains__(self, ts: datetime) -> bool:
        return self.start <= ts < self.end


@dataclass(frozen=True)
class OutcomeRecord:
    """One row of the outcomes table, relayed as read."""

    timestamp: datetime
    project_id: int
    event_id: Optional[int]
    org_id: int
    outcome: int
    key_id: Optional[int] = None
    reason: Optional[str] = None

    @classmethod
    def from_row(cls, row: tuple) -> "OutcomeRecord":
        """Build a record from a tuple ordered like ``OUTCOME_COLUMNS``."""
        values = dict(zip(OUTCOME_COLUMNS, row))
        return cls(**values)

    @property
    def outcome_name(self) -> str:
        return Outcome.describe(self.outcome)

    def to_dict(self) -> dict[str, Any]:
        """Plain dict in ``OUTCOME_COLUMNS`` order, outcome as its name."""
        return {
            "event_id": self.event_id,
            "project_id": self.project_id,
            "org_id": self.org_id,
            "key_id": self.key_id,
            "timestamp": self.timestamp.isoformat(),
            "outcome": self.outcome_name,
            "reason": self.reason,
        }
