"""Turn the ``day``/``from``/``to`` filters into a canonical time window.

A tight window lets the executor prune everything outside it; without one the
query has to scan the whole table.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from typing import Optional

from .exceptions import ConflictingTimeSpec
from .models import FAR_PAST, LookupFilter, ResolvedRange


def to_naive_utc(ts: datetime) -> datetime:
    """Convert *ts* to naive UTC. Naive input is assumed to already be UTC."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def resolve(lookup: LookupFilter, now: Optional[datetime] = None) -> ResolvedRange:
    """Resolve the filter's time inputs into a ``[start, end)`` range.

    - ``day``: midnight of that day up to midnight of the next.
    - ``from``/``to``: used as given; a missing ``from`` is the far past and a
      missing ``to`` is *now*.
    - nothing: the unbounded range.

    Raises:
        ConflictingTimeSpec: ``day`` given together with ``from`` or ``to``
        InvalidRange: ``from`` resolves to a point after ``to``
    """
    if lookup.day is not None:
        conflicting = [
            name
            for name, value in (("from", lookup.from_), ("to", lookup.to))
            if value is not None
        ]
        if conflicting:
            raise ConflictingTimeSpec(["day", *conflicting])

        start = datetime.combine(lookup.day, time.min)
        return ResolvedRange(start=start, end=start + timedelta(days=1))

    if lookup.from_ is None and lookup.to is None:
        return ResolvedRange.unbounded()

    start = to_naive_utc(lookup.from_) if lookup.from_ is not None else FAR_PAST
    if lookup.to is not None:
        end = to_naive_utc(lookup.to)
    else:
        end = to_naive_utc(now) if now is not None else utc_now()

    return ResolvedRange(start=start, end=end)
