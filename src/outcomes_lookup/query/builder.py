"""SQL construction for outcome lookups.

Every value is a bound ``?`` parameter. The table name is the only
interpolated part and is validated as an identifier by ``LookupConfig``.
Predicates on the table's sort key (org, project, timestamp) come first so
DuckDB can skip row groups through their min/max zone maps before the
event predicate is evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..models import OUTCOME_COLUMNS, ResolvedRange


@dataclass(frozen=True)
class OutcomeQuery:
    """A parameterized SQL statement ready to hand to the connection."""

    sql: str
    params: tuple[Any, ...]


def quote_identifier(name: str) -> str:
    """Double-quote each dotted part of *name*."""
    return ".".join(f'"{part}"' for part in name.split("."))


def build_outcome_query(
    table: str,
    project_id: int,
    event_id: int,
    time_range: ResolvedRange,
    org_id: Optional[int] = None,
    keep_unknown_org: bool = False,
) -> OutcomeQuery:
    """Select the outcomes for one event of one project inside *time_range*.

    Rows come back ordered by timestamp; ties are broken by outcome code so
    repeated runs print the same order. The unbounded range still produces a
    ``timestamp`` predicate, using the sentinel bounds.

    With *keep_unknown_org* the org predicate also admits org 0, for an
    *org_id* that was looked up rather than asked for.
    """
    predicates: list[str] = []
    params: list[Any] = []

    if org_id is not None and keep_unknown_org:
        predicates.append('("org_id" = ? OR "org_id" = 0)')
        params.append(org_id)
    elif org_id is not None:
        predicates.append('"org_id" = ?')
        params.append(org_id)

    predicates.append('"project_id" = ?')
    params.append(project_id)

    predicates.append('"timestamp" >= ?')
    params.append(time_range.start)
    predicates.append('"timestamp" < ?')
    params.append(time_range.end)

    predicates.append('"event_id" = ?')
    params.append(event_id)

    columns = ", ".join(quote_identifier(c) for c in OUTCOME_COLUMNS)
    sql = (
        f"SELECT {columns} FROM {quote_identifier(table)}"
        f" WHERE {' AND '.join(predicates)}"
        ' ORDER BY "timestamp" ASC, "outcome" ASC'
    )
    return OutcomeQuery(sql=sql, params=tuple(params))


def build_org_lookup_query(table: str, project_id: int) -> OutcomeQuery:
    """Fast scan for any non-zero org id recorded for *project_id*."""
    sql = (
        f'SELECT "org_id" FROM {quote_identifier(table)}'
        ' WHERE "project_id" = ? AND "org_id" != 0 LIMIT 1'
    )
    return OutcomeQuery(sql=sql, params=(project_id,))
