"""DuckDB query layer for outcome lookups."""

from .builder import OutcomeQuery, build_org_lookup_query, build_outcome_query
from .executor import OutcomeStream, connect, execute, find_org_id

__all__ = [
    "OutcomeQuery",
    "OutcomeStream",
    "build_outcome_query",
    "build_org_lookup_query",
    "connect",
    "execute",
    "find_org_id",
]
