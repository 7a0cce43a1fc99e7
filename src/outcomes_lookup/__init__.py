"""
outcomes-lookup - find the outcomes recorded for an event

Reads accepted/filtered/rate-limited/invalid/abuse outcomes for a
project+event pair from a time-partitioned DuckDB outcomes table.
"""

__version__ = "0.1.0"

from .config import LookupConfig, load_config
from .models import LookupFilter, Outcome, OutcomeRecord, ResolvedRange
from .query import OutcomeStream, execute
from .resolver import resolve

__all__ = [
    "execute",  # Run a lookup and stream the rows
    "resolve",  # Filters -> [start, end) range
    "load_config",
    "LookupConfig",
    "LookupFilter",
    "ResolvedRange",
    "Outcome",
    "OutcomeRecord",
    "OutcomeStream",
]
