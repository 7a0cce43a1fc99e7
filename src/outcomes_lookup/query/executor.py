"""Run outcome lookups against DuckDB and stream the matching rows.

Usage::

    time_range = resolve(lookup)
    with execute(config, lookup.project_id, lookup.event_id, time_range) as rows:
        for record in rows:
            print(record.outcome_name)

One connection per call. It is opened by ``execute`` and closed when the
stream is exhausted, fails, is closed early, or the query never starts.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

import duckdb

from ..config import LookupConfig
from ..exceptions import ConnectionFailed, QueryRejected, StreamConsumed, StreamFailed
from ..logging_config import get_logger
from ..models import OutcomeRecord, ResolvedRange
from .builder import OutcomeQuery, build_org_lookup_query, build_outcome_query

logger = get_logger(__name__)


class OutcomeStream:
    """Single-pass stream of ``OutcomeRecord`` backed by a DuckDB cursor.

    Rows are fetched ``fetch_size`` at a time. Iterating a second time raises
    ``StreamConsumed``; call ``execute`` again to re-read.
    """

    def __init__(
        self,
        con: duckdb.DuckDBPyConnection,
        query: OutcomeQuery,
        fetch_size: int,
    ) -> None:
        self.query = query
        self.fetch_size = fetch_size
        self.rows_read = 0
        self._con: Optional[duckdb.DuckDBPyConnection] = con
        self._consumed = False

    @property
    def closed(self) -> bool:
        return self._con is None

    def __iter__(self) -> Iterator[OutcomeRecord]:
        if self._consumed:
            raise StreamConsumed()
        self._consumed = True
        return self._records()

    def _records(self) -> Iterator[OutcomeRecord]:
        try:
            while True:
                batch = self._fetch_batch()
                if not batch:
                    break
                for row in batch:
                    self.rows_read += 1
                    yield OutcomeRecord.from_row(row)
            logger.info("Read %d outcome rows", self.rows_read)
        finally:
            self.close()

    def _fetch_batch(self) -> list[tuple[Any, ...]]:
        if self._con is None:
            return []
        try:
            return self._con.fetchmany(self.fetch_size)
        except duckdb.Error as e:
            raise StreamFailed(str(e), rows_read=self.rows_read) from e

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        self._consumed = True
        if self._con is not None:
            self._con.close()
            self._con = None
            logger.debug("Datastore connection closed after %d rows", self.rows_read)

    def __enter__(self) -> "OutcomeStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def connect(config: LookupConfig) -> duckdb.DuckDBPyConnection:
    """Open the configured database read-only.

    Raises:
        ConnectionFailed: The database is missing, unreadable or locked
    """
    try:
        con = duckdb.connect(database=config.dsn, read_only=True)
    except duckdb.Error as e:
        raise ConnectionFailed(config.dsn, str(e)) from e
    logger.debug("Datastore connection opened: %s", config.dsn)
    return con


def _run(con: duckdb.DuckDBPyConnection, query: OutcomeQuery) -> None:
    logger.debug("Executing %s with params %s", query.sql, query.params)
    try:
        con.execute(query.sql, list(query.params))
    except duckdb.ProgrammingError as e:
        raise QueryRejected(query.sql, str(e)) from e
    except duckdb.Error as e:
        raise StreamFailed(str(e), rows_read=0) from e


def find_org_id(
    con: duckdb.DuckDBPyConnection, table: str, project_id: int
) -> Optional[int]:
    """Given a project id, make a fast scan for its org id."""
    _run(con, build_org_lookup_query(table, project_id))
    row = con.fetchone()
    if row is None:
        return None
    return int(row[0])


def execute(
    config: LookupConfig,
    project_id: int,
    event_id: int,
    time_range: ResolvedRange,
    org_id: Optional[int] = None,
) -> OutcomeStream:
    """Query the outcomes of *event_id* in *project_id* within *time_range*.

    When no ``org_id`` is given and ``config.resolve_org_id`` is set, the
    project's org id is looked up first and added as a pruning predicate
    that still admits rows of unknown org (0).

    Raises:
        ConnectionFailed: The datastore could not be opened
        QueryRejected: The datastore refused the query; its message is kept
        StreamFailed: The datastore failed while running the query
    """
    con = connect(config)
    looked_up = False
    try:
        if org_id is None and config.resolve_org_id:
            looked_up = True
            org_id = find_org_id(con, config.table, project_id)
            if org_id is None:
                logger.debug("No org id found for project %d; skipping org predicate", project_id)
            else:
                logger.debug("Resolved project %d to org %d", project_id, org_id)

        query = build_outcome_query(
            config.table, project_id, event_id, time_range, org_id, keep_unknown_org=looked_up
        )
        _run(con, query)
    except BaseException:
        con.close()
        raise

    return OutcomeStream(con, query, config.fetch_size)
