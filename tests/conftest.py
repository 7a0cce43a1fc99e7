"""Shared fixtures: a small DuckDB outcomes table on disk."""

from datetime import datetime

import duckdb
import pytest

from outcomes_lookup.config import LookupConfig

# (org_id, project_id, key_id, timestamp, outcome, reason, event_id)
OUTCOME_ROWS = [
    (1, 42, 100, datetime(2024, 1, 15, 10, 0, 0), 0, None, 7),
    (1, 42, 100, datetime(2024, 1, 15, 9, 0, 0), 1, "release-version", 7),
    (1, 42, 100, datetime(2024, 1, 16, 0, 0, 0), 2, "key_quota", 7),
    (1, 42, 100, datetime(2024, 1, 14, 23, 59, 59), 3, "too_large", 7),
    (1, 42, None, datetime(2024, 1, 15, 12, 0, 0), 0, None, 8),
    (2, 43, 200, datetime(2024, 1, 15, 11, 0, 0), 0, None, 7),
    (1, 42, 101, datetime(2023, 6, 1, 0, 0, 0), 9, "mystery", 7),
    (0, 44, None, datetime(2024, 1, 15, 8, 0, 0), 4, "spam", 7),
]


def create_outcomes_db(path, rows=OUTCOME_ROWS, table="outcomes_raw"):
    con = duckdb.connect(str(path))
    try:
        con.execute(
            f"""
            CREATE TABLE {table} (
                org_id      BIGINT    NOT NULL,
                project_id  BIGINT    NOT NULL,
                key_id      BIGINT,
                "timestamp" TIMESTAMP NOT NULL,
                outcome     TINYINT   NOT NULL,
                reason      VARCHAR,
                event_id    BIGINT
            )
            """
        )
        if rows:
            con.executemany(f"INSERT INTO {table} VALUES (?, ?, ?, ?, ?, ?, ?)", rows)
    finally:
        con.close()
    return path


@pytest.fixture
def outcomes_db(tmp_path):
    """Path of a DuckDB file holding ``OUTCOME_ROWS``."""
    return create_outcomes_db(tmp_path / "outcomes.duckdb")


@pytest.fixture
def lookup_config(outcomes_db):
    return LookupConfig(dsn=str(outcomes_db))
