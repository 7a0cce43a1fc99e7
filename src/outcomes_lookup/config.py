"""Configuration loading for outcomes-lookup.

Configuration sources are merged in priority order:
    1. Defaults (defined in LookupConfig)
    2. Project config (./outcomes-lookup.toml)
    3. Explicit config file (--config)
    4. Environment variables (OUTCOMES_LOOKUP_* prefix)
    5. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(environ={"OUTCOMES_LOOKUP_DSN": "/data/outcomes.duckdb"})
    >>> config.dsn
    '/data/outcomes.duckdb'
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

ENV_PREFIX = "OUTCOMES_LOOKUP_"
PROJECT_CONFIG_NAME = "outcomes-lookup.toml"

# Plain or schema-qualified SQL identifier; the table name is the only part of
# the query that is not a bound parameter.
_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


@dataclass(frozen=True)
class LookupConfig:
    """Datastore settings consumed by the query executor.

    Attributes:
        dsn: Path of the DuckDB database holding the outcomes table
        table: Name of the outcomes table (optionally schema-qualified)
        fetch_size: Rows fetched from the cursor per batch
        resolve_org_id: Look up the project's org id first and use it as an
            extra pruning predicate. Off by default: rows recorded under a
            different non-zero org would not be read.
    """

    dsn: str = "outcomes.duckdb"
    table: str = "outcomes_raw"
    fetch_size: int = 1000
    resolve_org_id: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.dsn, str) or not self.dsn:
            raise InvalidConfigError("dsn", self.dsn, "must be a non-empty string")
        if not isinstance(self.table, str) or not _TABLE_NAME_RE.match(self.table):
            raise InvalidConfigError("table", self.table, "must be a plain SQL identifier")
        if not isinstance(self.fetch_size, int) or self.fetch_size < 1:
            raise InvalidConfigError("fetch_size", self.fetch_size, "must be an integer >= 1")
        if not isinstance(self.resolve_org_id, bool):
            raise InvalidConfigError("resolve_org_id", self.resolve_org_id, "must be true or false")


def load_config(
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> LookupConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit TOML config file
        environ: Environment mapping to read OUTCOMES_LOOKUP_* from
            (defaults to ``os.environ``)
        **overrides: Direct overrides, typically from CLI flags. ``None``
            values are ignored.

    Returns:
        Validated LookupConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars(os.environ if environ is None else environ))

    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(LookupConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigurationError(
            "Unknown configuration keys", details={"keys": ",".join(unknown)}
        )

    return LookupConfig(**merged)


def _load_env_vars(environ: Mapping[str, str]) -> dict[str, Any]:
    """Load configuration from OUTCOMES_LOOKUP_* environment variables.

    Supported environment variables:
        OUTCOMES_LOOKUP_DSN: str
        OUTCOMES_LOOKUP_TABLE: str
        OUTCOMES_LOOKUP_FETCH_SIZE: int
        OUTCOMES_LOOKUP_RESOLVE_ORG_ID: bool (true/false/1/0)
    """
    type_hints = get_type_hints(LookupConfig)

    result: dict[str, Any] = {}
    for field_name in LookupConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = environ.get(env_key)
        if env_value is None:
            continue
        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e)) from e

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    return value


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file, accepting either top-level keys or a [lookup] table."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e

    section = data.get("lookup")
    if isinstance(section, dict):
        return dict(section)
    return data
