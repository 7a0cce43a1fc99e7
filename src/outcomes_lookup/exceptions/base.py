"""Base exception for outcomes-lookup."""

from datetime import date
from typing import Any, Mapping, Optional


def _render(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class OutcomesLookupError(Exception):
    """Base exception for all outcomes-lookup errors.

    ``details`` values are rendered to strings up front (dates and datetimes
    as ISO-8601); ``None`` values are left out. ``exit_code`` is the process
    status the CLI exits with when the error reaches it.
    """

    exit_code = 1

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = {
            key: _render(value) for key, value in (details or {}).items() if value is not None
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({rendered})"
