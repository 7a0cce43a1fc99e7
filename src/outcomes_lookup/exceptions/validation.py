"""Validation exceptions: caller input that is rejected before any I/O."""

from datetime import datetime
from typing import Sequence

from .base import OutcomesLookupError


class ValidationError(OutcomesLookupError):
    """Base class for lookup filter validation errors."""

    pass


class ConflictingTimeSpec(ValidationError):
    """Raised when ``day`` is combined with ``from``/``to``."""

    def __init__(self, fields: Sequence[str]):
        self.fields = tuple(fields)
        super().__init__(
            "--day cannot be combined with --from/--to",
            details={"fields": ",".join(self.fields)},
        )


class InvalidRange(ValidationError):
    """Raised when the resolved range starts after it ends."""

    def __init__(self, start: datetime, end: datetime):
        self.start = start
        self.end = end
        super().__init__(
            "Time range start is after its end",
            details={"from": start, "to": end},
        )
