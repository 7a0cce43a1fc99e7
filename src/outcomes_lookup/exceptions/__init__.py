"""Exception hierarchy for outcomes-lookup."""

from .base import OutcomesLookupError
from .config import ConfigurationError, InvalidConfigError
from .execution import (
    ConnectionFailed,
    ExecutionError,
    QueryRejected,
    StreamConsumed,
    StreamFailed,
)
from .validation import ConflictingTimeSpec, InvalidRange, ValidationError

__all__ = [
    "OutcomesLookupError",
    "ValidationError",
    "ConflictingTimeSpec",
    "InvalidRange",
    "ExecutionError",
    "ConnectionFailed",
    "QueryRejected",
    "StreamFailed",
    "StreamConsumed",
    "ConfigurationError",
    "InvalidConfigError",
]
