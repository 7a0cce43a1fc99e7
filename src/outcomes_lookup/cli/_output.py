"""Printers for outcome rows. Records are written as they arrive from the stream."""

import json
import sys
from typing import Iterable, Optional, TextIO

from ..models import OutcomeRecord

NO_OUTCOMES = "no outcomes found"

FORMATS = ("text", "json")


def _opt(value) -> str:
    return "-" if value is None else str(value)


def print_text(records: Iterable[OutcomeRecord], out: Optional[TextIO] = None) -> int:
    """``key: value`` block per record, blank line between records."""
    out = out or sys.stdout
    count = 0
    for record in records:
        if count:
            out.write("\n")
        out.write(f"event_id: {_opt(record.event_id)}\n")
        out.write(f"project_id: {record.project_id}\n")
        out.write(f"org_id: {record.org_id}\n")
        out.write(f"key_id: {_opt(record.key_id)}\n")
        out.write(f"timestamp: {record.timestamp.isoformat(sep=' ')}\n")
        out.write(f"outcome: {record.outcome_name}\n")
        out.write(f"reason: {_opt(record.reason)}\n")
        out.flush()
        count += 1

    if not count:
        out.write(f"{NO_OUTCOMES}\n")
    return count


def print_json(records: Iterable[OutcomeRecord], out: Optional[TextIO] = None) -> int:
    """One JSON object per line."""
    out = out or sys.stdout
    count = 0
    for record in records:
        out.write(json.dumps(record.to_dict()) + "\n")
        out.flush()
        count += 1
    return count


def print_records(
    records: Iterable[OutcomeRecord], fmt: str = "text", out: Optional[TextIO] = None
) -> int:
    if fmt == "json":
        return print_json(records, out)
    return print_text(records, out)
