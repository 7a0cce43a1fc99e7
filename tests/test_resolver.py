"""Tests for resolving day/from/to filters into a [start, end) range."""

from datetime import date, datetime, timedelta, timezone

import pytest

from outcomes_lookup.exceptions import ConflictingTimeSpec, InvalidRange, ValidationError
from outcomes_lookup.models import FAR_FUTURE, FAR_PAST, LookupFilter, ResolvedRange
from outcomes_lookup.resolver import resolve, to_naive_utc

NOW = datetime(2024, 3, 1, 12, 30, 0)


def _filter(**kwargs):
    kwargs.setdefault("project_id", 1)
    kwargs.setdefault("event_id", 1)
    return LookupFilter(**kwargs)


class TestDay:
    def test_day_covers_midnight_to_midnight(self):
        lookup = LookupFilter(project_id=42, event_id=7, day=date(2024, 1, 15))
        result = resolve(lookup)

        assert result == ResolvedRange(
            start=datetime(2024, 1, 15, 0, 0, 0),
            end=datetime(2024, 1, 16, 0, 0, 0),
        )

    def test_day_crosses_month_and_year(self):
        result = resolve(_filter(day=date(2023, 12, 31)))
        assert result.start == datetime(2023, 12, 31)
        assert result.end == datetime(2024, 1, 1)

    def test_leap_day(self):
        result = resolve(_filter(day=date(2024, 2, 29)))
        assert result.end - result.start == timedelta(days=1)
        assert result.end == datetime(2024, 3, 1)

    def test_day_ignores_now(self):
        result = resolve(_filter(day=date(2030, 1, 1)), now=NOW)
        assert result.start == datetime(2030, 1, 1)


class TestConflicts:
    def test_day_with_from(self):
        with pytest.raises(ConflictingTimeSpec) as exc_info:
            resolve(_filter(day=date(2024, 1, 15), from_=datetime(2024, 1, 15, 1)))
        assert exc_info.value.fields == ("day", "from")

    def test_day_with_to(self):
        with pytest.raises(ConflictingTimeSpec) as exc_info:
            resolve(_filter(day=date(2024, 1, 15), to=datetime(2024, 1, 15, 1)))
        assert exc_info.value.fields == ("day", "to")

    def test_day_with_both_names_all_fields(self):
        with pytest.raises(ConflictingTimeSpec) as exc_info:
            resolve(
                _filter(
                    day=date(2024, 1, 15),
                    from_=datetime(2024, 1, 15, 1),
                    to=datetime(2024, 1, 15, 2),
                )
            )
        assert exc_info.value.fields == ("day", "from", "to")
        assert "fields=day,from,to" in str(exc_info.value)

    def test_conflict_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            resolve(_filter(day=date(2024, 1, 15), from_=datetime(2024, 1, 15)))


class TestFromTo:
    def test_from_and_to_used_directly(self):
        t1 = datetime(2024, 1, 15, 10, 0)
        t2 = datetime(2024, 1, 15, 12, 0)
        assert resolve(_filter(from_=t1, to=t2)) == ResolvedRange(start=t1, end=t2)

    def test_equal_bounds_are_allowed(self):
        t = datetime(2024, 1, 15, 10, 0)
        result = resolve(_filter(from_=t, to=t))
        assert result.start == result.end == t

    def test_inverted_bounds_fail(self):
        t1 = datetime(2024, 1, 15, 12, 0)
        t2 = datetime(2024, 1, 15, 10, 0)
        with pytest.raises(InvalidRange) as exc_info:
            resolve(_filter(from_=t1, to=t2))
        assert exc_info.value.start == t1
        assert exc_info.value.end == t2

    def test_missing_from_defaults_to_far_past(self):
        t2 = datetime(2024, 1, 15, 10, 0)
        result = resolve(_filter(to=t2))
        assert result.start == FAR_PAST
        assert result.end == t2

    def test_missing_to_defaults_to_now(self):
        t1 = datetime(2024, 1, 15, 10, 0)
        result = resolve(_filter(from_=t1), now=NOW)
        assert result == ResolvedRange(start=t1, end=NOW)

    def test_from_in_future_without_to_fails(self):
        with pytest.raises(InvalidRange):
            resolve(_filter(from_=NOW + timedelta(hours=1)), now=NOW)

    def test_missing_to_uses_current_time(self):
        before = datetime.now(timezone.utc).replace(tzinfo=None)
        result = resolve(_filter(from_=datetime(2024, 1, 1)))
        after = datetime.now(timezone.utc).replace(tzinfo=None)
        assert before <= result.end <= after

    def test_aware_inputs_become_naive_utc(self):
        plus_two = timezone(timedelta(hours=2))
        result = resolve(
            _filter(
                from_=datetime(2024, 1, 15, 12, 0, tzinfo=plus_two),
                to=datetime(2024, 1, 15, 14, 0, tzinfo=timezone.utc),
            )
        )
        assert result.start == datetime(2024, 1, 15, 10, 0)
        assert result.end == datetime(2024, 1, 15, 14, 0)
        assert result.start.tzinfo is None

    def test_aware_inversion_detected_after_conversion(self):
        minus_five = timezone(timedelta(hours=-5))
        # 10:00-05:00 is 15:00 UTC, after 14:00 UTC
        with pytest.raises(InvalidRange):
            resolve(
                _filter(
                    from_=datetime(2024, 1, 15, 10, 0, tzinfo=minus_five),
                    to=datetime(2024, 1, 15, 14, 0, tzinfo=timezone.utc),
                )
            )


class TestUnbounded:
    def test_no_time_filter_is_unbounded(self):
        result = resolve(_filter())
        assert result.is_unbounded
        assert result.start == FAR_PAST
        assert result.end == FAR_FUTURE

    def test_no_recency_default(self):
        result = resolve(_filter(), now=NOW)
        assert result.end == FAR_FUTURE

    def test_to_only_is_not_unbounded(self):
        assert not resolve(_filter(to=NOW)).is_unbounded


class TestToNaiveUtc:
    def test_naive_passes_through(self):
        ts = datetime(2024, 1, 1, 5)
        assert to_naive_utc(ts) is ts

    def test_aware_converted(self):
        ts = datetime(2024, 1, 1, 5, tzinfo=timezone(timedelta(hours=5)))
        assert to_naive_utc(ts) == datetime(2024, 1, 1, 0)
