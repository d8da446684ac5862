import pickle
from copy import copy, deepcopy

import pytest

from zonekit import (
    UTC,
    DateTime,
    FixedOffset,
    FixedTimeZone,
    NaiveDate,
    NaiveDateTime,
    Offset,
    TimeZone,
)

from .common import AlwaysEqual, NeverEqual


class TestInit:

    def test_east_and_west(self):
        assert FixedOffset.east(3_600) == FixedOffset(3_600)
        assert FixedOffset.west(3_600) == FixedOffset(-3_600)
        assert FixedOffset.east(-60) == FixedOffset.west(60)

    @pytest.mark.parametrize("secs", [86_400, -86_400, 100_000, -10**9])
    def test_out_of_bounds(self, secs):
        with pytest.raises(ValueError, match="out of bounds"):
            FixedOffset.east(secs)
        with pytest.raises(ValueError, match="out of bounds"):
            FixedOffset.west(secs)

    @pytest.mark.parametrize("secs", [86_399, -86_399, 0])
    def test_bounds_inclusive(self, secs):
        assert FixedOffset.east(secs).local_minus_utc() == secs
        assert FixedOffset.west(secs).local_minus_utc() == -secs

    def test_opt(self):
        assert FixedOffset.east_opt(3_600) == FixedOffset.east(3_600)
        assert FixedOffset.west_opt(3_600) == FixedOffset.west(3_600)
        assert FixedOffset.east_opt(86_400) is None
        assert FixedOffset.west_opt(-86_400) is None


def test_local_minus_utc():
    offset = FixedOffset.west(5 * 3_600 + 30 * 60)
    assert offset.local_minus_utc() == -19_800
    assert offset.utc_minus_local() == 19_800


def test_is_both_zone_and_offset():
    offset = FixedOffset.east(9 * 3_600)
    assert isinstance(offset, TimeZone)
    assert isinstance(offset, FixedTimeZone)
    assert isinstance(offset, Offset)
    assert offset.fix() is offset
    assert FixedOffset.from_offset(offset) is offset


def test_all_resolvers_return_self():
    offset = FixedOffset.east(9 * 3_600)
    d = NaiveDate(2015, 5, 15)
    dt = NaiveDateTime(2015, 5, 15, 9)
    assert offset.offset_from_local_date(d) is offset
    assert offset.offset_from_local_datetime(dt) is offset
    assert offset.offset_from_utc_date(d) is offset
    assert offset.offset_from_utc_datetime(dt) is offset
    assert offset.offset_from_utc_date_fixed(d) is offset
    assert offset.offset_from_utc_datetime_fixed(dt) is offset


@pytest.mark.parametrize(
    "secs, expected",
    [
        (0, "+00:00"),
        (9 * 3_600, "+09:00"),
        (-(3 * 3_600 + 30 * 60), "-03:30"),
        (5 * 3_600 + 45 * 60 + 7, "+05:45:07"),
        (-86_399, "-23:59:59"),
        (-1, "-00:00:01"),
    ],
)
def test_str(secs, expected):
    offset = FixedOffset.east(secs)
    assert str(offset) == expected
    assert repr(offset) == f"FixedOffset({expected})"


def test_equality():
    a = FixedOffset.east(3_600)
    same = FixedOffset.west(-3_600)
    different = FixedOffset.east(7_200)

    assert a == same
    assert not a == different
    assert a != different
    assert not a != same
    assert not a == NeverEqual()
    assert a == AlwaysEqual()
    assert a != UTC

    assert hash(a) == hash(same)
    assert hash(a) != hash(different)


def test_copy():
    offset = FixedOffset.east(3_600)
    assert copy(offset) is offset
    assert deepcopy(offset) is offset


def test_pickle():
    offset = FixedOffset.west(3 * 3_600 + 30 * 60)
    assert pickle.loads(pickle.dumps(offset)) == offset


class TestAsTimeZone:

    def test_datetime_str(self):
        dt = FixedOffset.east(9 * 3_600).ymd(2015, 5, 15).and_hms(9, 0, 0)
        assert str(dt) == "2015-05-15 09:00:00 +09:00"
        assert repr(dt) == "DateTime(2015-05-15T09:00:00+09:00)"
        assert dt.naive_utc() == NaiveDateTime(2015, 5, 15)

    def test_date_str(self):
        d = FixedOffset.west(5 * 3_600).ymd(2015, 5, 15)
        assert str(d) == "2015-05-15-05:00"
        assert repr(d) == "Date(2015-05-15-05:00)"

    def test_timezone_is_reconstructed(self):
        offset = FixedOffset.east(9 * 3_600)
        dt = offset.ymd(2015, 5, 15).and_hms(9, 0, 0)
        assert dt.timezone() == offset
        assert dt.date().timezone() == offset
        assert dt.offset() == offset

    def test_equal_moments_across_offsets(self):
        a = FixedOffset.east(9 * 3_600).ymd(2015, 5, 15).and_hms(9, 0, 0)
        b = FixedOffset.west(5 * 3_600).ymd(2015, 5, 14).and_hms(19, 0, 0)
        c = UTC.ymd(2015, 5, 15).and_hms(0, 0, 0)
        assert a == b == c
        assert hash(a) == hash(b) == hash(c)
        assert str(a) != str(b)

    def test_ordering(self):
        early = FixedOffset.east(9 * 3_600).ymd(2015, 5, 15).and_hms(9, 0, 0)
        late = FixedOffset.west(5 * 3_600).ymd(2015, 5, 15).and_hms(0, 0, 0)
        assert early < late
        assert early <= late
        assert late > early
        assert late >= early
        assert not late < early

    def test_with_timezone(self):
        dt = UTC.ymd(2020, 8, 15).and_hms(12, 0, 0)
        moved = dt.with_timezone(FixedOffset.east(7_200))
        assert moved == dt
        assert moved.hour == 14
        assert str(moved) == "2020-08-15 14:00:00 +02:00"

    def test_date_crossing_day_boundary(self):
        dt = FixedOffset.west(3_600).timestamp(0)
        assert isinstance(dt, DateTime)
        assert str(dt) == "1969-12-31 23:00:00 -01:00"
        assert str(dt.date()) == "1969-12-31-01:00"
        assert dt.date().naive_utc() == NaiveDate(1969, 12, 31)
        assert dt.naive_utc().date() == NaiveDate(1970, 1, 1)

    def test_fixed_offset(self):
        dt = UTC.ymd(2020, 8, 15).and_hms(12, 0, 0)
        fixed = dt.fixed_offset()
        assert fixed.offset() == FixedOffset.east(0)
        assert fixed.timezone() == FixedOffset.east(0)
        assert fixed == dt
