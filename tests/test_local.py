import time

import pytest

import zonekit
from zonekit import (
    UTC,
    Ambiguous,
    DateTimeError,
    ErrorKind,
    FixedOffset,
    Local,
    NaiveDate,
    NaiveDateTime,
    Single,
)

# Central European Time, as a POSIX rule so no zone files are needed
_CET_RULE = "CET-1CEST,M3.5.0,M10.5.0/3"


@pytest.fixture
def system_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    def set_tz(value):
        monkeypatch.setenv("TZ", value)
        time.tzset()

    yield set_tz
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def cet(system_tz):
    system_tz(_CET_RULE)


@pytest.mark.usefixtures("cet")
class TestResolveLocal:

    def test_winter(self):
        dt = Local().ymd(2024, 1, 15).and_hms(9, 0, 0)
        assert dt.offset() == FixedOffset.east(3_600)
        assert str(dt) == "2024-01-15 09:00:00 +01:00"
        assert dt.naive_utc() == NaiveDateTime(2024, 1, 15, 8)

    def test_summer(self):
        dt = Local().ymd(2024, 7, 1).and_hms(9, 0, 0)
        assert dt.offset() == FixedOffset.east(7_200)
        assert dt.naive_utc() == NaiveDateTime(2024, 7, 1, 7)

    def test_date(self):
        d = Local().ymd(2024, 1, 15)
        assert str(d) == "2024-01-15+01:00"
        assert d.offset() == FixedOffset.east(3_600)

    def test_skipped_time(self):
        local = NaiveDateTime(2023, 3, 26, 2, 30)
        with pytest.raises(DateTimeError) as exc_info:
            Local().from_local_datetime(local)
        assert exc_info.value.kind is ErrorKind.INVALID_DATETIME

        with pytest.raises(DateTimeError) as exc_info:
            Local().resolve_local_datetime(local)
        assert exc_info.value.kind is ErrorKind.INVALID_DATETIME

    def test_skipped_time_via_date(self):
        with pytest.raises(DateTimeError) as exc_info:
            Local().ymd(2023, 3, 26).and_hms(2, 30, 0)
        assert exc_info.value.kind is ErrorKind.INVALID_DATETIME

    def test_repeated_time_resolves_to_earlier(self):
        dt = Local().from_local_datetime(NaiveDateTime(2023, 10, 29, 2, 30))
        assert dt.offset() == FixedOffset.east(7_200)
        assert dt.naive_utc() == NaiveDateTime(2023, 10, 29, 0, 30)

    def test_repeated_time_is_ambiguous(self):
        r = Local().resolve_local_datetime(NaiveDateTime(2023, 10, 29, 2, 30))
        assert isinstance(r, Ambiguous)
        assert r.single() is None
        assert str(r.earliest()) == "2023-10-29 02:30:00 +02:00"
        assert str(r.latest()) == "2023-10-29 02:30:00 +01:00"
        assert r.earliest() < r.latest()

    def test_unambiguous_resolution(self):
        local = NaiveDateTime(2023, 10, 29, 12)
        r = Local().resolve_local_datetime(local)
        assert r == Single(Local().from_local_datetime(local))
        d = Local().resolve_local_date(NaiveDate(2023, 10, 29))
        assert d == Single(Local().ymd(2023, 10, 29))

    @pytest.mark.parametrize(
        "utc, expected",
        [
            (NaiveDateTime(2023, 3, 26, 0, 59), "2023-03-26 01:59:00 +01:00"),
            (NaiveDateTime(2023, 3, 26, 1), "2023-03-26 03:00:00 +02:00"),
            (NaiveDateTime(2023, 10, 29, 0, 30), "2023-10-29 02:30:00 +02:00"),
            (NaiveDateTime(2023, 10, 29, 1, 30), "2023-10-29 02:30:00 +01:00"),
        ],
    )
    def test_from_utc_around_transitions(self, utc, expected):
        assert str(Local().from_utc_datetime(utc)) == expected

    def test_with_timezone(self):
        dt = UTC.ymd(2024, 7, 1).and_hms(12, 0, 0).with_timezone(Local())
        assert str(dt) == "2024-07-01 14:00:00 +02:00"
        assert dt.timezone() == Local()
        assert dt.date().timezone() == Local()


def test_now(cet, monkeypatch):
    monkeypatch.setattr(zonekit, "time_ns", lambda: 1_720_000_000 * 10**9)
    now = Local.now()
    assert now.offset() == FixedOffset.east(7_200)
    assert now.timestamp() == 1_720_000_000
    assert now == UTC.timestamp(1_720_000_000)
    assert Local.today() == Local().ymd(2024, 7, 3)


def test_now_before_epoch(monkeypatch):
    monkeypatch.setattr(zonekit, "time_ns", lambda: -5)
    with pytest.raises(DateTimeError) as exc_info:
        Local.now()
    assert exc_info.value.kind is ErrorKind.SYSTEM_TIME_BEFORE_EPOCH


def test_picks_up_system_changes(system_tz):
    local = NaiveDateTime(2024, 1, 15, 9)
    system_tz(_CET_RULE)
    assert Local().offset_from_local_datetime(local) == FixedOffset.east(3_600)
    system_tz("EST+5")
    assert Local().offset_from_local_datetime(local) == FixedOffset.west(
        5 * 3_600
    )


def test_logs_ambiguity(cet, caplog):
    with caplog.at_level("DEBUG", logger="zonekit"):
        Local().resolve_local_datetime(NaiveDateTime(2023, 10, 29, 2, 30))
    assert "ambiguous" in caplog.text


def test_equality_and_repr():
    assert Local() == Local()
    assert hash(Local()) == hash(Local())
    assert Local() != UTC
    assert repr(Local()) == "Local()"
