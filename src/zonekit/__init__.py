# The MIT License (MIT)
#
# Copyright (c) The zonekit authors
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - Why is everything in one file?
#   - Flat is better than nested
#   - It prevents circular imports since the zones, offsets and the
#     date(time) types they produce all 'know' about each other
#   - It's easier to vendor (i.e. copy-paste) this library if needed
# - Every zone implements exactly four ``offset_from_*`` resolvers and
#   ``from_offset``. Everything else on TimeZone is derived from those.
# - There is some code duplication in this file (e.g. the local resolution
#   of Local and Tz). This is intentional:
#   - It makes it easier to understand the code
#   - It's sometimes necessary for the type checker
from __future__ import annotations

__version__ = "0.1.0"

import enum
import logging
from abc import ABC, abstractmethod
from calendar import isleap
from datetime import (
    date as _date,
    datetime as _datetime,
    time as _time,
    timedelta as _timedelta,
    timezone as _timezone,
)
from time import time_ns
from typing import (
    TYPE_CHECKING,
    Callable,
    Generic,
    Optional,
    TypeVar,
    no_type_check,
)
from zoneinfo import ZoneInfo

__all__ = [
    # naive values
    "NaiveDate",
    "NaiveTime",
    "NaiveDateTime",
    # zone-aware values
    "Date",
    "DateTime",
    # offsets and zones
    "Offset",
    "FixedOffset",
    "TimeZone",
    "FixedTimeZone",
    "Utc",
    "UTC",
    "Local",
    "Tz",
    "TzOffset",
    # resolution results
    "LocalResult",
    "Single",
    "Ambiguous",
    # errors
    "ErrorKind",
    "DateTimeError",
    "AmbiguousLocalTime",
    "InvalidOffsetForZone",
    # ISO weekdays
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
]


MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(1, 8)

_logger = logging.getLogger(__name__)


class NaiveDate:
    """A date in the proleptic Gregorian calendar, without a time zone.

    Example
    -------

    >>> d = NaiveDate(2015, 5, 15)
    NaiveDate(2015-05-15)

    Raises
    ------
    DateTimeError
        If the year, month and day do not form a valid date
        (kind :attr:`ErrorKind.INVALID_DATE`).
    """

    __slots__ = ("_py_date",)

    def __init__(self, year: int, month: int, day: int) -> None:
        try:
            self._py_date = _date(year, month, day)
        except (ValueError, OverflowError):
            raise _error(ErrorKind.INVALID_DATE) from None

    @classmethod
    def from_ymd(cls, year: int, month: int, day: int, /) -> NaiveDate:
        """Alias for the constructor"""
        return cls(year, month, day)

    @classmethod
    def from_yo(cls, year: int, ordinal: int, /) -> NaiveDate:
        """Create a date from a year and a day of the year (1-based)

        Example
        -------

        >>> NaiveDate.from_yo(2015, 135)
        NaiveDate(2015-05-15)

        """
        if not 1 <= ordinal <= (366 if isleap(year) else 365):
            raise _error(ErrorKind.INVALID_DATE)
        first = cls(year, 1, 1)._py_date
        return cls.from_py_date(
            _date.fromordinal(first.toordinal() + ordinal - 1)
        )

    @classmethod
    def from_isoywd(cls, year: int, week: int, weekday: int, /) -> NaiveDate:
        """Create a date from an ISO week date.
        The weekday is 1 (Monday) through 7 (Sunday).
        The resulting date may lie in a different year than the ISO year.

        Example
        -------

        >>> from zonekit import FRIDAY
        >>> NaiveDate.from_isoywd(2015, 20, FRIDAY)
        NaiveDate(2015-05-15)

        """
        try:
            return cls.from_py_date(_date.fromisocalendar(year, week, weekday))
        except (ValueError, OverflowError):
            raise _error(ErrorKind.INVALID_DATE) from None

    @classmethod
    def from_py_date(cls, d: _date, /) -> NaiveDate:
        """Create from a :class:`~datetime.date`"""
        self = _object_new(cls)
        self._py_date = d
        return self

    def py_date(self) -> _date:
        """Get the underlying :class:`~datetime.date`"""
        return self._py_date

    @property
    def year(self) -> int:
        return self._py_date.year

    @property
    def month(self) -> int:
        return self._py_date.month

    @property
    def day(self) -> int:
        return self._py_date.day

    @property
    def ordinal(self) -> int:
        """The day of the year, starting at 1"""
        return self._py_date.timetuple().tm_yday

    def weekday(self) -> int:
        """The ISO day of the week, where 1 is Monday and 7 is Sunday"""
        return self._py_date.isoweekday()

    def iso_week(self) -> tuple[int, int]:
        """The ISO year and week number

        Example
        -------

        >>> NaiveDate(2015, 1, 1).iso_week()
        (2015, 1)
        >>> NaiveDate(2016, 1, 1).iso_week()
        (2015, 53)

        """
        year, week, _ = self._py_date.isocalendar()
        return year, week

    def and_time(self, time: NaiveTime, /) -> NaiveDateTime:
        """Combine with a time of day"""
        return NaiveDateTime._from_parts(self, time)

    def and_hms(self, hour: int, minute: int, second: int) -> NaiveDateTime:
        return self.and_time(NaiveTime(hour, minute, second))

    def and_hms_milli(
        self, hour: int, minute: int, second: int, milli: int
    ) -> NaiveDateTime:
        return self.and_time(
            NaiveTime.from_hms_milli(hour, minute, second, milli)
        )

    def and_hms_micro(
        self, hour: int, minute: int, second: int, micro: int
    ) -> NaiveDateTime:
        return self.and_time(
            NaiveTime.from_hms_micro(hour, minute, second, micro)
        )

    def and_hms_nano(
        self, hour: int, minute: int, second: int, nano: int
    ) -> NaiveDateTime:
        return self.and_time(
            NaiveTime.from_hms_nano(hour, minute, second, nano)
        )

    def _days_since_epoch(self) -> int:
        return self._py_date.toordinal() - _UNIX_EPOCH_ORDINAL

    def __str__(self) -> str:
        return self._py_date.isoformat()

    def __repr__(self) -> str:
        return f"NaiveDate({self})"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, NaiveDate):
                return NotImplemented
            return self._py_date == other._py_date

    def __hash__(self) -> int:
        return hash(self._py_date)

    def __lt__(self, other: NaiveDate) -> bool:
        if not isinstance(other, NaiveDate):
            return NotImplemented
        return self._py_date < other._py_date

    def __le__(self, other: NaiveDate) -> bool:
        if not isinstance(other, NaiveDate):
            return NotImplemented
        return self._py_date <= other._py_date

    def __gt__(self, other: NaiveDate) -> bool:
        if not isinstance(other, NaiveDate):
            return NotImplemented
        return self._py_date > other._py_date

    def __ge__(self, other: NaiveDate) -> bool:
        if not isinstance(other, NaiveDate):
            return NotImplemented
        return self._py_date >= other._py_date

    # We don't need to copy, because it's immutable
    def __copy__(self) -> NaiveDate:
        return self

    def __deepcopy__(self, _: object) -> NaiveDate:
        return self


class NaiveTime:
    """A time of day with nanosecond precision, without a time zone.

    A nanosecond value of one billion or more represents a leap second:
    ``NaiveTime(23, 59, 59, nanosecond=1_500_000_000)`` is displayed
    as ``23:59:60.500``.

    Example
    -------

    >>> NaiveTime(12, 30, nanosecond=250_000_000)
    NaiveTime(12:30:00.250)

    Raises
    ------
    DateTimeError
        If any of the components is out of range
        (kind :attr:`ErrorKind.INVALID_TIME`).
    """

    __slots__ = ("_secs", "_nanos")

    def __init__(
        self,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        nanosecond: int = 0,
    ) -> None:
        if not (
            0 <= hour < 24
            and 0 <= minute < 60
            and 0 <= second < 60
            and 0 <= nanosecond < 2_000_000_000
        ):
            raise _error(ErrorKind.INVALID_TIME)
        self._secs = hour * 3_600 + minute * 60 + second
        self._nanos = nanosecond

    @classmethod
    def from_hms(cls, hour: int, minute: int, second: int, /) -> NaiveTime:
        return cls(hour, minute, second)

    @classmethod
    def from_hms_milli(
        cls, hour: int, minute: int, second: int, milli: int, /
    ) -> NaiveTime:
        """The milliseconds may exceed 999 to represent a leap second"""
        if not 0 <= milli < 2_000:
            raise _error(ErrorKind.INVALID_TIME)
        return cls(hour, minute, second, nanosecond=milli * 1_000_000)

    @classmethod
    def from_hms_micro(
        cls, hour: int, minute: int, second: int, micro: int, /
    ) -> NaiveTime:
        """The microseconds may exceed 999_999 to represent a leap second"""
        if not 0 <= micro < 2_000_000:
            raise _error(ErrorKind.INVALID_TIME)
        return cls(hour, minute, second, nanosecond=micro * 1_000)

    @classmethod
    def from_hms_nano(
        cls, hour: int, minute: int, second: int, nano: int, /
    ) -> NaiveTime:
        """The nanoseconds may exceed 999_999_999 to represent a leap second"""
        return cls(hour, minute, second, nanosecond=nano)

    @classmethod
    def _from_parts(cls, secs: int, nanos: int) -> NaiveTime:
        self = _object_new(cls)
        self._secs = secs
        self._nanos = nanos
        return self

    @property
    def hour(self) -> int:
        return self._secs // 3_600

    @property
    def minute(self) -> int:
        return self._secs // 60 % 60

    @property
    def second(self) -> int:
        return self._secs % 60

    @property
    def nanosecond(self) -> int:
        return self._nanos

    def is_leap_second(self) -> bool:
        return self._nanos >= 1_000_000_000

    def py_time(self) -> _time:
        """Convert to a :class:`~datetime.time`.
        Precision is truncated to microseconds,
        and a leap second is clamped to the end of its preceding second.
        """
        return _time(
            self.hour,
            self.minute,
            self.second,
            min(self._nanos, 999_999_999) // 1_000,
        )

    def __str__(self) -> str:
        second, nanos = self.second, self._nanos
        if nanos >= 1_000_000_000:
            second += 1
            nanos -= 1_000_000_000
        return f"{self.hour:02}:{self.minute:02}:{second:02}{_fraction(nanos)}"

    def __repr__(self) -> str:
        return f"NaiveTime({self})"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, NaiveTime):
                return NotImplemented
            return (self._secs, self._nanos) == (other._secs, other._nanos)

    def __hash__(self) -> int:
        return hash((self._secs, self._nanos))

    def __lt__(self, other: NaiveTime) -> bool:
        if not isinstance(other, NaiveTime):
            return NotImplemented
        return (self._secs, self._nanos) < (other._secs, other._nanos)

    def __le__(self, other: NaiveTime) -> bool:
        if not isinstance(other, NaiveTime):
            return NotImplemented
        return (self._secs, self._nanos) <= (other._secs, other._nanos)

    def __gt__(self, other: NaiveTime) -> bool:
        if not isinstance(other, NaiveTime):
            return NotImplemented
        return (self._secs, self._nanos) > (other._secs, other._nanos)

    def __ge__(self, other: NaiveTime) -> bool:
        if not isinstance(other, NaiveTime):
            return NotImplemented
        return (self._secs, self._nanos) >= (other._secs, other._nanos)

    def __copy__(self) -> NaiveTime:
        return self

    def __deepcopy__(self, _: object) -> NaiveTime:
        return self


class NaiveDateTime:
    """A date and time of day, without a time zone.

    Example
    -------

    >>> NaiveDateTime(2015, 5, 15, 12, 30)
    NaiveDateTime(2015-05-15 12:30:00)

    Note
    ----
    Adding or subtracting a :class:`FixedOffset` shifts the value
    by the offset's number of seconds. This is how local and UTC
    values are converted into each other.
    """

    __slots__ = ("_date", "_time")

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        nanosecond: int = 0,
    ) -> None:
        self._date = NaiveDate(year, month, day)
        self._time = NaiveTime(hour, minute, second, nanosecond=nanosecond)

    @classmethod
    def _from_parts(cls, d: NaiveDate, t: NaiveTime) -> NaiveDateTime:
        self = _object_new(cls)
        self._date = d
        self._time = t
        return self

    @classmethod
    def from_timestamp(cls, secs: int, nsecs: int = 0, /) -> NaiveDateTime:
        """Create from the number of non-leap seconds since the epoch
        and the nanoseconds since the last whole second.

        Example
        -------

        >>> NaiveDateTime.from_timestamp(1_431_648_000)
        NaiveDateTime(2015-05-15 00:00:00)

        Raises
        ------
        DateTimeError
            With kind :attr:`ErrorKind.INVALID_TIME` if ``nsecs`` is
            out of range, or :attr:`ErrorKind.INVALID_DATETIME` if
            ``secs`` is outside the supported calendar.
        """
        if not 0 <= nsecs < 2_000_000_000:
            raise _error(ErrorKind.INVALID_TIME)
        days, secs_of_day = divmod(secs, 86_400)
        try:
            d = _date.fromordinal(days + _UNIX_EPOCH_ORDINAL)
        except (ValueError, OverflowError):
            raise _error(ErrorKind.INVALID_DATETIME) from None
        return cls._from_parts(
            NaiveDate.from_py_date(d),
            NaiveTime._from_parts(secs_of_day, nsecs),
        )

    @classmethod
    def from_py_datetime(cls, d: _datetime, /) -> NaiveDateTime:
        """Create from a naive :class:`~datetime.datetime`"""
        if d.tzinfo is not None:
            raise ValueError(
                "Can only create NaiveDateTime from a naive datetime, "
                f"got datetime with tzinfo={d.tzinfo!r}"
            )
        return cls._from_parts(
            NaiveDate.from_py_date(d.date()),
            NaiveTime._from_parts(
                d.hour * 3_600 + d.minute * 60 + d.second,
                d.microsecond * 1_000,
            ),
        )

    def py_datetime(self) -> _datetime:
        """Convert to a naive :class:`~datetime.datetime`,
        truncating to microsecond precision."""
        return _datetime.combine(self._date._py_date, self._time.py_time())

    def date(self) -> NaiveDate:
        return self._date

    def time(self) -> NaiveTime:
        return self._time

    def timestamp(self) -> int:
        """The number of non-leap seconds since the epoch"""
        return self._date._days_since_epoch() * 86_400 + self._time._secs

    def timestamp_millis(self) -> int:
        return self.timestamp() * 1_000 + self._time._nanos // 1_000_000

    def timestamp_nanos(self) -> int:
        return self.timestamp() * 1_000_000_000 + self._time._nanos

    def _shift(self, secs: int) -> NaiveDateTime:
        days, secs_of_day = divmod(self._time._secs + secs, 86_400)
        try:
            d = _date.fromordinal(self._date._py_date.toordinal() + days)
        except (ValueError, OverflowError):
            raise _error(ErrorKind.INVALID_DATETIME) from None
        return self._from_parts(
            NaiveDate.from_py_date(d),
            NaiveTime._from_parts(secs_of_day, self._time._nanos),
        )

    def __add__(self, other: FixedOffset) -> NaiveDateTime:
        if not isinstance(other, FixedOffset):
            return NotImplemented
        return self._shift(other._secs)

    def __sub__(self, other: FixedOffset) -> NaiveDateTime:
        if not isinstance(other, FixedOffset):
            return NotImplemented
        return self._shift(-other._secs)

    def isoformat(self) -> str:
        return f"{self._date}T{self._time}"

    def __str__(self) -> str:
        return f"{self._date} {self._time}"

    def __repr__(self) -> str:
        return f"NaiveDateTime({self})"

    def _key(self) -> tuple[int, int, int]:
        return (
            self._date._py_date.toordinal(),
            self._time._secs,
            self._time._nanos,
        )

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, NaiveDateTime):
                return NotImplemented
            return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other: NaiveDateTime) -> bool:
        if not isinstance(other, NaiveDateTime):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: NaiveDateTime) -> bool:
        if not isinstance(other, NaiveDateTime):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: NaiveDateTime) -> bool:
        if not isinstance(other, NaiveDateTime):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: NaiveDateTime) -> bool:
        if not isinstance(other, NaiveDateTime):
            return NotImplemented
        return self._key() >= other._key()

    def __copy__(self) -> NaiveDateTime:
        return self

    def __deepcopy__(self, _: object) -> NaiveDateTime:
        return self


class Offset(ABC):
    """The state of a time zone at some instant.
    Every offset can be reduced to a :class:`FixedOffset`.
    """

    __slots__ = ()

    @abstractmethod
    def fix(self) -> FixedOffset:
        """The fixed offset from UTC to the local time"""

    def _compact(self) -> str:
        # used in repr() of zone-aware values
        return str(self.fix())


_TOffset = TypeVar("_TOffset", bound=Offset)
_TZone = TypeVar("_TZone", bound="TimeZone")
_T = TypeVar("_T")
_U = TypeVar("_U")


class TimeZone(ABC, Generic[_TOffset]):
    """Abstract base class for all time zones.

    A time zone knows how to resolve naive local and UTC values
    into an :class:`Offset`. Implementations supply the four
    ``offset_from_*`` resolvers and :meth:`from_offset`;
    all other methods are derived from them.

    Example
    -------

    >>> from zonekit import UTC
    >>> UTC.ymd(2015, 5, 15).and_hms(10, 0, 0)
    DateTime(2015-05-15T10:00:00Z)
    >>> UTC.timestamp_millis(-7_001)
    DateTime(1969-12-31T23:59:52.999Z)

    """

    __slots__ = ()

    @classmethod
    @abstractmethod
    def from_offset(cls: type[_TZone], offset: _TOffset, /) -> _TZone:
        """Reconstruct the time zone from a resolved offset"""

    @abstractmethod
    def offset_from_local_date(self, local: NaiveDate, /) -> _TOffset:
        """The offset for a local date.

        Raises
        ------
        DateTimeError
            If the date cannot be resolved in this zone
        """

    @abstractmethod
    def offset_from_local_datetime(self, local: NaiveDateTime, /) -> _TOffset:
        """The offset for a local date and time.

        Raises
        ------
        DateTimeError
            If the local time doesn't exist in this zone
        """

    @abstractmethod
    def offset_from_utc_date(self, utc: NaiveDate, /) -> _TOffset:
        """The offset for a UTC date. UTC is continuous,
        so a single offset always exists."""

    @abstractmethod
    def offset_from_utc_datetime(self, utc: NaiveDateTime, /) -> _TOffset:
        """The offset for a UTC date and time. UTC is continuous,
        so a single offset always exists."""

    def ymd(self: _TZone, year: int, month: int, day: int) -> Date[_TZone]:
        """Create a date in this zone from year, month and day

        Example
        -------

        >>> str(UTC.ymd(2015, 5, 15))
        '2015-05-15UTC'

        Raises
        ------
        DateTimeError
            On an invalid date (kind :attr:`ErrorKind.INVALID_DATE`)
        """
        return self.from_local_date(NaiveDate.from_ymd(year, month, day))

    def yo(self: _TZone, year: int, ordinal: int) -> Date[_TZone]:
        """Create a date in this zone from year and day of the year

        Example
        -------

        >>> str(UTC.yo(2015, 135))
        '2015-05-15UTC'

        """
        return self.from_local_date(NaiveDate.from_yo(year, ordinal))

    def isoywd(
        self: _TZone, year: int, week: int, weekday: int
    ) -> Date[_TZone]:
        """Create a date in this zone from an ISO week date.
        The resulting date may have a different year than the input year.

        Example
        -------

        >>> str(UTC.isoywd(2015, 20, FRIDAY))
        '2015-05-15UTC'

        """
        return self.from_local_date(NaiveDate.from_isoywd(year, week, weekday))

    def timestamp(
        self: _TZone, secs: int, nsecs: int = 0
    ) -> DateTime[_TZone]:
        """Create a datetime from the number of non-leap seconds since
        1970-01-01T00:00:00Z and the nanoseconds since the last whole
        second.

        Example
        -------

        >>> str(UTC.timestamp(1_431_648_000, 0))
        '2015-05-15 00:00:00 UTC'

        Raises
        ------
        DateTimeError
            On an out-of-range ``secs`` or ``nsecs``
        """
        utc = NaiveDateTime.from_timestamp(secs, nsecs)
        return self.from_utc_datetime(utc)

    def timestamp_millis(self: _TZone, millis: int) -> DateTime[_TZone]:
        """Create a datetime from the number of non-leap milliseconds
        since 1970-01-01T00:00:00Z

        Example
        -------

        >>> str(UTC.timestamp_millis(-1))
        '1969-12-31 23:59:59.999 UTC'

        """
        secs, millis = _floor_divmod(millis, 1_000)
        return self.timestamp(secs, millis * 1_000_000)

    def timestamp_nanos(self: _TZone, nanos: int) -> DateTime[_TZone]:
        """Create a datetime from the number of non-leap nanoseconds
        since 1970-01-01T00:00:00Z.

        Note
        ----
        This never fails for any 64-bit signed integer.
        """
        secs, nanos = _floor_divmod(nanos, 1_000_000_000)
        return self.timestamp(secs, nanos)

    def datetime_from_str(self: _TZone, s: str, fmt: str) -> DateTime[_TZone]:
        """Parse a string with a :meth:`~datetime.datetime.strptime` format
        and resolve it in this zone.

        Example
        -------

        >>> UTC.datetime_from_str("2014-05-07 12:34:56", "%Y-%m-%d %H:%M:%S")
        DateTime(2014-05-07T12:34:56Z)

        Raises
        ------
        ValueError
            If the string does not match the format
        InvalidOffsetForZone
            If the string contains an offset (``%z``) which differs
            from the offset this zone has at the parsed instant
        """
        parsed = _datetime.strptime(s, fmt)
        local = NaiveDateTime.from_py_datetime(parsed.replace(tzinfo=None))
        explicit = parsed.utcoffset()
        if explicit is None:
            return self.from_local_datetime(local)
        secs, rest = divmod(explicit, _SECOND)
        if rest:
            raise InvalidOffsetForZone(
                f"Parsed offset {explicit} has a fraction of a second"
            )
        fixed = FixedOffset.east(secs)
        result = self.from_utc_datetime(local - fixed)
        if result.offset().fix() != fixed:
            raise InvalidOffsetForZone(
                f"Parsed offset {fixed} doesn't match "
                f"offset {result.offset().fix()} of {self!r}"
            )
        return result

    def from_local_date(self: _TZone, local: NaiveDate, /) -> Date[_TZone]:
        """Convert a local date to a date in this zone"""
        offset = self.offset_from_local_date(local)
        return Date._from_local(local, offset, type(self))

    def from_local_datetime(
        self: _TZone, local: NaiveDateTime, /
    ) -> DateTime[_TZone]:
        """Convert a local date and time to a datetime in this zone"""
        offset = self.offset_from_local_datetime(local)
        return DateTime._from_utc(local - offset.fix(), offset, type(self))

    def from_utc_date(self: _TZone, utc: NaiveDate, /) -> Date[_TZone]:
        """Convert a UTC date to a date in this zone"""
        offset = self.offset_from_utc_date(utc)
        return Date._from_local(utc, offset, type(self))

    def from_utc_datetime(
        self: _TZone, utc: NaiveDateTime, /
    ) -> DateTime[_TZone]:
        """Convert a UTC date and time to a datetime in this zone"""
        return DateTime._from_utc(
            utc, self.offset_from_utc_datetime(utc), type(self)
        )

    def resolve_local_date(
        self: _TZone, local: NaiveDate, /
    ) -> LocalResult[Date[_TZone]]:
        """All possible dates in this zone for the given local date.
        Zones with transitions override this to report ambiguity.
        """
        return Single(self.from_local_date(local))

    def resolve_local_datetime(
        self: _TZone, local: NaiveDateTime, /
    ) -> LocalResult[DateTime[_TZone]]:
        """All possible datetimes in this zone for the given local time.

        Example
        -------

        >>> Tz("Europe/Amsterdam").resolve_local_datetime(
        ...     NaiveDateTime(2023, 10, 29, 2, 30)
        ... )
        Ambiguous(DateTime(2023-10-29T02:30:00+02:00),
                  DateTime(2023-10-29T02:30:00+01:00))

        Raises
        ------
        DateTimeError
            If the local time doesn't exist in this zone
        """
        return Single(self.from_local_datetime(local))


class FixedTimeZone(TimeZone[_TOffset]):
    """A time zone whose UTC to local mapping never fails,
    and doesn't depend on the system it runs on."""

    __slots__ = ()

    @abstractmethod
    def offset_from_utc_date_fixed(self, utc: NaiveDate, /) -> _TOffset:
        """The offset for a UTC date. Cannot fail."""

    @abstractmethod
    def offset_from_utc_datetime_fixed(
        self, utc: NaiveDateTime, /
    ) -> _TOffset:
        """The offset for a UTC date and time. Cannot fail."""

    def from_utc_date_fixed(self: _TZone, utc: NaiveDate, /) -> Date[_TZone]:
        return Date._from_local(
            utc,
            self.offset_from_utc_date_fixed(utc),  # type: ignore[attr-defined]
            type(self),
        )

    def from_utc_datetime_fixed(
        self: _TZone, utc: NaiveDateTime, /
    ) -> DateTime[_TZone]:
        return DateTime._from_utc(
            utc,
            self.offset_from_utc_datetime_fixed(utc),  # type: ignore[attr-defined]
            type(self),
        )


class FixedOffset(FixedTimeZone["FixedOffset"], Offset):
    """A constant offset of a number of seconds east of UTC.
    It is both a time zone and its own offset.

    Example
    -------

    >>> FixedOffset.east(5 * 3_600)
    FixedOffset(+05:00)
    >>> FixedOffset.west(3 * 3_600 + 30 * 60)
    FixedOffset(-03:30)

    Raises
    ------
    ValueError
        If the offset is 24 hours or more in either direction
    """

    __slots__ = ("_secs",)

    def __init__(self, secs: int) -> None:
        if not -86_400 < secs < 86_400:
            raise ValueError(f"Offset out of bounds: {secs} seconds")
        self._secs = secs

    @classmethod
    def east(cls, secs: int, /) -> FixedOffset:
        """An offset of ``secs`` seconds east of UTC (i.e. ahead)"""
        return cls(secs)

    @classmethod
    def west(cls, secs: int, /) -> FixedOffset:
        """An offset of ``secs`` seconds west of UTC (i.e. behind)"""
        return cls(-secs)

    @classmethod
    def east_opt(cls, secs: int, /) -> Optional[FixedOffset]:
        """Like :meth:`east`, but returns ``None`` when out of bounds"""
        return cls(secs) if -86_400 < secs < 86_400 else None

    @classmethod
    def west_opt(cls, secs: int, /) -> Optional[FixedOffset]:
        """Like :meth:`west`, but returns ``None`` when out of bounds"""
        return cls(-secs) if -86_400 < secs < 86_400 else None

    def local_minus_utc(self) -> int:
        return self._secs

    def utc_minus_local(self) -> int:
        return -self._secs

    def fix(self) -> FixedOffset:
        return self

    @classmethod
    def from_offset(cls, offset: FixedOffset, /) -> FixedOffset:
        return offset

    def offset_from_local_date(self, local: NaiveDate, /) -> FixedOffset:
        return self

    def offset_from_local_datetime(
        self, local: NaiveDateTime, /
    ) -> FixedOffset:
        return self

    def offset_from_utc_date(self, utc: NaiveDate, /) -> FixedOffset:
        return self

    def offset_from_utc_datetime(self, utc: NaiveDateTime, /) -> FixedOffset:
        return self

    def offset_from_utc_date_fixed(self, utc: NaiveDate, /) -> FixedOffset:
        return self

    def offset_from_utc_datetime_fixed(
        self, utc: NaiveDateTime, /
    ) -> FixedOffset:
        return self

    def __str__(self) -> str:
        sign = "-" if self._secs < 0 else "+"
        mins, secs = divmod(abs(self._secs), 60)
        hours, mins = divmod(mins, 60)
        return f"{sign}{hours:02}:{mins:02}" + (f":{secs:02}" if secs else "")

    def __repr__(self) -> str:
        return f"FixedOffset({self})"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, FixedOffset):
                return NotImplemented
            return self._secs == other._secs

    def __hash__(self) -> int:
        return hash(self._secs)

    def __copy__(self) -> FixedOffset:
        return self

    def __deepcopy__(self, _: object) -> FixedOffset:
        return self


class Utc(FixedTimeZone["Utc"], Offset):
    """The UTC time zone. It carries no information,
    and is also used as its own offset.

    Using the :class:`TimeZone` methods on :data:`UTC`
    is the preferred way to create UTC datetimes.

    Example
    -------

    >>> from zonekit import UTC
    >>> UTC.timestamp(61, 0) == UTC.ymd(1970, 1, 1).and_hms(0, 1, 1)
    True
    >>> str(UTC), repr(UTC)
    ('UTC', 'Z')

    """

    __slots__ = ()

    @classmethod
    def now(cls) -> DateTime[Utc]:
        """The current date and time, read from the system clock

        Raises
        ------
        DateTimeError
            If the system clock is set before 1970-01-01T00:00:00Z
            (kind :attr:`ErrorKind.SYSTEM_TIME_BEFORE_EPOCH`)
        """
        nanos = time_ns()
        _logger.debug("Read system clock: %d ns since epoch", nanos)
        if nanos < 0:
            raise _error(ErrorKind.SYSTEM_TIME_BEFORE_EPOCH)
        secs, nanos = divmod(nanos, 1_000_000_000)
        return cls().from_utc_datetime_fixed(
            NaiveDateTime.from_timestamp(secs, nanos)
        )

    @classmethod
    def today(cls) -> Date[Utc]:
        """The current date. Fails in the same way as :meth:`now`."""
        return cls.now().date()

    def fix(self) -> FixedOffset:
        return _ZERO_OFFSET

    @classmethod
    def from_offset(cls, offset: Utc, /) -> Utc:
        return cls()

    def offset_from_local_date(self, local: NaiveDate, /) -> Utc:
        return self

    def offset_from_local_datetime(self, local: NaiveDateTime, /) -> Utc:
        return self

    def offset_from_utc_date(self, utc: NaiveDate, /) -> Utc:
        return self

    def offset_from_utc_datetime(self, utc: NaiveDateTime, /) -> Utc:
        return self

    def offset_from_utc_date_fixed(self, utc: NaiveDate, /) -> Utc:
        return self

    def offset_from_utc_datetime_fixed(self, utc: NaiveDateTime, /) -> Utc:
        return self

    def _compact(self) -> str:
        return "Z"

    def __str__(self) -> str:
        return "UTC"

    def __repr__(self) -> str:
        return "Z"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, Utc):
                return NotImplemented
            return True

    def __hash__(self) -> int:
        return hash(Utc)

    def __copy__(self) -> Utc:
        return self

    def __deepcopy__(self, _: object) -> Utc:
        return self


class Local(TimeZone[FixedOffset]):
    """The time zone of the system this code runs on.

    The system zone is consulted every time an offset is resolved,
    so changes to it (e.g. through the ``TZ`` environment variable
    and :func:`time.tzset`) are picked up by new conversions.
    Values already created keep the offset they were resolved with.

    Local times which are skipped by the clock (e.g. because of DST)
    raise :class:`DateTimeError` with kind
    :attr:`ErrorKind.INVALID_DATETIME`. Local times which occur twice
    resolve to the earlier instant, or to :class:`Ambiguous` with
    :meth:`~TimeZone.resolve_local_datetime`.
    """

    __slots__ = ()

    @classmethod
    def now(cls) -> DateTime[Local]:
        """The current date and time in the system time zone"""
        return Utc.now().with_timezone(cls())

    @classmethod
    def today(cls) -> Date[Local]:
        return cls.now().date()

    @classmethod
    def from_offset(cls, offset: FixedOffset, /) -> Local:
        return cls()

    def _candidates(self, local: NaiveDateTime) -> LocalResult[FixedOffset]:
        dt = local.py_datetime()
        try:
            earlier = dt.astimezone(_UTC).astimezone()
            # Non-existent times: they don't survive a UTC roundtrip
            if earlier.replace(tzinfo=None) != dt:
                _logger.debug("%s is skipped in the system timezone", local)
                raise _error(ErrorKind.INVALID_DATETIME)
            later = dt.replace(fold=1).astimezone(_UTC).astimezone()
        except (OverflowError, OSError, ValueError):
            raise _error(ErrorKind.INVALID_DATETIME) from None
        if earlier == later:
            return Single(_fixed_from_py(earlier))
        _logger.debug("%s is ambiguous in the system timezone", local)
        return Ambiguous(_fixed_from_py(earlier), _fixed_from_py(later))

    def offset_from_local_date(self, local: NaiveDate, /) -> FixedOffset:
        return self.offset_from_local_datetime(local.and_hms(0, 0, 0))

    def offset_from_local_datetime(
        self, local: NaiveDateTime, /
    ) -> FixedOffset:
        return self._candidates(local).earliest()

    def offset_from_utc_date(self, utc: NaiveDate, /) -> FixedOffset:
        return self.offset_from_utc_datetime(utc.and_hms(0, 0, 0))

    def offset_from_utc_datetime(self, utc: NaiveDateTime, /) -> FixedOffset:
        try:
            return _fixed_from_py(
                utc.py_datetime().replace(tzinfo=_UTC).astimezone()
            )
        except (OverflowError, OSError, ValueError):
            raise _error(ErrorKind.INVALID_DATETIME) from None

    def resolve_local_date(
        self, local: NaiveDate, /
    ) -> LocalResult[Date[Local]]:
        return self._candidates(local.and_hms(0, 0, 0)).map(
            lambda offset: Date._from_local(local, offset, Local)
        )

    def resolve_local_datetime(
        self, local: NaiveDateTime, /
    ) -> LocalResult[DateTime[Local]]:
        return self._candidates(local).map(
            lambda offset: DateTime._from_utc(local - offset, offset, Local)
        )

    def __repr__(self) -> str:
        return "Local()"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, Local):
                return NotImplemented
            return True

    def __hash__(self) -> int:
        return hash(Local)


class TzOffset(Offset):
    """The offset of an IANA time zone at some instant.
    Remembers the zone it came from, so the zone can be reconstructed.

    Example
    -------

    >>> dt = Tz("Europe/Paris").ymd(2024, 7, 1).and_hms(12, 0, 0)
    >>> offset = dt.offset()
    >>> str(offset), offset.fix()
    ('CEST', FixedOffset(+02:00))

    """

    __slots__ = ("_fixed", "_key", "_abbrev")

    def __init__(
        self, fixed: FixedOffset, key: str, abbrev: Optional[str] = None
    ) -> None:
        self._fixed = fixed
        self._key = key
        self._abbrev = abbrev

    @property
    def key(self) -> str:
        """The IANA time zone ID"""
        return self._key

    @property
    def abbreviation(self) -> Optional[str]:
        """The abbreviation in use, e.g. ``"CET"``, if known"""
        return self._abbrev

    def fix(self) -> FixedOffset:
        return self._fixed

    def __str__(self) -> str:
        return self._abbrev or str(self._fixed)

    def __repr__(self) -> str:
        return f"TzOffset({self._fixed}, {self._key!r}, {self._abbrev!r})"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, TzOffset):
                return NotImplemented
            return (self._fixed, self._key, self._abbrev) == (
                other._fixed,
                other._key,
                other._abbrev,
            )

    def __hash__(self) -> int:
        return hash((self._fixed, self._key, self._abbrev))


class Tz(TimeZone[TzOffset]):
    """A time zone from the IANA database, e.g. ``"Europe/Amsterdam"``.

    The zone data is provided by :class:`zoneinfo.ZoneInfo`.

    Example
    -------

    >>> ams = Tz("Europe/Amsterdam")
    >>> str(ams.ymd(2024, 1, 15).and_hms(9, 0, 0))
    '2024-01-15 09:00:00 CET'
    >>>
    >>> # 02:30 doesn't exist on this day
    >>> ams.from_local_datetime(NaiveDateTime(2023, 3, 26, 2, 30))
    Traceback (most recent call last):
      ...
    zonekit.DateTimeError: invalid date time

    Raises
    ------
    zoneinfo.ZoneInfoNotFoundError
        If there is no zone with the given key
    """

    __slots__ = ("_zone",)

    def __init__(self, key: str) -> None:
        self._zone = ZoneInfo(key)

    @property
    def key(self) -> str:
        return self._zone.key

    @classmethod
    def from_offset(cls, offset: TzOffset, /) -> Tz:
        return cls(offset.key)

    def _offset_from_py(self, d: _datetime) -> TzOffset:
        return TzOffset(_fixed_from_py(d), self._zone.key, d.tzname())

    def _candidates(self, local: NaiveDateTime) -> LocalResult[TzOffset]:
        earlier = local.py_datetime().replace(tzinfo=self._zone)
        try:
            # Non-existent times: they don't survive a UTC roundtrip
            if earlier.astimezone(_UTC).astimezone(self._zone) != earlier:
                _logger.debug("%s is skipped in timezone %s", local, self.key)
                raise _error(ErrorKind.INVALID_DATETIME)
        except OverflowError:
            raise _error(ErrorKind.INVALID_DATETIME) from None
        later = earlier.replace(fold=1)
        if earlier.utcoffset() == later.utcoffset():
            return Single(self._offset_from_py(earlier))
        _logger.debug("%s is ambiguous in timezone %s", local, self.key)
        return Ambiguous(
            self._offset_from_py(earlier), self._offset_from_py(later)
        )

    def offset_from_local_date(self, local: NaiveDate, /) -> TzOffset:
        return self.offset_from_local_datetime(local.and_hms(0, 0, 0))

    def offset_from_local_datetime(self, local: NaiveDateTime, /) -> TzOffset:
        return self._candidates(local).earliest()

    def offset_from_utc_date(self, utc: NaiveDate, /) -> TzOffset:
        return self.offset_from_utc_datetime(utc.and_hms(0, 0, 0))

    def offset_from_utc_datetime(self, utc: NaiveDateTime, /) -> TzOffset:
        try:
            return self._offset_from_py(
                utc.py_datetime().replace(tzinfo=_UTC).astimezone(self._zone)
            )
        except OverflowError:
            raise _error(ErrorKind.INVALID_DATETIME) from None

    def resolve_local_date(self, local: NaiveDate, /) -> LocalResult[Date[Tz]]:
        return self._candidates(local.and_hms(0, 0, 0)).map(
            lambda offset: Date._from_local(local, offset, Tz)
        )

    def resolve_local_datetime(
        self, local: NaiveDateTime, /
    ) -> LocalResult[DateTime[Tz]]:
        return self._candidates(local).map(
            lambda offset: DateTime._from_utc(
                local - offset.fix(), offset, Tz
            )
        )

    def __str__(self) -> str:
        return self._zone.key

    def __repr__(self) -> str:
        return f"Tz({self._zone.key!r})"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, Tz):
                return NotImplemented
            return self._zone.key == other._zone.key

    def __hash__(self) -> int:
        return hash(self._zone.key)


class LocalResult(ABC, Generic[_T]):
    """The result of resolving a local time in a time zone:
    either a :class:`Single` value, or two :class:`Ambiguous` ones
    when the clock was set back.

    Example
    -------

    >>> r = Tz("Europe/Amsterdam").resolve_local_datetime(
    ...     NaiveDateTime(2023, 10, 29, 2, 30)
    ... )
    >>> r.single() is None
    True
    >>> r.earliest()
    DateTime(2023-10-29T02:30:00+02:00)
    >>> match r:
    ...     case Ambiguous(first, second): ...

    """

    __slots__ = ()

    @abstractmethod
    def single(self) -> Optional[_T]:
        """The value if the result is unique, otherwise ``None``"""

    @abstractmethod
    def earliest(self) -> _T:
        """The earliest possible value"""

    @abstractmethod
    def latest(self) -> _T:
        """The latest possible value"""

    @abstractmethod
    def map(self, f: Callable[[_T], _U], /) -> LocalResult[_U]:
        """Apply a function to the value(s), preserving the shape"""

    @abstractmethod
    def unwrap(self) -> _T:
        """The unique value.

        Raises
        ------
        AmbiguousLocalTime
            If the result is ambiguous. Only use this method
            if you already know the result is unique.
        """

    @abstractmethod
    def _unique_date(self) -> Date:
        ...

    def and_time(self, time: NaiveTime, /) -> LocalResult[DateTime]:
        """Combine a unique date with a time of day.

        Raises
        ------
        DateTimeError
            If the date is ambiguous (kind :attr:`ErrorKind.AMBIGUOUS_DATE`)
            or the resulting datetime is invalid
        """
        return Single(self._unique_date().and_time(time))

    def and_hms(
        self, hour: int, minute: int, second: int
    ) -> LocalResult[DateTime]:
        return Single(self._unique_date().and_hms(hour, minute, second))

    def and_hms_milli(
        self, hour: int, minute: int, second: int, milli: int
    ) -> LocalResult[DateTime]:
        """The milliseconds may exceed 999 to represent a leap second"""
        return Single(
            self._unique_date().and_hms_milli(hour, minute, second, milli)
        )

    def and_hms_micro(
        self, hour: int, minute: int, second: int, micro: int
    ) -> LocalResult[DateTime]:
        """The microseconds may exceed 999_999 to represent a leap second"""
        return Single(
            self._unique_date().and_hms_micro(hour, minute, second, micro)
        )

    def and_hms_nano(
        self, hour: int, minute: int, second: int, nano: int
    ) -> LocalResult[DateTime]:
        """The nanoseconds may exceed 999_999_999 to represent a leap second"""
        return Single(
            self._unique_date().and_hms_nano(hour, minute, second, nano)
        )


class Single(LocalResult[_T]):
    """A local time with exactly one result"""

    __slots__ = ("_value",)
    __match_args__ = ("value",)

    def __init__(self, value: _T) -> None:
        self._value = value

    @property
    def value(self) -> _T:
        return self._value

    def single(self) -> Optional[_T]:
        return self._value

    def earliest(self) -> _T:
        return self._value

    def latest(self) -> _T:
        return self._value

    def map(self, f: Callable[[_T], _U], /) -> LocalResult[_U]:
        return Single(f(self._value))

    def unwrap(self) -> _T:
        return self._value

    def _unique_date(self) -> Date:
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Single({self._value!r})"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, LocalResult):
                return NotImplemented
            return isinstance(other, Single) and self._value == other._value

    def __hash__(self) -> int:
        return hash((Single, self._value))


class Ambiguous(LocalResult[_T]):
    """A local time with two results, ordered from earlier to later"""

    __slots__ = ("_min", "_max")
    __match_args__ = ("min", "max")

    def __init__(self, min: _T, max: _T) -> None:
        self._min = min
        self._max = max

    @property
    def min(self) -> _T:
        return self._min

    @property
    def max(self) -> _T:
        return self._max

    def single(self) -> Optional[_T]:
        return None

    def earliest(self) -> _T:
        return self._min

    def latest(self) -> _T:
        return self._max

    def map(self, f: Callable[[_T], _U], /) -> LocalResult[_U]:
        return Ambiguous(f(self._min), f(self._max))

    def unwrap(self) -> _T:
        raise AmbiguousLocalTime(
            f"Ambiguous local time, ranging from {self._min!r} "
            f"to {self._max!r}"
        )

    def _unique_date(self) -> Date:
        raise _error(ErrorKind.AMBIGUOUS_DATE)

    def __repr__(self) -> str:
        return f"Ambiguous({self._min!r}, {self._max!r})"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, LocalResult):
                return NotImplemented
            return isinstance(other, Ambiguous) and (
                self._min,
                self._max,
            ) == (other._min, other._max)

    def __hash__(self) -> int:
        return hash((Ambiguous, self._min, self._max))


class Date(Generic[_TZone]):
    """A date in a time zone.

    Create instances through a time zone, e.g. :meth:`TimeZone.ymd`.

    Example
    -------

    >>> d = UTC.ymd(2015, 5, 15)
    >>> str(d)
    '2015-05-15UTC'
    >>> d.and_hms(12, 0, 0)
    DateTime(2015-05-15T12:00:00Z)

    """

    __slots__ = ("_local", "_offset", "_tz")

    @classmethod
    def _from_local(
        cls, local: NaiveDate, offset: Offset, tz: type[_TZone]
    ) -> Date[_TZone]:
        self = _object_new(cls)
        self._local = local
        self._offset = offset
        self._tz = tz
        return self

    @property
    def year(self) -> int:
        return self._local.year

    @property
    def month(self) -> int:
        return self._local.month

    @property
    def day(self) -> int:
        return self._local.day

    def naive_local(self) -> NaiveDate:
        return self._local

    def naive_utc(self) -> NaiveDate:
        """The date paired with the offset. Without a time of day there is
        nothing to shift, so this is the same as the local date."""
        return self._local

    def offset(self) -> Offset:
        return self._offset

    def timezone(self) -> _TZone:
        """The time zone, reconstructed from the offset"""
        return self._tz.from_offset(self._offset)

    def with_timezone(self, tz: _TOther, /) -> Date[_TOther]:
        return tz.from_utc_date(self._local)

    def and_time(self, time: NaiveTime, /) -> DateTime[_TZone]:
        """Combine with a time of day, resolved in the same time zone

        Raises
        ------
        DateTimeError
            If the local time doesn't exist in the time zone
        """
        return self.timezone().from_local_datetime(self._local.and_time(time))

    def and_hms(
        self, hour: int, minute: int, second: int
    ) -> DateTime[_TZone]:
        return self.and_time(NaiveTime(hour, minute, second))

    def and_hms_milli(
        self, hour: int, minute: int, second: int, milli: int
    ) -> DateTime[_TZone]:
        return self.and_time(
            NaiveTime.from_hms_milli(hour, minute, second, milli)
        )

    def and_hms_micro(
        self, hour: int, minute: int, second: int, micro: int
    ) -> DateTime[_TZone]:
        return self.and_time(
            NaiveTime.from_hms_micro(hour, minute, second, micro)
        )

    def and_hms_nano(
        self, hour: int, minute: int, second: int, nano: int
    ) -> DateTime[_TZone]:
        return self.and_time(
            NaiveTime.from_hms_nano(hour, minute, second, nano)
        )

    def __str__(self) -> str:
        return f"{self._local}{self._offset}"

    def __repr__(self) -> str:
        return f"Date({self._local}{self._offset._compact()})"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, Date):
                return NotImplemented
            return self._local == other._local

    def __hash__(self) -> int:
        return hash(self._local)

    def __lt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._local < other._local

    def __le__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._local <= other._local

    def __gt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._local > other._local

    def __ge__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._local >= other._local

    def __copy__(self) -> Date[_TZone]:
        return self

    def __deepcopy__(self, _: object) -> Date[_TZone]:
        return self


_TOther = TypeVar("_TOther", bound=TimeZone)


class DateTime(Generic[_TZone]):
    """An exact moment in time, observed in a time zone.

    Create instances through a time zone, e.g. :meth:`TimeZone.timestamp`
    or :meth:`TimeZone.from_local_datetime`.

    Equality, ordering and hashing only consider the moment in time,
    not the time zone:

    >>> a = UTC.ymd(2020, 8, 15).and_hms(12, 0, 0)
    >>> b = FixedOffset.east(7_200).ymd(2020, 8, 15).and_hms(14, 0, 0)
    >>> a == b
    True

    """

    __slots__ = ("_utc", "_offset", "_tz")

    @classmethod
    def _from_utc(
        cls, utc: NaiveDateTime, offset: Offset, tz: type[_TZone]
    ) -> DateTime[_TZone]:
        self = _object_new(cls)
        self._utc = utc
        self._offset = offset
        self._tz = tz
        return self

    def naive_utc(self) -> NaiveDateTime:
        return self._utc

    def naive_local(self) -> NaiveDateTime:
        return self._utc + self._offset.fix()

    def offset(self) -> Offset:
        return self._offset

    def timezone(self) -> _TZone:
        """The time zone, reconstructed from the offset"""
        return self._tz.from_offset(self._offset)

    def date(self) -> Date[_TZone]:
        """The local date"""
        return Date._from_local(
            self.naive_local().date(), self._offset, self._tz
        )

    def time(self) -> NaiveTime:
        """The local time of day"""
        return self.naive_local().time()

    @property
    def year(self) -> int:
        return self.naive_local().date().year

    @property
    def month(self) -> int:
        return self.naive_local().date().month

    @property
    def day(self) -> int:
        return self.naive_local().date().day

    @property
    def hour(self) -> int:
        return self.time().hour

    @property
    def minute(self) -> int:
        return self.time().minute

    @property
    def second(self) -> int:
        return self.time().second

    @property
    def nanosecond(self) -> int:
        return self._utc.time().nanosecond

    def timestamp(self) -> int:
        """The number of non-leap seconds since 1970-01-01T00:00:00Z"""
        return self._utc.timestamp()

    def timestamp_millis(self) -> int:
        return self._utc.timestamp_millis()

    def timestamp_nanos(self) -> int:
        return self._utc.timestamp_nanos()

    def with_timezone(self, tz: _TOther, /) -> DateTime[_TOther]:
        """The same moment in time, in another time zone

        Example
        -------

        >>> d = UTC.ymd(2020, 8, 15).and_hms(12, 0, 0)
        >>> d.with_timezone(FixedOffset.east(7_200))
        DateTime(2020-08-15T14:00:00+02:00)

        """
        return tz.from_utc_datetime(self._utc)

    def fixed_offset(self) -> DateTime[FixedOffset]:
        """The same moment with the offset reduced to a :class:`FixedOffset`"""
        return DateTime._from_utc(self._utc, self._offset.fix(), FixedOffset)

    def __str__(self) -> str:
        return f"{self.naive_local()} {self._offset}"

    def __repr__(self) -> str:
        return (
            f"DateTime({self.naive_local().isoformat()}"
            f"{self._offset._compact()})"
        )

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, DateTime):
                return NotImplemented
            return self._utc == other._utc

    def __hash__(self) -> int:
        return hash(self._utc)

    def __lt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._utc < other._utc

    def __le__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._utc <= other._utc

    def __gt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._utc > other._utc

    def __ge__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._utc >= other._utc

    def __copy__(self) -> DateTime[_TZone]:
        return self

    def __deepcopy__(self, _: object) -> DateTime[_TZone]:
        return self

    # a custom pickle implementation with a smaller payload
    def __reduce__(self) -> tuple[object, ...]:
        return (
            _unpkl_datetime,
            (
                self._utc.timestamp(),
                self._utc.time().nanosecond,
                self._offset,
                self._tz,
            ),
        )


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_datetime(secs, nanos, offset, tz) -> DateTime:
    return DateTime._from_utc(
        NaiveDateTime.from_timestamp(secs, nanos), offset, tz
    )


class ErrorKind(enum.Enum):
    """The kinds of :class:`DateTimeError`.
    The value of each member is the message of the error."""

    INVALID_DATE = "invalid date"
    INVALID_TIME = "invalid time"
    INVALID_DATETIME = "invalid date time"
    AMBIGUOUS_DATE = "tried to operate over ambiguous date"
    SYSTEM_TIME_BEFORE_EPOCH = "system time before Unix epoch"


class DateTimeError(Exception):
    """A date, time or datetime could not be created.

    Errors are only raised by this library, not created by users.
    Two errors are equal when they are of the same :attr:`kind`.

    Example
    -------

    >>> try:
    ...     UTC.ymd(2015, 2, 29)
    ... except DateTimeError as e:
    ...     print(e, e.kind)
    invalid date ErrorKind.INVALID_DATE

    """

    _kind: ErrorKind

    def __init__(self, *args: object) -> None:
        raise TypeError("DateTimeError cannot be instantiated directly")

    @classmethod
    def _from_kind(cls, kind: ErrorKind) -> DateTimeError:
        self = Exception.__new__(cls)
        self._kind = kind
        return self

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    def __str__(self) -> str:
        return self._kind.value

    def __repr__(self) -> str:
        return f"DateTimeError({self._kind.value!r})"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, DateTimeError):
                return NotImplemented
            return self._kind is other._kind

    def __hash__(self) -> int:
        return hash((DateTimeError, self._kind))

    def __copy__(self) -> DateTimeError:
        return self

    def __deepcopy__(self, _: object) -> DateTimeError:
        return self

    def __reduce__(self) -> tuple[object, ...]:
        return (_unpkl_error, (self._kind.name,))


@no_type_check
def _unpkl_error(name) -> DateTimeError:
    return DateTimeError._from_kind(ErrorKind[name])


class AmbiguousLocalTime(Exception):
    """A local time was unexpectedly ambiguous"""


class InvalidOffsetForZone(ValueError):
    """A string has an invalid offset for the given zone"""


def _error(kind: ErrorKind) -> DateTimeError:
    return DateTimeError._from_kind(kind)


def _floor_divmod(x: int, scale: int) -> tuple[int, int]:
    # The remainder is always in [0, scale), even for negative x:
    # -7_001 ms is 8 seconds before the epoch, plus 999 ms
    return divmod(x, scale)


def _fraction(nanos: int) -> str:
    if nanos == 0:
        return ""
    elif nanos % 1_000_000 == 0:
        return f".{nanos // 1_000_000:03}"
    elif nanos % 1_000 == 0:
        return f".{nanos // 1_000:06}"
    return f".{nanos:09}"


def _fixed_from_py(d: _datetime) -> FixedOffset:
    return FixedOffset.east(d.utcoffset() // _SECOND)  # type: ignore[operator]


# Helpers that pre-compute/lookup as much as possible
_UTC = _timezone.utc
_SECOND = _timedelta(seconds=1)
_UNIX_EPOCH_ORDINAL = _date(1970, 1, 1).toordinal()
_object_new = object.__new__
_ZERO_OFFSET = FixedOffset.east(0)
UTC = Utc()
