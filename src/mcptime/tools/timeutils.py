"""TimeService — date and timezone arithmetic behind the time tools.

Thin calls into :mod:`arrow`.  Format strings use arrow's tokens
(``YYYY-MM-DD HH:mm:ss``, ``h:mm A``), which are the tokens clients are
told about in the tool schemas.  Wall-clock strings without an explicit
offset are read in the service's default timezone.
"""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any

import arrow
from arrow.parser import DateTimeParser, TzinfoParser

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import tzinfo

DEFAULT_FORMAT = "YYYY-MM-DD HH:mm:ss"
_EPOCH = arrow.Arrow(1970, 1, 1)


def resolve_timezone(name: str) -> tzinfo:
    """Turn an IANA name (or ``UTC``/``local``) into a tzinfo.

    Raises:
        arrow.parser.ParserError: If *name* is not a known timezone.
    """
    return TzinfoParser.parse(name)


def locale_week(day: date) -> int:
    """Week of year with weeks starting on Sunday and week 1 holding 1 January."""
    week_start = day - timedelta(days=(day.weekday() + 1) % 7)
    if (week_start + timedelta(days=6)).year > day.year:
        return 1
    jan1 = date(day.year, 1, 1)
    first_week_start = jan1 - timedelta(days=(jan1.weekday() + 1) % 7)
    return (week_start - first_week_start).days // 7 + 1


class TimeService:
    """Clock-injectable time arithmetic.

    Usage::

        service = TimeService(default_timezone="Europe/Paris")
        service.current_time(fmt="HH:mm", timezone="Asia/Tokyo")
    """

    def __init__(
        self,
        *,
        default_timezone: str = "UTC",
        clock: Callable[[], arrow.Arrow] = arrow.utcnow,
    ) -> None:
        self._default_timezone = default_timezone
        self._clock = clock

    @property
    def default_timezone(self) -> str:
        return self._default_timezone

    def now(self) -> arrow.Arrow:
        return self._clock().to(resolve_timezone(self._default_timezone))

    def parse(self, text: str, timezone: str | None = None) -> arrow.Arrow:
        """Parse an ISO-like date/time string.

        The string's own offset wins; otherwise it is read as wall-clock
        time in *timezone* (default: the service timezone).
        """
        parsed = DateTimeParser().parse_iso(text)
        tz = parsed.tzinfo or resolve_timezone(timezone or self._default_timezone)
        return arrow.Arrow.fromdatetime(parsed, tzinfo=tz)

    def _at(self, text: str | None) -> arrow.Arrow:
        return self.parse(text) if text else self.now()

    def current_time(self, fmt: str = DEFAULT_FORMAT, timezone: str | None = None) -> dict[str, Any]:
        utc_time = self._clock().to("UTC")
        local_zone = timezone or self._default_timezone
        local_time = utc_time.to(resolve_timezone(local_zone))
        return {
            "utcTime": utc_time.format(fmt),
            "localTime": local_time.format(fmt),
            "timezone": local_zone,
        }

    def convert_time(self, time: str, source_timezone: str, target_timezone: str) -> dict[str, Any]:
        source = self.parse(time, source_timezone)
        target = source.to(resolve_timezone(target_timezone))
        offset_delta = target.utcoffset() - source.utcoffset()  # type: ignore[operator]
        minutes = offset_delta.total_seconds() / 60
        return {
            "convertedTime": target.format(DEFAULT_FORMAT),
            # Half hours round up, e.g. +5:30 -> 6.
            "hourDifference": math.floor(minutes / 60 + 0.5),
        }

    def relative_time(self, time: str) -> dict[str, Any]:
        moment = self.parse(time)
        return {"relativeTime": moment.humanize(other=self._clock())}

    def days_in_month(self, date_text: str | None = None) -> dict[str, Any]:
        moment = self._at(date_text)
        return {"days": moment.ceil("month").day}

    def timestamp(self, time: str | None = None) -> dict[str, Any]:
        moment = self.parse(time) if time else self._clock()
        # Floor division keeps pre-epoch fractions negative.
        return {"timestamp": (moment - _EPOCH) // timedelta(milliseconds=1)}

    def week_of_year(self, date_text: str | None = None) -> dict[str, Any]:
        day = self._at(date_text).date()
        return {
            "week": locale_week(day),
            "isoWeek": day.isocalendar()[1],
        }
