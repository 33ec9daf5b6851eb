# meeting_scheduler/services/time_normalizer.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from meeting_scheduler.schemas.interval import TimeInterval


class InvalidTimezoneError(ValueError):
    """
    Raised when a timezone identifier cannot be resolved against the IANA
    timezone database.
    """

    def __init__(self, timezone_id: str) -> None:
        super().__init__(f"Invalid timezone ID provided: {timezone_id}")
        self.timezone_id = timezone_id


def resolve_timezone(timezone_id: str) -> ZoneInfo:
    """
    Resolve an IANA identifier (e.g. "America/Sao_Paulo") to a ZoneInfo.

    Malformed keys (absolute paths, "..", empty segments) are reported the
    same way as unknown ones.
    """
    try:
        return ZoneInfo(timezone_id)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidTimezoneError(timezone_id) from exc


class TimeNormalizer:
    """
    Converts a local wall-clock start + timezone + duration into an absolute
    UTC interval.

    Rules
    -----
    - An empty timezone id means the wall-clock value is already UTC.
    - Otherwise the zone's offset rules (DST included) on that date apply.
    - Ambiguous wall-clock times (DST fall-back) resolve to the first
      occurrence; times inside a DST gap use the offset in force before
      the transition.
    """

    @staticmethod
    def normalize(
        start_local: datetime,
        timezone_id: str | None,
        duration: timedelta,
    ) -> TimeInterval:
        """
        Build the UTC interval for the given local start and duration.

        Raises
        ------
        InvalidTimezoneError
            If `timezone_id` is not a known zone.
        ValueError
            If `start_local` already carries a tzinfo, or the duration is not
            positive (rejected by the TimeInterval invariant).
        """
        if start_local.tzinfo is not None:
            raise ValueError("start_local must be a naive wall-clock datetime")

        if not timezone_id:
            start_utc = start_local.replace(tzinfo=timezone.utc)
        else:
            zone = resolve_timezone(timezone_id)
            start_utc = start_local.replace(tzinfo=zone, fold=0).astimezone(timezone.utc)

        return TimeInterval.starting_at(start_utc, duration)
