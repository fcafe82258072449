import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

_OFFSET_RE = re.compile(r"^(?:UTC)?([+-])(\d{1,2}):?(\d{2})$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def resolve_timezone(name: str) -> tzinfo:
    """Accepts "UTC", an IANA zone name or a fixed offset such as "+05:30"."""
    value = (name or "UTC").strip()
    if value.upper() in ("UTC", "Z"):
        return timezone.utc
    match = _OFFSET_RE.match(value)
    if match:
        sign, hours, minutes = match.groups()
        delta = timedelta(hours=int(hours), minutes=int(minutes))
        return timezone(-delta if sign == "-" else delta)
    return ZoneInfo(value)


def same_time_next_day(instant: datetime, tz: tzinfo) -> datetime:
    """Same wall-clock time on the following calendar day in ``tz``.

    One calendar day is added to the local date, so in zones with daylight
    saving the result may be 23 or 25 hours after ``instant``.
    """
    local = instant.astimezone(tz)
    next_local = local.replace(tzinfo=None) + timedelta(days=1)
    return next_local.replace(tzinfo=tz).astimezone(timezone.utc)


def to_epoch_ms(instant: datetime) -> int:
    return int(round(instant.timestamp() * 1000))


def from_epoch_ms(value) -> datetime:
    return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)


@dataclass
class RemainingTime:
    hours: int
    minutes: int
    seconds: int
    total_seconds: int
    display: str


def format_remaining(remaining_ms: int) -> RemainingTime:
    total_seconds = max(0, int(remaining_ms)) // 1000
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60

    if hours > 0:
        display = f"{hours}h {minutes}m {seconds}s"
    elif minutes > 0:
        display = f"{minutes}m {seconds}s"
    else:
        display = f"{seconds}s"

    return RemainingTime(hours, minutes, seconds, total_seconds, display)


def format_local_time(instant: datetime, tz: tzinfo) -> str:
    # 12-hour clock, e.g. 19/10/2026, 01:05:00 PM
    return instant.astimezone(tz).strftime("%d/%m/%Y, %I:%M:%S %p")
