"""
Time builtin ({now}, {timestamp}).

Renders the current instant, optionally shifted by one offset, in UTC or the
local zone using a preset or a custom token pattern.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .types import (
    BuiltinContext,
    CustomFormat,
    Modifier,
    Offset,
    PresetFormat,
    TimeFormat,
    Timezone,
    TimezoneMode,
)


logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DURATION_UNITS = {
    's': 'seconds',
    'm': 'minutes',
    'h': 'hours',
}


class TimeSettings:
    """Net effect of a time builtin's modifier list (last one of each kind wins)."""

    def __init__(self, modifiers: List[Modifier]):
        self.timezone = TimezoneMode.LOCAL
        self.format = TimeFormat.ISO
        self.custom_format: Optional[str] = None
        self.offset: Optional[Offset] = None

        for modifier in modifiers:
            if isinstance(modifier, Timezone):
                self.timezone = modifier.zone
            elif isinstance(modifier, PresetFormat):
                self.format = modifier.format
            elif isinstance(modifier, CustomFormat):
                # An empty pattern falls back to the preset
                self.custom_format = modifier.pattern or self.custom_format
            elif isinstance(modifier, Offset):
                self.offset = modifier

    @property
    def use_utc(self) -> bool:
        return self.timezone == TimezoneMode.UTC


def resolve_now(modifiers: List[Modifier], context: BuiltinContext) -> str:
    """
    Resolve the time builtin.

    Args:
        modifiers: Parsed modifiers in expression order
        context: Clock and local zone to read from

    Returns:
        Rendered time string
    """
    settings = TimeSettings(modifiers)
    instant = context.now()

    if settings.offset is not None:
        try:
            instant = apply_offset(instant, settings.offset, _zone(settings, context))
        except (OverflowError, ValueError) as e:
            logger.debug(f"Ignoring offset {settings.offset}: {e}")

    if settings.custom_format:
        return format_custom(_view(instant, settings, context), settings.custom_format)

    return format_preset(instant, settings.format, _view(instant, settings, context), settings.use_utc)


def _zone(settings: TimeSettings, context: BuiltinContext):
    return timezone.utc if settings.use_utc else context.local_tz


def _view(instant: datetime, settings: TimeSettings, context: BuiltinContext) -> datetime:
    """Instant as wall-clock time in the rendering zone."""
    # astimezone(None) converts to the host's local zone
    return instant.astimezone(_zone(settings, context))


def apply_offset(instant: datetime, offset: Offset, zone) -> datetime:
    """
    Shift an instant by an offset.

    Seconds, minutes and hours are exact durations. Days and weeks move the
    wall-clock date in the given zone. Months and years use calendar
    arithmetic in that zone, carrying an out-of-range day into the next
    month (Jan 31 + 1 month is Mar 2 or Mar 3).

    Args:
        instant: Aware datetime to shift
        offset: Offset to apply
        zone: Zone whose calendar is used (None means the host zone)

    Returns:
        Shifted aware datetime in UTC
    """
    if offset.unit in DURATION_UNITS:
        return instant + timedelta(**{DURATION_UNITS[offset.unit]: offset.amount})

    local = instant.astimezone(zone)
    wall = local.replace(tzinfo=None)

    if offset.unit == 'd':
        wall = wall + timedelta(days=offset.amount)
    elif offset.unit == 'w':
        wall = wall + timedelta(weeks=offset.amount)
    elif offset.unit == 'M':
        months = wall.year * 12 + (wall.month - 1) + offset.amount
        year, month = divmod(months, 12)
        wall = _carry_day(wall, year, month + 1)
    elif offset.unit == 'y':
        wall = _carry_day(wall, wall.year + offset.amount, wall.month)

    if zone is None:
        # Host zone: re-derive the UTC offset for the new wall-clock time
        return wall.astimezone().astimezone(timezone.utc)
    return wall.replace(tzinfo=zone).astimezone(timezone.utc)


def _carry_day(wall: datetime, year: int, month: int) -> datetime:
    first = wall.replace(year=year, month=month, day=1)
    return first + timedelta(days=wall.day - 1)


def epoch_milliseconds(instant: datetime) -> int:
    return (instant - EPOCH) // timedelta(milliseconds=1)


def date_text(view: datetime) -> str:
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return f"{view.year:04d}-{view.month:02d}-{view.day:02d}"


def time_text(view: datetime) -> str:
    return f"{view.hour:02d}:{view.minute:02d}:{view.second:02d}"


def iso_utc(instant: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z."""
    utc = instant.astimezone(timezone.utc)
    return f"{date_text(utc)}T{time_text(utc)}.{utc.microsecond // 1000:03d}Z"


def format_preset(instant: datetime, fmt: TimeFormat, view: datetime, use_utc: bool) -> str:
    """
    Render an instant using a preset format.

    Args:
        instant: Aware instant
        fmt: Preset to render with
        view: The instant as wall-clock time in the rendering zone
        use_utc: Whether the rendering zone is UTC

    Returns:
        Rendered string
    """
    if fmt == TimeFormat.UNIX:
        return str(epoch_milliseconds(instant) // 1000)
    if fmt == TimeFormat.UNIXMS:
        return str(epoch_milliseconds(instant))
    if fmt == TimeFormat.DATE:
        return date_text(view)
    if fmt == TimeFormat.TIME:
        return time_text(view)
    if fmt == TimeFormat.DATETIME:
        return f"{date_text(view)} {time_text(view)}"

    # Local ISO is the UTC string without its Z, not a converted time
    iso = iso_utc(instant)
    return iso if use_utc else iso.replace('Z', '')


def format_custom(view: datetime, pattern: str) -> str:
    """
    Render a custom token pattern.

    Tokens are replaced in a fixed order, each at most once (first
    occurrence): YYYY, YY, MM, M, DD, D, HH, H, mm, ss, SSS.

    Args:
        view: Wall-clock time in the rendering zone
        pattern: Pattern text

    Returns:
        Rendered string
    """
    replacements = [
        ('YYYY', str(view.year)),
        ('YY', f"{view.year % 100:02d}"),
        ('MM', f"{view.month:02d}"),
        ('M', str(view.month)),
        ('DD', f"{view.day:02d}"),
        ('D', str(view.day)),
        ('HH', f"{view.hour:02d}"),
        ('H', str(view.hour)),
        ('mm', f"{view.minute:02d}"),
        ('ss', f"{view.second:02d}"),
        ('SSS', f"{view.microsecond // 1000:03d}"),
    ]

    result = pattern
    for token, value in replacements:
        result = result.replace(token, value, 1)
    return result
