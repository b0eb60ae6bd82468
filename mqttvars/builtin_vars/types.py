"""
Builtin variable type definitions.

Defines the parsed modifier variants consumed by the builtin resolvers and
the injected clock/random capabilities they read from.
"""

import random
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Callable, List, Optional, Union


OFFSET_PATTERN = re.compile(r'([+-])(\d+)([smhdwMy])', re.ASCII)
RANGE_PATTERN = re.compile(r'(\d+)-(\d+)', re.ASCII)

FMT_KEYWORD = 'fmt'
FMT_PREFIX = 'fmt:'


class TimezoneMode(str, Enum):
    """Zone used when rendering a time builtin."""
    UTC = "utc"
    LOCAL = "local"


class TimeFormat(str, Enum):
    """Preset output formats for the time builtin."""
    ISO = "iso"
    UNIX = "unix"
    UNIXMS = "unixms"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"


@dataclass(frozen=True)
class Timezone:
    zone: TimezoneMode


@dataclass(frozen=True)
class PresetFormat:
    format: TimeFormat


@dataclass(frozen=True)
class CustomFormat:
    pattern: str


@dataclass(frozen=True)
class Offset:
    """
    Signed time offset.

    Attributes:
        amount: Signed number of units
        unit: One of s, m, h, d, w, M, y (M is months, m is minutes)
    """
    amount: int
    unit: str


@dataclass(frozen=True)
class RangeSpec:
    low: int
    high: int


@dataclass(frozen=True)
class Unrecognized:
    raw: str


Modifier = Union[Timezone, PresetFormat, CustomFormat, Offset, RangeSpec, Unrecognized]


def parse_modifier(token: str) -> Modifier:
    """
    Classify a single modifier token.

    Timezone and preset names and the fmt prefix are matched
    case-insensitively; offset units are case-sensitive.

    Args:
        token: Raw modifier text

    Returns:
        The matching modifier variant, Unrecognized if nothing matches
    """
    lowered = token.lower()

    try:
        return Timezone(TimezoneMode(lowered))
    except ValueError:
        pass

    try:
        return PresetFormat(TimeFormat(lowered))
    except ValueError:
        pass

    if lowered.startswith(FMT_PREFIX):
        return CustomFormat(token[len(FMT_PREFIX):])

    match = OFFSET_PATTERN.fullmatch(token)
    if match:
        sign, amount, unit = match.groups()
        return Offset(int(amount) * (-1 if sign == '-' else 1), unit)

    match = RANGE_PATTERN.fullmatch(token)
    if match:
        return RangeSpec(int(match.group(1)), int(match.group(2)))

    return Unrecognized(token)


def parse_modifiers(tokens: List[str]) -> List[Modifier]:
    """
    Classify a modifier sequence, preserving order.

    A bare 'fmt' token takes every remaining token, rejoined with ':', as
    its pattern, so a pre-split list like ['fmt', 'HH', 'mm'] reads the
    same as the single token 'fmt:HH:mm'.
    """
    modifiers: List[Modifier] = []
    for index, token in enumerate(tokens):
        if token.lower() == FMT_KEYWORD:
            modifiers.append(CustomFormat(':'.join(tokens[index + 1:])))
            break
        modifiers.append(parse_modifier(token))
    return modifiers


def _system_clock() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BuiltinContext:
    """
    Capabilities the builtin resolvers read from.

    Attributes:
        clock: Returns the current instant; naive values are taken as UTC
        rng: Non-cryptographic random source for uuid and random
        local_tz: Zone used for 'local' rendering (None means the host zone)
    """
    clock: Callable[[], datetime] = _system_clock
    rng: random.Random = field(default_factory=random.Random)
    local_tz: Optional[tzinfo] = None

    def now(self) -> datetime:
        """Read the clock as an aware UTC datetime."""
        instant = self.clock()
        if instant.tzinfo is None:
            return instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(timezone.utc)
