"""
Builtin variables for mqttvars.

Provides the registry and resolvers for the reserved, dynamically computed
variables: now/timestamp, uuid, random/rand.
"""

from .types import (
    BuiltinContext,
    CustomFormat,
    Modifier,
    Offset,
    PresetFormat,
    RangeSpec,
    TimeFormat,
    Timezone,
    TimezoneMode,
    Unrecognized,
    parse_modifier,
    parse_modifiers,
)
from .registry import BUILTIN_NAMES, BuiltinRegistry, is_builtin


__all__ = [
    "BuiltinContext",
    "CustomFormat",
    "Modifier",
    "Offset",
    "PresetFormat",
    "RangeSpec",
    "TimeFormat",
    "Timezone",
    "TimezoneMode",
    "Unrecognized",
    "parse_modifier",
    "parse_modifiers",
    "BUILTIN_NAMES",
    "BuiltinRegistry",
    "is_builtin",
]
