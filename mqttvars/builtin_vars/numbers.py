"""Random number builtin ({random}, {rand})."""

import math
from typing import List

from .types import BuiltinContext, Modifier, RangeSpec


DEFAULT_RANGE = RangeSpec(0, 100)


def resolve_random(modifiers: List[Modifier], context: BuiltinContext) -> str:
    """
    Draw an integer from an inclusive range.

    The first range modifier (e.g. '1-10') overrides the default 0-100; later
    ones are ignored. A reversed range is not rejected.

    Args:
        modifiers: Parsed modifiers in expression order
        context: Random source to draw from

    Returns:
        The drawn integer as a decimal string
    """
    bounds = next((m for m in modifiers if isinstance(m, RangeSpec)), DEFAULT_RANGE)
    span = bounds.high - bounds.low + 1
    return str(math.floor(context.rng.random() * span + bounds.low))
