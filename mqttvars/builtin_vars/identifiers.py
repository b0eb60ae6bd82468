"""UUID builtin ({uuid})."""

import uuid
from typing import List

from .types import BuiltinContext, Modifier


def resolve_uuid(modifiers: List[Modifier], context: BuiltinContext) -> str:
    """
    Generate a version 4 UUID from the context's random source.

    Not suitable where unpredictability matters: the bits come from a
    seedable, non-cryptographic generator. Modifiers are ignored.
    """
    return str(uuid.UUID(int=context.rng.getrandbits(128), version=4))
