"""
Builtin variable registry.

Maps the reserved names (now, timestamp, uuid, random, rand) to their
resolvers and dispatches expressions to them.
"""

import logging
from typing import Callable, Dict, List, Optional

from .identifiers import resolve_uuid
from .numbers import resolve_random
from .timestamps import resolve_now
from .types import BuiltinContext, Modifier, parse_modifiers


logger = logging.getLogger(__name__)

BuiltinHandler = Callable[[List[Modifier], BuiltinContext], str]

BUILTIN_HANDLERS: Dict[str, BuiltinHandler] = {
    "now": resolve_now,
    "timestamp": resolve_now,
    "uuid": resolve_uuid,
    "random": resolve_random,
    "rand": resolve_random,
}

BUILTIN_NAMES = list(BUILTIN_HANDLERS)


def is_builtin(name: str) -> bool:
    """
    Check whether a name is reserved for a builtin.

    Matching is case-insensitive, the same as resolution, so '{NOW}' is
    never treated as a user variable.
    """
    return name.lower() in BUILTIN_HANDLERS


class BuiltinRegistry:
    """
    Registry for builtin variables.

    Holds the clock and random source the resolvers read from, so tests can
    inject fixed values.
    """

    def __init__(self, context: Optional[BuiltinContext] = None):
        """
        Initialize the registry.

        Args:
            context: Clock, random source and local zone (defaults to the
                wall clock, a fresh random.Random and the host zone)
        """
        self.context = context or BuiltinContext()
        self._handlers = dict(BUILTIN_HANDLERS)

    def is_builtin(self, name: str) -> bool:
        return name.lower() in self._handlers

    def builtin_names(self) -> List[str]:
        """
        List builtin names.

        Returns:
            Names in registration order, aliases included
        """
        return list(self._handlers)

    def resolve(self, name: str, modifiers: Optional[List[str]] = None) -> Optional[str]:
        """
        Resolve a builtin.

        Args:
            name: Variable name (any case)
            modifiers: Raw modifier tokens in expression order

        Returns:
            Resolved value, or None if the name is not a builtin or its
            resolver failed
        """
        handler = self._handlers.get(name.lower())
        if handler is None:
            return None

        try:
            return handler(parse_modifiers(modifiers or []), self.context)
        except Exception as e:
            # Leave the expression unresolved rather than abort the caller
            logger.warning(f"Builtin '{name}' failed with modifiers {modifiers}: {e}")
            return None
