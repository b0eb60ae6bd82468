"""
Expression parsing.

Splits the inside of one {...} occurrence into a variable name and its
modifier tokens.
"""

from dataclasses import dataclass, field
from typing import List

from ..builtin_vars.types import FMT_KEYWORD


@dataclass
class Expression:
    """
    A parsed {...} expression.

    Attributes:
        name: Variable or builtin name
        modifiers: Modifier tokens in expression order
    """
    name: str
    modifiers: List[str] = field(default_factory=list)


def parse_expression(expression: str) -> Expression:
    """
    Parse an expression such as 'now:utc:-1h:unix'.

    Segments are split on ':'. Once a segment reads 'fmt', the rest of the
    expression is kept whole as the single modifier 'fmt:<pattern>', so
    patterns like HH:mm:ss survive. Never raises.

    Args:
        expression: Text between the braces

    Returns:
        Parsed expression
    """
    segments = expression.split(':')
    name = segments[0]
    modifiers: List[str] = []

    for index, segment in enumerate(segments[1:], start=1):
        if segment.lower() == FMT_KEYWORD:
            modifiers.append(':'.join(segments[index:]))
            break
        modifiers.append(segment)

    return Expression(name=name, modifiers=modifiers)
