"""
Variable substitution module.
Implements expression parsing and template resolution.
"""

from .expression import Expression, parse_expression
from .substitution import (
    VariableSubstitutor,
    missing_variable_names,
    resolve,
    used_variable_names,
)

__all__ = [
    'Expression',
    'parse_expression',
    'VariableSubstitutor',
    'resolve',
    'used_variable_names',
    'missing_variable_names',
]
