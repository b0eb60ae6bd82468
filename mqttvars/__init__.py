"""
mqttvars: variable and builtin substitution for MQTT topic and payload templates.

Usage:
    from mqttvars import resolve, missing_variable_names

    topic = resolve("devices/{device_id}/cmd/{uuid}", {"device_id": "abc123"})
"""

from .builtin_vars import BUILTIN_NAMES, BuiltinContext, BuiltinRegistry, is_builtin
from .exceptions import ValidationError, VariableFileError
from .loader import VariableFileLoader, validate_variables
from .variables import (
    Expression,
    VariableSubstitutor,
    missing_variable_names,
    parse_expression,
    resolve,
    used_variable_names,
)

__version__ = "0.1.0"

__all__ = [
    "resolve",
    "used_variable_names",
    "missing_variable_names",
    "VariableSubstitutor",
    "Expression",
    "parse_expression",
    "BUILTIN_NAMES",
    "BuiltinContext",
    "BuiltinRegistry",
    "is_builtin",
    "VariableFileLoader",
    "validate_variables",
    "ValidationError",
    "VariableFileError",
]
