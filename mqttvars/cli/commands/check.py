"""Check and builtins command implementations."""

import logging
from argparse import Namespace

from mqttvars.builtin_vars import BUILTIN_NAMES
from mqttvars.exceptions import VariableFileError
from mqttvars.variables import VariableSubstitutor

from .resolve import parse_variables, setup_logging


logger = logging.getLogger(__name__)


def check_templates(args: Namespace) -> int:
    """
    Print variables referenced by the templates but not defined.

    Returns:
        0 if every variable is defined, 1 if any are missing, 2 on invalid
        options or variable files
    """
    setup_logging(args)

    try:
        variables = parse_variables(args)
    except VariableFileError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code
    except ValueError as e:
        logger.error(str(e))
        return 2

    substitutor = VariableSubstitutor()
    missing = []
    for template in args.templates:
        for name in substitutor.missing_variable_names(template, variables):
            if name not in missing:
                missing.append(name)

    for name in missing:
        print(name)

    return 1 if missing else 0


def list_builtins(args: Namespace) -> int:
    """Print the builtin variable names."""
    for name in BUILTIN_NAMES:
        print(name)
    return 0
