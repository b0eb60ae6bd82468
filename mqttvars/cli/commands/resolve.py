"""Resolve command implementation and shared option handling."""

import logging
import os
import random
from argparse import Namespace
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from mqttvars.builtin_vars import BuiltinContext, BuiltinRegistry
from mqttvars.exceptions import VariableFileError
from mqttvars.loader import VariableFileLoader, validate_variables
from mqttvars.variables import VariableSubstitutor


logger = logging.getLogger(__name__)

TIMEZONE_ENV = 'MQTTVARS_TIMEZONE'


def setup_logging(args: Namespace) -> None:
    """Configure logging from --log-level, --debug and --quiet."""
    log_level = getattr(logging, args.log_level.upper())
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def parse_variables(args: Namespace) -> Dict[str, str]:
    """
    Build the variable map from --vars-file and --var arguments.

    --var pairs override values from the file.

    Raises:
        ValueError: If a --var pair is malformed or invalid
        VariableFileError: If the variable file is unreadable or invalid
    """
    variables: Dict[str, str] = {}

    if args.vars_file:
        variables.update(VariableFileLoader().load(Path(args.vars_file)))

    cli_vars: Dict[str, str] = {}
    for item in args.var or []:
        if '=' not in item:
            raise ValueError(f"Invalid variable format: {item}. Expected KEY=VALUE")
        key, value = item.split('=', 1)
        cli_vars[key] = value

    errors = validate_variables(cli_vars)
    if errors:
        raise ValueError("; ".join(error.message for error in errors))

    variables.update(cli_vars)
    return variables


def parse_timezone(name: Optional[str]):
    """
    Look up the zone used for 'local' rendering.

    Returns:
        tzinfo, or None for the host zone

    Raises:
        ValueError: If the zone name is unknown
    """
    if not name:
        return None
    if name.upper() == 'UTC':
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 --now value; naive values are taken as UTC."""
    try:
        instant = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError as e:
        raise ValueError(f"Invalid --now value: {value}") from e
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant


def build_substitutor(args: Namespace) -> VariableSubstitutor:
    """
    Create a substitutor from --now, --seed and --timezone.

    Raises:
        ValueError: If any of the options is invalid
    """
    context = BuiltinContext(
        rng=random.Random(args.seed),
        local_tz=parse_timezone(args.timezone or os.environ.get(TIMEZONE_ENV))
    )
    if args.now:
        fixed = parse_instant(args.now)
        context.clock = lambda: fixed

    return VariableSubstitutor(BuiltinRegistry(context))


def resolve_template(args: Namespace) -> int:
    """
    Print a resolved template.

    Returns:
        0 on success, 2 on invalid options or variable files
    """
    setup_logging(args)

    try:
        variables = parse_variables(args)
        substitutor = build_substitutor(args)
    except VariableFileError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code
    except ValueError as e:
        logger.error(str(e))
        return 2

    missing = substitutor.missing_variable_names(args.template, variables)
    if missing:
        logger.warning(f"Undefined variables left unresolved: {sorted(set(missing))}")

    print(substitutor.resolve(args.template, variables))
    return 0
