"""Main CLI entry point for mqttvars."""

import argparse
import sys
from typing import Optional

from .commands import check_templates, list_builtins, resolve_template


def _add_variable_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--var',
        action='append',
        metavar='KEY=VALUE',
        help='Variable value (can be specified multiple times)'
    )
    parser.add_argument(
        '--vars-file',
        type=str,
        help='Path to YAML or JSON file containing variables'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warning', 'error'],
        default='warning',
        help='Set log level'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the mqttvars CLI."""
    parser = argparse.ArgumentParser(
        prog='mqttvars',
        description='Resolve variables in MQTT topic and payload templates'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Resolve command
    resolve_parser = subparsers.add_parser('resolve', help='Resolve a template')
    resolve_parser.add_argument(
        'template',
        type=str,
        help='Template containing {variable} expressions'
    )
    _add_variable_options(resolve_parser)
    resolve_parser.add_argument(
        '--now',
        type=str,
        metavar='ISO',
        help='Fixed current time for time builtins (e.g. 2024-06-15T10:30:45Z)'
    )
    resolve_parser.add_argument(
        '--seed',
        type=int,
        help='Seed for uuid and random builtins'
    )
    resolve_parser.add_argument(
        '--timezone',
        type=str,
        help='Zone for local time rendering (default: $MQTTVARS_TIMEZONE or host zone)'
    )

    # Check command
    check_parser = subparsers.add_parser('check', help='List undefined variables')
    check_parser.add_argument(
        'templates',
        nargs='+',
        help='Templates to check'
    )
    _add_variable_options(check_parser)

    subparsers.add_parser('builtins', help='List builtin variable names')

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'resolve':
        return resolve_template(parsed_args)
    elif parsed_args.command == 'check':
        return check_templates(parsed_args)
    elif parsed_args.command == 'builtins':
        return list_builtins(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
