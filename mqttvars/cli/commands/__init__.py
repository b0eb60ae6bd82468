"""CLI command handlers."""

from .resolve import resolve_template
from .check import check_templates, list_builtins

__all__ = ['resolve_template', 'check_templates', 'list_builtins']
