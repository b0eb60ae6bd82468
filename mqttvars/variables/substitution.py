"""
Variable substitution implementation.
Resolves {name} and {name:modifier:...} expressions in MQTT topic, payload and
filter templates against a user variable map and the builtin variables.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Union

from ..builtin_vars.registry import BuiltinRegistry
from .expression import parse_expression


logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 10


class VariableSubstitutor:
    """
    Handles variable substitution in strings and data structures.

    Resolution rules:
    - Builtins ({now}, {uuid}, {random}, ...) always win over a user
      variable of the same name
    - Modifiers are builtin-only: {name:mod} on a user variable is left as is
    - Unknown expressions are left verbatim, braces included
    - Substitution repeats until the text stops changing, at most
      max_passes times, so variables may reference other variables
    """

    # Name, then optionally a non-empty modifier tail up to the closing brace
    VAR_PATTERN = re.compile(r'\{([A-Za-z_][A-Za-z0-9_]*)(:[^{}]+)?\}')

    def __init__(
        self,
        registry: Optional[BuiltinRegistry] = None,
        max_passes: int = DEFAULT_MAX_PASSES
    ):
        """
        Initialize the substitutor.

        Args:
            registry: Builtin registry (defaults to one using the wall clock)
            max_passes: Upper bound on re-scan passes
        """
        self.registry = registry or BuiltinRegistry()
        self.max_passes = max_passes

    def resolve(self, template: str, variables: Mapping[str, str]) -> str:
        """
        Resolve every expression in a template.

        Args:
            template: Topic, payload or filter template
            variables: User variable map (not modified)

        Returns:
            Resolved string; never raises
        """
        if not isinstance(template, str):
            return template
        variables = variables or {}

        result = template
        for passes in range(1, self.max_passes + 1):
            updated = self._substitute_pass(result, variables)
            if updated == result:
                logger.debug(f"Template settled after {passes} pass(es)")
                return updated
            result = updated

        logger.debug(f"Template still changing after {self.max_passes} passes, stopping")
        return result

    def _substitute_pass(self, text: str, variables: Mapping[str, str]) -> str:
        """
        Run one left-to-right substitution pass.

        Args:
            text: Current template text
            variables: User variable map

        Returns:
            Text with each expression replaced once
        """
        def replace_var(match):
            expression = parse_expression(match.group(0)[1:-1])

            if self.registry.is_builtin(expression.name):
                value = self.registry.resolve(expression.name, expression.modifiers)
                return match.group(0) if value is None else value

            if expression.modifiers or expression.name not in variables:
                return match.group(0)

            value = variables[expression.name]
            return value if isinstance(value, str) else str(value)

        return self.VAR_PATTERN.sub(replace_var, text)

    def substitute(
        self,
        value: Union[str, List, Dict, Any],
        variables: Mapping[str, str]
    ) -> Union[str, List, Dict, Any]:
        """
        Substitute variables in a value (string, list, or dict).

        Args:
            value: The value to substitute variables in
            variables: User variable map

        Returns:
            Value with every string resolved; dict keys are left as is
        """
        if isinstance(value, str):
            return self.resolve(value, variables)
        elif isinstance(value, list):
            return [self.substitute(item, variables) for item in value]
        elif isinstance(value, dict):
            return {k: self.substitute(v, variables) for k, v in value.items()}
        else:
            # Non-string/list/dict values pass through unchanged
            return value

    def used_variable_names(self, template: str) -> List[str]:
        """
        List user variables referenced by a template.

        Only modifier-free expressions count, since a user variable with
        modifiers never resolves. Builtins are excluded.

        Args:
            template: Template to scan

        Returns:
            Names in order of appearance, duplicates kept
        """
        names = []
        if not isinstance(template, str):
            return names
        for match in self.VAR_PATTERN.finditer(template):
            name, modifiers = match.groups()
            if modifiers is None and not self.registry.is_builtin(name):
                names.append(name)
        return names

    def missing_variable_names(self, template: str, variables: Mapping[str, str]) -> List[str]:
        """
        List referenced user variables that the map does not define.

        Args:
            template: Template to scan
            variables: User variable map

        Returns:
            Missing names in order of appearance, duplicates kept
        """
        return [name for name in self.used_variable_names(template) if name not in (variables or {})]


_default_substitutor: Optional[VariableSubstitutor] = None


def _get_default() -> VariableSubstitutor:
    global _default_substitutor
    if _default_substitutor is None:
        _default_substitutor = VariableSubstitutor()
    return _default_substitutor


def resolve(template: str, variables: Mapping[str, str]) -> str:
    """Resolve a template using the wall clock and a shared random source."""
    return _get_default().resolve(template, variables)


def used_variable_names(template: str) -> List[str]:
    return _get_default().used_variable_names(template)


def missing_variable_names(template: str, variables: Mapping[str, str]) -> List[str]:
    return _get_default().missing_variable_names(template, variables)
