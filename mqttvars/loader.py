"""Variable map loading and validation for YAML/JSON variable files."""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from mqttvars.builtin_vars import is_builtin
from mqttvars.exceptions import ValidationError, VariableFileError


logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def validate_variables(variables: Mapping[Any, Any]) -> List[ValidationError]:
    """
    Validate a variable map.

    Args:
        variables: Mapping of variable names to values

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    for name, value in variables.items():
        if not isinstance(name, str) or not NAME_PATTERN.match(name):
            errors.append(ValidationError(
                message=f"Invalid variable name {name!r}: must match [A-Za-z_][A-Za-z0-9_]*",
                path=str(name)
            ))
            continue

        if value is None or not isinstance(value, (str, bool, int, float)):
            errors.append(ValidationError(
                message=f"Variable '{name}' must be a string or scalar, got {type(value).__name__}",
                path=name
            ))

    return errors


class VariableFileLoader:
    """Loads a variable map from a YAML (or JSON) file and validates it."""

    def __init__(self):
        """Initialize loader."""
        self.errors: List[ValidationError] = []

    def load(self, path: Path) -> Dict[str, str]:
        """
        Load and validate a variable file.

        Args:
            path: File containing a top-level mapping of name -> value

        Returns:
            Variable map with every value as its literal file text

        Raises:
            VariableFileError: If the file is unreadable or invalid
        """
        self.errors = []
        path = Path(path)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                # BaseLoader keeps every scalar as its literal text (0123, 12:34:56, on)
                document = yaml.load(f, Loader=yaml.BaseLoader)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load variable file: {e}", str(path))
            self._raise_validation_errors()

        if document is None:
            logger.debug(f"Variable file is empty: {path}")
            return {}

        if not isinstance(document, dict):
            self._add_error(
                f"Variable file must contain a mapping, got {type(document).__name__}",
                str(path)
            )
            self._raise_validation_errors()

        self.errors.extend(validate_variables(document))
        self._raise_validation_errors()

        variables: Dict[str, str] = dict(document)

        for name in variables:
            if is_builtin(name):
                logger.warning(f"Variable '{name}' is shadowed by the builtin of the same name")

        logger.debug(f"Loaded {len(variables)} variable(s) from {path}")
        return variables

    def _add_error(self, message: str, path: str = "") -> None:
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self) -> None:
        if self.errors:
            raise VariableFileError(self.errors)
