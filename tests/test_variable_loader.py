"""Tests for loading and validating variable files."""

import json
import tempfile
from pathlib import Path

import pytest

from mqttvars.exceptions import VariableFileError
from mqttvars.loader import VariableFileLoader, validate_variables


def write_file(directory: str, name: str, content: str) -> Path:
    path = Path(directory) / name
    path.write_text(content)
    return path


class TestVariableFileLoader:
    """Test VariableFileLoader.load."""

    def test_yaml_scalars_become_strings(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_file(tmpdir, "vars.yaml", """
device_id: abc123
qos: 1
ratio: 0.5
enabled: true
""")
            variables = VariableFileLoader().load(path)

        assert variables == {
            "device_id": "abc123",
            "qos": "1",
            "ratio": "0.5",
            "enabled": "true",
        }

    def test_json_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_file(tmpdir, "vars.json", json.dumps({"site": "lab", "floor": 3}))
            variables = VariableFileLoader().load(path)

        assert variables == {"site": "lab", "floor": "3"}

    def test_empty_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_file(tmpdir, "vars.yaml", "")
            assert VariableFileLoader().load(path) == {}

    def test_values_may_reference_other_variables(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_file(tmpdir, "vars.yaml", 'command: "cmd/{mac}/action"\nmac: "0a1b"\n')
            variables = VariableFileLoader().load(path)

        assert variables["command"] == "cmd/{mac}/action"

    def test_non_mapping_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_file(tmpdir, "vars.yaml", "- a\n- b\n")
            with pytest.raises(VariableFileError) as exc_info:
                VariableFileLoader().load(path)

        assert exc_info.value.exit_code == 2
        assert "must contain a mapping" in str(exc_info.value)

    def test_all_errors_reported_together(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_file(tmpdir, "vars.yaml", """
good: ok
"bad-name": x
nested:
  key: value
""")
            with pytest.raises(VariableFileError) as exc_info:
                VariableFileLoader().load(path)

        paths = [error.path for error in exc_info.value.errors]
        assert paths == ["bad-name", "nested"]

    def test_scalars_keep_literal_text(self):
        """Sexagesimal, octal, hex and float-looking values are not converted."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_file(tmpdir, "vars.yaml", """
mac_suffix: 12:34:56
room: 0123
version: 1.10
serial: 0x1F
on: lamp
empty:
""")
            variables = VariableFileLoader().load(path)

        assert variables == {
            "mac_suffix": "12:34:56",
            "room": "0123",
            "version": "1.10",
            "serial": "0x1F",
            "on": "lamp",
            "empty": "",
        }

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(VariableFileError) as exc_info:
                VariableFileLoader().load(Path(tmpdir) / "absent.yaml")

        assert "Failed to load variable file" in str(exc_info.value)

    def test_invalid_yaml(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_file(tmpdir, "vars.yaml", "key: [unclosed\n")
            with pytest.raises(VariableFileError):
                VariableFileLoader().load(path)

    def test_builtin_name_warns(self, caplog):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_file(tmpdir, "vars.yaml", "uuid: fixed\n")
            with caplog.at_level('WARNING'):
                variables = VariableFileLoader().load(path)

        assert variables == {"uuid": "fixed"}
        assert "shadowed by the builtin" in caplog.text


class TestValidateVariables:
    """Test validate_variables on in-memory maps."""

    def test_valid_map(self):
        assert validate_variables({"a": "1", "_b2": "x", "c": 3}) == []

    @pytest.mark.parametrize('name', ["1abc", "a b", "", "a:b", 5])
    def test_invalid_names(self, name):
        errors = validate_variables({name: "x"})
        assert len(errors) == 1
        assert "Invalid variable name" in errors[0].message

    def test_invalid_values(self):
        errors = validate_variables({"a": None, "b": ["x"], "c": {"d": 1}})
        assert [error.path for error in errors] == ["a", "b", "c"]
