"""Tests for built-in registries."""

import pytest
from symscan_mcp.parser import JAVASCRIPT_BUILTIN_OBJECTS, PYTHON_BUILTINS
from symscan_mcp.parser.builtins import is_python_builtin, lookup_javascript_builtin


def test_python_builtins():
    """Test the Python built-in registry."""
    assert is_python_builtin("print")
    assert is_python_builtin("len")
    assert not is_python_builtin("math")
    assert "None" in PYTHON_BUILTINS


def test_javascript_builtins():
    """Test object-qualified built-in lookup."""
    entry = lookup_javascript_builtin("console", "log")
    assert entry.type_tag == "Console"

    assert lookup_javascript_builtin("Math", "floor").type_tag == "Math"
    assert lookup_javascript_builtin("console", "shout") is None
    assert lookup_javascript_builtin("foo", "log") is None


def test_javascript_registry_is_read_only():
    """Test the registry mapping cannot be modified."""
    assert "JSON" in JAVASCRIPT_BUILTIN_OBJECTS
    with pytest.raises(TypeError):
        JAVASCRIPT_BUILTIN_OBJECTS["fake"] = None
