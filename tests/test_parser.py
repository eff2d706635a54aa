"""Tests for the scan orchestrator."""

import pytest
from symscan_mcp.parser import (
    Symbol,
    ScanContext,
    SUPPORTED_LANGUAGES,
    UnsupportedLanguage,
    is_comment,
    remove_duplicates,
    scan,
)


JAVASCRIPT_SOURCE = '''const PI = 3.14;
function area(r) {
  let a = PI * r * r;
  return a;
}
'''


def _find(symbols, name, type=None):
    return next(s for s in symbols if s.name == name and (type is None or s.type == type))


def test_javascript_function_and_constant():
    """Test the function + constant scenario."""
    symbols = scan(JAVASCRIPT_SOURCE, "javascript")

    triples = [(s.name, s.type, s.scope, s.line) for s in symbols]
    assert triples == [
        ("PI", "constant", "global", 1),
        ("area", "function", "global", 2),
        ("a", "variable", "area", 3),
    ]
    assert all(s.language == "javascript" for s in symbols)


def test_scope_popped_after_closing_brace():
    """Test that the line after a bare } is back in the outer scope."""
    source = JAVASCRIPT_SOURCE + "let after = 1;\n"
    symbols = scan(source, "javascript")

    after = _find(symbols, "after")
    assert after.scope == "global"
    assert after.line == 6


def test_python_import_variable_builtin():
    """Test Python import, variable and built-in detection."""
    source = "import math\nx = 5\nprint(x)\nprint(x)\n"
    symbols = scan(source, "python")

    assert [(s.name, s.type) for s in symbols] == [
        ("math", "import"),
        ("x", "variable"),
        ("print", "builtin"),
    ]
    print_sym = _find(symbols, "print")
    assert print_sym.scope == "builtins"
    assert print_sym.line == 3


def test_builtin_suppressed_before_dedup():
    """Test that repeated built-in calls are suppressed during the scan itself."""
    ctx = ScanContext("python")
    from symscan_mcp.parser.scanners import scan_line

    scan_line("python", "print(1)", 1, ctx.current_scope, ctx)
    scan_line("python", "print(2)", 2, ctx.current_scope, ctx)

    assert [s.name for s in ctx.symbols] == ["print"]


def test_comment_line_skipped():
    """Test that a commented-out declaration yields nothing."""
    assert scan("// let x = 5;", "javascript") == []


@pytest.mark.parametrize("language", SUPPORTED_LANGUAGES)
def test_empty_source(language):
    """Test that empty input returns an empty list for every language."""
    assert scan("", language) == []


@pytest.mark.parametrize("language", ["ruby", "", "JavaScript", "js"])
def test_unsupported_language_raises(language):
    """Test that unknown languages fail instead of returning empty output."""
    with pytest.raises(UnsupportedLanguage) as exc_info:
        scan("let x = 1;", language)

    assert exc_info.value.language == language
    assert exc_info.value.to_dict()["error"] == "UNSUPPORTED_LANGUAGE"


def test_scan_is_idempotent():
    """Test that repeated scans give identical output."""
    source = "import math\nx = len([1])\nprint(x)\n"
    first = [s.to_dict() for s in scan(source, "python")]
    second = [s.to_dict() for s in scan(source, "python")]
    assert first == second


def test_redeclaration_keeps_first():
    """Test that only the lowest line survives a redeclaration."""
    source = "var count = 0;\nvar count = 1;\n"
    symbols = scan(source, "javascript")

    assert len(symbols) == 1
    assert symbols[0].line == 1


def test_no_duplicate_triples():
    """Test the dedup invariant on a larger input."""
    source = "x = 1\nx = 2\ny = 3\nx = 4\nlen([])\nlen([])\n"
    symbols = scan(source, "python")

    keys = [(s.name, s.scope, s.type) for s in symbols]
    assert len(keys) == len(set(keys))


@pytest.mark.parametrize("language", ["javascript", "java", "c", "cpp", "csharp", "go", "rust"])
def test_scope_floor(language):
    """Test that closing braces never pop the global scope."""
    assert scan("}\n}\n}", language) == []

    symbols = scan("}\n}\nint x = 1;\nlet y = 2;\nvar z = 3;", language)
    assert all(s.scope == "global" for s in symbols)


def test_lines_are_non_decreasing():
    """Test that emission order follows source order."""
    source = "import os, sys\nfrom json import dumps, loads\nx = 1\ndef f():\n    y = 2\n"
    symbols = scan(source, "python")

    lines = [s.line for s in symbols]
    assert lines == sorted(lines)
    # Multi-name imports share a line
    assert lines[:2] == [1, 1]


def test_carriage_returns_are_trimmed():
    """Test CRLF input behaves like LF input."""
    lf = scan(JAVASCRIPT_SOURCE, "javascript")
    crlf = scan(JAVASCRIPT_SOURCE.replace("\n", "\r\n"), "javascript")
    assert [s.to_dict() for s in lf] == [s.to_dict() for s in crlf]


def test_is_comment():
    """Test the per-language comment predicate."""
    assert is_comment("// note", "javascript")
    assert is_comment("/* block", "java")
    assert is_comment("* continuation", "csharp")
    assert is_comment("# note", "python")
    assert is_comment("#include <stdio.h>", "c")
    assert is_comment("#pragma once", "cpp")
    assert not is_comment("# not a comment", "go")
    assert not is_comment("x = 1  # trailing", "python")
    assert not is_comment("let x = 1; // trailing", "javascript")


def test_define_survives_hash_comment_filter():
    """Test that #define still yields a constant in C and C++."""
    for language in ("c", "cpp"):
        symbols = scan("#define PI 3.14\n#pragma once\n#ifdef DEBUG\n#endif\n", language)
        assert [(s.name, s.type) for s in symbols] == [("PI", "constant")]


def test_remove_duplicates_first_wins():
    """Test dedup keeps the first record even if later ones carry more data."""
    first = Symbol(name="x", type="variable", scope="global", line=1, language="go")
    second = Symbol(name="x", type="variable", scope="global", line=5, language="go", data_type="int")
    other_scope = Symbol(name="x", type="variable", scope="main", line=7, language="go")

    result = remove_duplicates([first, second, other_scope])
    assert result == [first, other_scope]


def test_symbol_to_dict():
    """Test wire serialization omits absent optional fields."""
    bare = Symbol(name="x", type="variable", scope="global", line=1, language="python")
    assert bare.to_dict() == {
        "name": "x", "type": "variable", "scope": "global", "line": 1, "language": "python",
    }

    typed = Symbol(
        name="x", type="variable", scope="global", line=1, language="python",
        data_type="int", description="Annotated assignment",
    )
    assert typed.to_dict()["dataType"] == "int"
    assert typed.to_dict()["description"] == "Annotated assignment"


def test_context_rejects_empty_names():
    """Test names that clean to nothing are dropped."""
    ctx = ScanContext("go")
    assert ctx.add('  ""  ', "import", "global", 1) is None
    assert ctx.add('"fmt"', "import", "global", 2).name == "fmt"
    assert [s.name for s in ctx.symbols] == ["fmt"]


def test_context_pop_floor():
    """Test the scope stack never pops below global."""
    ctx = ScanContext("c")
    assert ctx.pop_scope() is None
    ctx.push_scope("main")
    assert ctx.pop_scope() == "main"
    assert ctx.pop_scope() is None
    assert ctx.scope_stack == ["global"]
