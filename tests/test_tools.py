"""Tests for tools module."""

import pytest
from symscan_mcp.tools.scan_source import scan_source, count_by_type
from symscan_mcp.tools.scan_file import scan_file_tool
from symscan_mcp.tools.scan_folder import scan_folder, should_skip_file, discover_local_files
from symscan_mcp.tools.search_symbols import search_symbols, sort_records
from symscan_mcp.tools.get_scope_outline import get_scope_outline
from symscan_mcp.tools.list_languages import list_languages, get_language_example
from symscan_mcp.parser import scan


JS_SOURCE = """const PI = 3.14;
function area(r) {
  let a = PI * r * r;
  return a;
}
console.log(area(2));
"""


def test_scan_source():
    """Test inline scan result shape."""
    result = scan_source(JS_SOURCE, "javascript")

    assert result["language"] == "javascript"
    assert result["symbol_count"] == 4
    assert result["counts"] == {"variable": 1, "function": 1, "constant": 1, "builtin": 1}
    assert result["symbols"][0] == {
        "name": "PI",
        "type": "constant",
        "scope": "global",
        "line": 1,
        "language": "javascript",
        "description": "Constant declaration",
    }


def test_scan_source_unsupported_language():
    """Test unknown language returns an error payload."""
    result = scan_source("x = 1", "ruby")

    assert result["code"] == "UNSUPPORTED_LANGUAGE"
    assert "ruby" in result["error"]
    assert "python" in result["details"]["supported"]


def test_count_by_type_order():
    """Test counts follow the symbol type order and omit zeros."""
    symbols = scan("import os\nx = 1\ny = 2\nprint(x)\n", "python")
    counts = count_by_type(symbols)

    assert counts == {"variable": 2, "import": 1, "builtin": 1}
    assert list(counts) == ["variable", "import", "builtin"]


def test_scan_file(tmp_path):
    """Test scanning a file with language detection."""
    path = tmp_path / "main.go"
    path.write_text("package main\n\nfunc main() {\n    total := 0\n}\n")

    result = scan_file_tool(str(path))

    assert result["language"] == "go"
    assert result["symbol_count"] == 2
    assert [s["name"] for s in result["symbols"]] == ["main", "total"]
    assert result["symbols"][1]["scope"] == "main"


def test_scan_file_language_override(tmp_path):
    """Test an explicit language wins over the extension."""
    path = tmp_path / "script.txt"
    path.write_text("x = 1\n")

    result = scan_file_tool(str(path), language="python")

    assert result["language"] == "python"
    assert result["symbols"][0]["name"] == "x"


def test_scan_file_errors(tmp_path):
    """Test file error codes."""
    missing = scan_file_tool(str(tmp_path / "missing.py"))
    assert missing["code"] == "FILE_NOT_FOUND"

    folder = scan_file_tool(str(tmp_path))
    assert folder["code"] == "NOT_A_FILE"

    notes = tmp_path / "notes.txt"
    notes.write_text("hello\n")
    assert scan_file_tool(str(notes))["code"] == "UNKNOWN_EXTENSION"

    big = tmp_path / "big.py"
    big.write_text("x = 1\n" * 10)
    result = scan_file_tool(str(big), max_size=10)
    assert result["code"] == "FILE_TOO_LARGE"
    assert result["details"]["limit"] == 10


def test_should_skip_file():
    """Test skip patterns."""
    assert should_skip_file("node_modules/foo.js") is True
    assert should_skip_file("vendor/github.com/foo.go") is True
    assert should_skip_file("web\\dist\\app.js") is True
    assert should_skip_file("static/app.min.js") is True
    assert should_skip_file("src/main.py") is False


def _make_tree(root):
    files = {
        "src/app.py": "import os\nx = 1\n",
        "lib/util.js": "const A = 1;\n",
        "node_modules/pkg/index.js": "const B = 2;\n",
        "build/out.js": "const C = 3;\n",
        "ignored/skip.py": "y = 2\n",
        "src/model.gen.py": "z = 3\n",
        "README.md": "# readme\n",
        ".gitignore": "ignored/\n*.gen.py\n",
    }
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


def test_discover_local_files(tmp_path):
    """Test discovery honours skip patterns, .gitignore and extensions."""
    _make_tree(tmp_path)

    files = discover_local_files(tmp_path)
    rel = [f.relative_to(tmp_path).as_posix() for f in files]

    assert rel == ["lib/util.js", "src/app.py"]


def test_discover_local_files_respects_max(tmp_path):
    """Test that max_files keeps priority directories first."""
    _make_tree(tmp_path)

    files = discover_local_files(tmp_path, max_files=1)
    assert [f.relative_to(tmp_path).as_posix() for f in files] == ["src/app.py"]


def test_discover_local_files_size_limit(tmp_path):
    """Test oversized files are skipped."""
    _make_tree(tmp_path)

    files = discover_local_files(tmp_path, max_size=13)
    assert [f.name for f in files] == ["util.js"]


def test_scan_folder(tmp_path):
    """Test scanning a folder end to end."""
    _make_tree(tmp_path)

    result = scan_folder(str(tmp_path))

    assert result["file_count"] == 2
    assert result["symbol_count"] == 3
    assert result["languages"] == {"javascript": 1, "python": 1}
    assert set(result["files"]) == {"lib/util.js", "src/app.py"}
    assert result["files"]["src/app.py"]["counts"] == {"variable": 1, "import": 1}
    assert "note" not in result
    assert "warnings" not in result


def test_scan_folder_truncated(tmp_path):
    """Test the note added when the file limit is reached."""
    _make_tree(tmp_path)

    result = scan_folder(str(tmp_path), max_files=1)

    assert result["file_count"] == 1
    assert "note" in result


def test_scan_folder_errors(tmp_path):
    """Test folder error payloads."""
    assert scan_folder(str(tmp_path / "nope"))["code"] == "FILE_NOT_FOUND"

    path = tmp_path / "a.py"
    path.write_text("x = 1\n")
    assert scan_folder(str(path))["code"] == "NOT_A_DIRECTORY"

    empty = tmp_path / "empty"
    empty.mkdir()
    assert scan_folder(str(empty)) == {"error": "No source files found"}


def test_search_symbols_query():
    """Test substring query over name and scope."""
    result = search_symbols(JS_SOURCE, "javascript", query="AREA")

    assert result["total"] == 4
    assert [r["name"] for r in result["results"]] == ["area", "a"]


def test_search_symbols_type_filter():
    """Test filtering by symbol type."""
    result = search_symbols(JS_SOURCE, "javascript", type="constant")
    assert [r["name"] for r in result["results"]] == ["PI"]

    everything = search_symbols(JS_SOURCE, "javascript", type="all")
    assert everything["result_count"] == 4
    assert everything["type"] == "all"


def test_search_symbols_sorting():
    """Test sorting by name and line."""
    by_name = search_symbols(JS_SOURCE, "javascript", sort_by="name")
    assert [r["name"] for r in by_name["results"]] == ["a", "area", "console.log", "PI"]

    by_line = search_symbols(JS_SOURCE, "javascript", sort_by="line", order="desc")
    assert [r["line"] for r in by_line["results"]] == [6, 3, 2, 1]


def test_search_symbols_invalid_arguments():
    """Test invalid sort key, order and language."""
    assert "error" in search_symbols(JS_SOURCE, "javascript", sort_by="size")
    assert "error" in search_symbols(JS_SOURCE, "javascript", order="up")
    assert search_symbols(JS_SOURCE, "ruby")["code"] == "UNSUPPORTED_LANGUAGE"


def test_sort_records_missing_values_last():
    """Test records without the key stay at the end in both directions."""
    records = [
        {"name": "b"},
        {"name": "a", "dataType": "int"},
        {"name": "c", "dataType": "Console"},
    ]

    asc = sort_records(records, "dataType")
    assert [r["name"] for r in asc] == ["c", "a", "b"]

    desc = sort_records(records, "dataType", descending=True)
    assert [r["name"] for r in desc] == ["a", "c", "b"]


def test_sort_records_line_is_numeric():
    """Test line numbers sort numerically, not as strings."""
    records = [{"line": 10}, {"line": 9}, {"line": 100}]
    assert [r["line"] for r in sort_records(records, "line")] == [9, 10, 100]


def test_get_scope_outline():
    """Test class members nest under their class."""
    source = (
        "class Circle {\n"
        "  constructor(r) {\n"
        "    this.r = r;\n"
        "  }\n"
        "  area() {\n"
        "    return Math.round(this.r);\n"
        "  }\n"
        "}\n"
    )
    result = get_scope_outline(source, "javascript")

    assert result["symbol_count"] == 5
    roots = result["symbols"]
    assert [n["name"] for n in roots] == ["Circle", "Math.round"]
    assert [c["name"] for c in roots[0]["children"]] == ["constructor", "r", "area"]
    assert roots[1]["dataType"] == "Math"
    assert "children" not in roots[1]


def test_get_scope_outline_unsupported():
    """Test outline error payload."""
    assert get_scope_outline("", "kotlin")["code"] == "UNSUPPORTED_LANGUAGE"


def test_list_languages():
    """Test language listing."""
    result = list_languages()

    assert result["count"] == 8
    ids = [lang["id"] for lang in result["languages"]]
    assert ids == ["javascript", "python", "java", "c", "cpp", "csharp", "go", "rust"]

    cpp = result["languages"][4]
    assert cpp["name"] == "C++"
    assert cpp["extension"] == ".cpp"
    assert ".hpp" in cpp["extensions"]


@pytest.mark.parametrize("language", ["javascript", "python", "go", "rust"])
def test_get_language_example(language):
    """Test examples come back with their symbols."""
    result = get_language_example(language)

    assert result["language"] == language
    assert result["example"]
    assert result["symbols"]


def test_get_language_example_unsupported():
    """Test example lookup for an unknown language."""
    assert get_language_example("ruby")["code"] == "UNSUPPORTED_LANGUAGE"
