"""Per-language line scanners.

Every scanner looks at one trimmed, non-comment line and is built from two
separate groups:

* exclusive rules: an ordered tuple of Rule(pattern, handler). The first rule
  whose pattern matches and whose handler accepts the match wins; the rest
  are skipped. A handler returns False to decline (e.g. the captured name is
  a control keyword) and the cascade moves on.
* independent checks: plain functions run after the cascade on every line,
  whether or not a rule fired.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from ..errors import UnsupportedLanguage
from .builtins import is_python_builtin, lookup_javascript_builtin
from .context import ScanContext
from .symbols import BUILTINS_SCOPE, GLOBAL_SCOPE

# handler(ctx, match, line, line_number, scope) -> accepted
Handler = Callable[[ScanContext, re.Match, str, int, str], bool]


@dataclass(frozen=True)
class Rule:
    pattern: re.Pattern
    handler: Handler


def apply_rules(rules, ctx: ScanContext, line: str, line_number: int, scope: str) -> bool:
    """Run an exclusive cascade. Returns True if some rule accepted the line."""
    for rule in rules:
        match = rule.pattern.search(line)
        if match and rule.handler(ctx, match, line, line_number, scope):
            return True
    return False


def opens_scope(line: str) -> bool:
    """Whether a declaration line leaves a body open.

    Self-contained lines do not: prototypes ending in ';' and one-liners
    whose braces all close on the same line.
    """
    if line.rstrip().endswith(";"):
        return False
    opened = line.count("{")
    return not (opened and opened <= line.count("}"))


def _has_open_brace(line: str) -> bool:
    return "{" in line and opens_scope(line)


def _split_names(text: str) -> list[str]:
    """Split a comma list, keeping the target name of 'a as b' entries."""
    names = []
    for item in text.split(","):
        item = item.strip().strip("()").strip()
        if not item:
            continue
        names.append(re.split(r"\s+as\s+", item)[0].strip())
    return names


def _normalize_type(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return " ".join(text.split()) or None


# Keywords that name an aggregate kind, never a variable's type
AGGREGATE_KEYWORDS = frozenset({"class", "struct", "union", "enum"})

# Words that look like a type or a name to a regex but introduce statements
CONTROL_KEYWORDS = frozenset({
    "if", "else", "for", "foreach", "while", "do", "switch", "case", "default",
    "catch", "try", "finally", "return", "new", "delete", "throw", "throws",
    "sizeof", "typeof", "instanceof", "await", "yield", "goto", "break",
    "continue", "using", "lock", "fixed", "synchronized", "function", "super",
    "this", "package", "import", "typedef", "template", "namespace", "assert",
    "public", "private", "protected", "friend", "operator", "in", "is", "as",
})


def _is_keyword(*words: Optional[str]) -> bool:
    return any(w in CONTROL_KEYWORDS for w in words if w)


# ---------------------------------------------------------------------------
# JavaScript
# ---------------------------------------------------------------------------

def _js_function(ctx, match, line, line_number, scope):
    name = match.group(1)
    ctx.add(name, "function", scope, line_number, description="Function declaration")
    if opens_scope(line):
        ctx.push_scope(name)
    return True


def _js_class(ctx, match, line, line_number, scope):
    name = match.group(1)
    ctx.add(name, "class", scope, line_number, description="Class declaration")
    if opens_scope(line):
        ctx.push_scope(name, is_class=True)
    return True


def _js_arrow_function(ctx, match, line, line_number, scope):
    name = match.group(1)
    ctx.add(name, "function", scope, line_number, description="Arrow function")
    if _has_open_brace(line):
        ctx.push_scope(name)
    return True


def _js_constructor(ctx, match, line, line_number, scope):
    if not ctx.in_class_scope():
        return False
    ctx.add("constructor", "constructor", scope, line_number, description="Class constructor")
    if opens_scope(line):
        ctx.push_scope("constructor")
    return True


def _js_method(ctx, match, line, line_number, scope):
    name = match.group(1)
    if not ctx.in_class_scope() or _is_keyword(name):
        return False
    description = "Static method" if line.startswith("static") else "Instance method"
    ctx.add(name, "method", scope, line_number, description=description)
    if opens_scope(line):
        ctx.push_scope(name)
    return True


def _js_class_field(ctx, match, line, line_number, scope):
    if not ctx.in_class_scope():
        return False
    ctx.add(match.group(1), "property", scope, line_number, description="Class field")
    return True


def _js_this_property(ctx, match, line, line_number, scope):
    if ctx.at_root:
        return False
    owner = ctx.enclosing_class() or scope
    ctx.add(match.group(1), "property", owner, line_number, description="Instance property")
    return True


def _js_variable(ctx, match, line, line_number, scope):
    keyword, name = match.group(1), match.group(2)
    if keyword == "const":
        ctx.add(name, "constant", scope, line_number, description="Constant declaration")
    else:
        ctx.add(name, "variable", scope, line_number, description=f"Variable declaration ({keyword})")
    return True


def _js_import(ctx, match, line, line_number, scope):
    clause = match.group(1)
    names = []

    default = re.match(r"\s*([A-Za-z_$][\w$]*)\s*(?:,|$)", clause)
    if default:
        names.append(default.group(1))

    braces = re.search(r"\{([^}]*)\}", clause)
    if braces:
        names.extend(_split_names(braces.group(1)))

    star = re.search(r"\*\s+as\s+([A-Za-z_$][\w$]*)", clause)
    if star:
        names.append(star.group(1))

    for name in names:
        ctx.add(name, "import", scope, line_number, description="Module import")
    return True


JAVASCRIPT_RULES = (
    Rule(re.compile(r"\bfunction\b\s*\*?\s*([A-Za-z_$][\w$]*)\s*\("), _js_function),
    Rule(re.compile(r"\bclass\s+([A-Za-z_$][\w$]*)"), _js_class),
    Rule(
        re.compile(
            r"^(?:export\s+)?(?:const|let|var)\s+([A-Za-z_$][\w$]*)\s*=\s*"
            r"(?:async\s+)?(?:\([^)]*\)|[A-Za-z_$][\w$]*)\s*=>"
        ),
        _js_arrow_function,
    ),
    Rule(re.compile(r"^constructor\s*\("), _js_constructor),
    Rule(
        re.compile(
            r"^(?:static\s+)?(?:async\s+)?(?:get\s+|set\s+)?\*?\s*(#?[A-Za-z_$][\w$]*)\s*\([^)]*\)\s*\{"
        ),
        _js_method,
    ),
    Rule(re.compile(r"\bthis\.(#?[A-Za-z_$][\w$]*)\s*=(?![=>])"), _js_this_property),
    Rule(re.compile(r"^(?:static\s+)?(#?[A-Za-z_$][\w$]*)\s*=(?![=>])"), _js_class_field),
    Rule(re.compile(r"\b(let|const|var)\s+([A-Za-z_$][\w$]*)"), _js_variable),
    Rule(re.compile(r"^import\s+(?:type\s+)?([^'\"]+?)\s+from\b"), _js_import),
)

_JS_STATIC_PROPERTY = re.compile(r"(?<![\w$.])([A-Za-z_$][\w$]*)\.([A-Za-z_$][\w$]*)\s*=(?![=>])")
_JS_DOTTED_CALL = re.compile(r"(?<![\w$.])([A-Za-z_$][\w$]*)\.([A-Za-z_$][\w$]*)\s*\(")


def _js_check_static_property(ctx: ScanContext, line: str, line_number: int) -> None:
    match = _JS_STATIC_PROPERTY.search(line)
    if match and match.group(1) in ctx.class_names:
        ctx.add(match.group(2), "property", match.group(1), line_number, description="Static property")


def _js_check_builtin_calls(ctx: ScanContext, line: str, line_number: int) -> None:
    # Every occurrence on the line is reported, not just the first
    for match in _JS_DOTTED_CALL.finditer(line):
        obj, method = match.group(1), match.group(2)
        entry = lookup_javascript_builtin(obj, method)
        name = f"{obj}.{method}"
        if entry is not None and name not in ctx.seen_names:
            ctx.add(name, "builtin", BUILTINS_SCOPE, line_number, entry.type_tag, "Built-in method")


def scan_javascript(line: str, line_number: int, scope: str, ctx: ScanContext) -> None:
    apply_rules(JAVASCRIPT_RULES, ctx, line, line_number, scope)

    _js_check_static_property(ctx, line, line_number)
    _js_check_builtin_calls(ctx, line, line_number)


# ---------------------------------------------------------------------------
# Python
# ---------------------------------------------------------------------------

PYTHON_KEYWORDS = frozenset({
    "if", "elif", "else", "for", "while", "try", "except", "finally", "with",
    "return", "lambda", "yield", "raise", "pass", "break", "continue", "del",
    "global", "nonlocal", "assert", "match", "case", "async", "await",
})


def _py_def(ctx, match, line, line_number, scope):
    name = match.group(1)
    ctx.add(name, "function", scope, line_number, description="Function definition")
    ctx.push_scope(name)
    return True


def _py_class(ctx, match, line, line_number, scope):
    name = match.group(1)
    ctx.add(name, "class", scope, line_number, description="Class definition")
    ctx.push_scope(name, is_class=True)
    return True


def _py_typed_variable(ctx, match, line, line_number, scope):
    name, annotation = match.group(1), match.group(2)
    if name in PYTHON_KEYWORDS:
        return False
    if re.match(r"(?:typing\.)?Final\b", annotation):
        ctx.add(name, "constant", scope, line_number, annotation, "Final annotated name")
    else:
        ctx.add(name, "variable", scope, line_number, annotation, "Annotated assignment")
    return True


def _py_assignment(ctx, match, line, line_number, scope):
    for name in match.group(1).split(","):
        name = name.strip()
        # Rebinding a built-in name is not a new declaration
        if is_python_builtin(name):
            continue
        ctx.add(name, "variable", scope, line_number, description="Assignment")
    return True


PYTHON_RULES = (
    Rule(re.compile(r"^(?:async\s+)?def\s+(\w+)\s*\("), _py_def),
    Rule(re.compile(r"^class\s+(\w+)"), _py_class),
    Rule(re.compile(r"^(\w+)\s*:\s*([\w.]+(?:\[[^=]*\])?)\s*(?:=(?!=)|$)"), _py_typed_variable),
    Rule(re.compile(r"^(\w+(?:\s*,\s*\w+)*)\s*=(?!=)"), _py_assignment),
)

_PY_CALL = re.compile(r"(?<![\w.])(\w+)\s*\(")
_PY_IMPORT = re.compile(r"^import\s+([^#]+)")
_PY_FROM_IMPORT = re.compile(r"^from\s+([\w.]+)\s+import\s+([^#]+)")


def _py_check_builtin_calls(ctx: ScanContext, line: str, line_number: int) -> None:
    for match in _PY_CALL.finditer(line):
        name = match.group(1)
        # Reported once per scan: later calls are suppressed by the earlier record
        if is_python_builtin(name) and name not in ctx.seen_names:
            ctx.add(
                name, "builtin", BUILTINS_SCOPE, line_number,
                "builtin_function_or_method", "Built-in function",
            )


def _py_check_imports(ctx: ScanContext, line: str, line_number: int) -> None:
    match = _PY_FROM_IMPORT.match(line)
    if match:
        for name in _split_names(match.group(2).rstrip("\\")):
            if name != "*":
                ctx.add(name, "import", GLOBAL_SCOPE, line_number, "module", f"Imported from {match.group(1)}")
        return

    match = _PY_IMPORT.match(line)
    if match:
        for name in _split_names(match.group(1)):
            ctx.add(name.split(".")[0], "import", GLOBAL_SCOPE, line_number, "module", "Module import")


def scan_python(line: str, line_number: int, scope: str, ctx: ScanContext) -> None:
    apply_rules(PYTHON_RULES, ctx, line, line_number, scope)

    _py_check_builtin_calls(ctx, line, line_number)
    _py_check_imports(ctx, line, line_number)


# ---------------------------------------------------------------------------
# Java
# ---------------------------------------------------------------------------

_JAVA_MODIFIERS = (
    r"((?:(?:public|private|protected|static|final|abstract|synchronized|native"
    r"|transient|volatile|default|strictfp)\s+)*)"
)
_JAVA_TYPE = r"([\w.]+(?:<[^()=;]*>)?(?:\[\])*)"


def _consume(ctx, match, line, line_number, scope):
    return True


def _java_import(ctx, match, line, line_number, scope):
    imported = match.group(1).split(".")[-1]
    if imported != "*":
        ctx.add(imported, "import", scope, line_number, description=f"Import of {match.group(1)}")
    return True


def _class_like(ctx, match, line, line_number, scope):
    keyword, name = match.group(1), match.group(2)
    ctx.add(name, "class", scope, line_number, keyword, f"{keyword.capitalize()} declaration")
    if opens_scope(line):
        ctx.push_scope(name, is_class=True)
    return True


def _constructor(ctx, match, line, line_number, scope):
    name = match.group(1)
    if not ctx.in_class_scope() or name != scope:
        return False
    ctx.add(name, "constructor", scope, line_number, description="Constructor")
    if opens_scope(line):
        ctx.push_scope(name)
    return True


def _typed_method(ctx, match, line, line_number, scope):
    modifiers, return_type, name = match.group(1), match.group(2), match.group(3)
    if _is_keyword(return_type, name):
        return False
    description = "Static method" if re.search(r"\bstatic\b", modifiers) else "Method"
    ctx.add(name, "method", scope, line_number, return_type, description)
    if opens_scope(line):
        ctx.push_scope(name)
    return True


def _java_variable(ctx, match, line, line_number, scope):
    modifiers, var_type, name = match.group(1), match.group(2), match.group(3)
    if _is_keyword(var_type, name):
        return False
    if re.search(r"\bfinal\b", modifiers):
        ctx.add(name, "constant", scope, line_number, var_type, "Final field")
    else:
        ctx.add(name, "variable", scope, line_number, var_type, "Variable declaration")
    return True


JAVA_RULES = (
    Rule(re.compile(r"^package\s+[\w.]+\s*;"), _consume),
    Rule(re.compile(r"^import\s+(?:static\s+)?([\w.]+(?:\.\*)?)\s*;"), _java_import),
    Rule(re.compile(r"(?<![\w@.])(class|interface|enum|record)\s+(\w+)"), _class_like),
    Rule(re.compile(r"^(?:(?:public|private|protected)\s+)?(\w+)\s*\([^)]*\)"), _constructor),
    Rule(re.compile(r"^" + _JAVA_MODIFIERS + r"(?:<[^>]+>\s+)?" + _JAVA_TYPE + r"\s+(\w+)\s*\("), _typed_method),
    Rule(re.compile(r"^" + _JAVA_MODIFIERS + _JAVA_TYPE + r"\s+(\w+)\s*(?:\[\])?\s*(?:=|;|,)"), _java_variable),
)


def scan_java(line: str, line_number: int, scope: str, ctx: ScanContext) -> None:
    apply_rules(JAVA_RULES, ctx, line, line_number, scope)


# ---------------------------------------------------------------------------
# C and C++
# ---------------------------------------------------------------------------

def _c_define(ctx, match, line, line_number, scope):
    ctx.add(match.group(1), "constant", scope, line_number, description="Macro definition")
    return True


def _c_include(ctx, match, line, line_number, scope):
    ctx.add(match.group(1), "import", scope, line_number, description="Header include")
    return True


def _c_function(ctx, match, line, line_number, scope):
    type_words, name = match.group(1).split(), match.group(2)
    if _is_keyword(type_words[0], name):
        return False
    return_type = " ".join(w for w in type_words if w not in ("static", "extern", "inline"))
    ctx.add(name, "function", scope, line_number, return_type.replace(" *", "*"), "Function definition")
    if _has_open_brace(line):
        ctx.push_scope(name)
    return True


def _c_variable(ctx, match, line, line_number, scope):
    qualifiers, var_type, pointer, name = match.groups()[:4]
    if _is_keyword(var_type, name) or var_type in AGGREGATE_KEYWORDS:
        return False
    data_type = var_type + ("*" * pointer.count("*"))
    if re.search(r"\bconst\b", qualifiers):
        ctx.add(name, "constant", scope, line_number, data_type, "Constant declaration")
    else:
        ctx.add(name, "variable", scope, line_number, data_type, "Variable declaration")
    return True


def _c_struct(ctx, match, line, line_number, scope):
    keyword, name = match.group(1), match.group(2)
    ctx.add(name, "class", scope, line_number, keyword, f"{keyword.capitalize()} definition")
    return True


_C_DEFINE = Rule(re.compile(r"^#define\s+(\w+)"), _c_define)
_C_INCLUDE = Rule(re.compile(r"^#include\s*[<\"]([^>\"]+)[>\"]"), _c_include)

C_RULES = (
    _C_DEFINE,
    _C_INCLUDE,
    Rule(re.compile(r"^((?:\w+[\s*]+)+)(\w+)\s*\([^)]*\)\s*(?:\{|;)"), _c_function),
    Rule(
        re.compile(
            r"^((?:(?:static|const|extern|volatile|register|unsigned|signed|short|long)\s+)*)"
            r"((?:struct\s+|union\s+|enum\s+)?\w+)(\s*\*+\s*|\s+)(\w+)\s*(?:\[[^\]]*\])?\s*(?:=|;|,)"
        ),
        _c_variable,
    ),
    Rule(re.compile(r"\b(struct|union|enum)\s+(\w+)"), _c_struct),
)


def scan_c(line: str, line_number: int, scope: str, ctx: ScanContext) -> None:
    apply_rules(C_RULES, ctx, line, line_number, scope)


def _cpp_using(ctx, match, line, line_number, scope):
    target = match.group(1)
    ctx.add(target.split("::")[-1], "import", scope, line_number, description=f"Using {target}")
    return True


def _cpp_namespace(ctx, match, line, line_number, scope):
    if opens_scope(line):
        ctx.push_scope(match.group(1))
    return True


def _cpp_class(ctx, match, line, line_number, scope):
    rest = line[match.end():].lstrip()
    # template <class T>, template <class K, class V>
    if rest.startswith((">", ",", "=")):
        return False
    if rest.startswith(";") and line.startswith("friend"):
        return True
    # A forward declaration ends in ';' and opens no scope
    return _class_like(ctx, match, line, line_number, scope)


_CPP_LITERAL_ARG = re.compile(r"[\"']|(?<![\w.])\d")


def _cpp_function(ctx, match, line, line_number, scope):
    type_words = match.group(1).split()
    qualified, args, terminator = match.group(2), match.group(3), match.group(4)
    if _is_keyword(type_words[0] if type_words else None, qualified):
        return False

    owner, _, name = qualified.rpartition("::")
    bare = name.lstrip("~")
    enclosing = scope if ctx.in_class_scope() else None
    is_special = bare in (owner, enclosing)

    # A bare call statement like display(); has no return type
    if not type_words and not is_special:
        return False
    # Circle c(5.0, "x"); is an object definition, not a prototype
    if terminator == ";" and _CPP_LITERAL_ARG.search(args):
        return False
    if terminator == ":" and not is_special:
        return False

    return_type = " ".join(
        w for w in type_words if w not in ("virtual", "static", "inline", "explicit", "extern", "constexpr")
    ) or None

    if is_special and not name.startswith("~"):
        ctx.add(name, "constructor", scope, line_number, description="Constructor")
    elif name.startswith("~"):
        ctx.add(name, "method", scope, line_number, description="Destructor")
    elif owner:
        ctx.add(name, "method", scope, line_number, return_type, f"Member of {owner}")
    else:
        kind = "function" if scope == GLOBAL_SCOPE else "method"
        ctx.add(name, kind, scope, line_number, return_type, "Function definition" if kind == "function" else "Member function")

    if _has_open_brace(line):
        ctx.push_scope(name)
    return True


def _cpp_variable(ctx, match, line, line_number, scope):
    qualifiers, var_type, pointer, name = match.groups()[:4]
    if _is_keyword(var_type, name) or var_type in AGGREGATE_KEYWORDS:
        return False
    data_type = var_type + pointer.replace(" ", "")
    if re.search(r"\b(?:const|constexpr)\b", qualifiers):
        ctx.add(name, "constant", scope, line_number, data_type, "Constant declaration")
    else:
        ctx.add(name, "variable", scope, line_number, data_type, "Variable declaration")
    return True


CPP_RULES = (
    _C_DEFINE,
    _C_INCLUDE,
    Rule(re.compile(r"^using\s+namespace\s+([\w:]+)\s*;"), _cpp_using),
    Rule(re.compile(r"^using\s+([\w:]+)\s*;"), _cpp_using),
    Rule(re.compile(r"^(?:inline\s+)?namespace\s+([\w:]+)"), _cpp_namespace),
    Rule(re.compile(r"(?<![\w.])(class|struct)\s+(\w+)"), _cpp_class),
    Rule(
        re.compile(
            r"^((?:[\w:<>,*&]+\s+)*)[*&]*(~?(?:\w+::)*~?\w+)\s*\(([^)]*)\)\s*"
            r"(?:const\s*)?(?:noexcept\s*)?(?:override\s*)?(?:final\s*)?(\{|;|:)"
        ),
        _cpp_function,
    ),
    Rule(
        re.compile(
            r"^((?:(?:static|const|constexpr|extern|mutable|volatile|inline|unsigned|signed|long|short)\s+)*)"
            r"([\w:]+(?:<[^;=()]*>)?)(\s*[*&]+\s*|\s+)(\w+)\s*(?:\[[^\]]*\])?\s*(?:=|;|,|\(|\{)"
        ),
        _cpp_variable,
    ),
)


def scan_cpp(line: str, line_number: int, scope: str, ctx: ScanContext) -> None:
    apply_rules(CPP_RULES, ctx, line, line_number, scope)


# ---------------------------------------------------------------------------
# C#
# ---------------------------------------------------------------------------

_CS_MODIFIERS = (
    r"((?:(?:public|private|protected|internal|static|readonly|const|virtual|override"
    r"|abstract|sealed|async|partial|extern|unsafe|new|volatile|required)\s+)*)"
)
_CS_TYPE = r"([\w.]+(?:<[^()=;]*>)?(?:\[,*\])*\??)"


def _cs_using(ctx, match, line, line_number, scope):
    target = match.group(1)
    ctx.add(target.split(".")[-1], "import", scope, line_number, description=f"Using {target}")
    return True


def _cs_namespace(ctx, match, line, line_number, scope):
    # File-scoped namespaces end in ';' and cover the rest of the file
    ctx.push_scope(match.group(1))
    return True


def _cs_property(ctx, match, line, line_number, scope):
    prop_type, name = match.group(2), match.group(3)
    if _is_keyword(prop_type, name):
        return False
    ctx.add(name, "property", scope, line_number, prop_type, "Auto-property")
    return True


def _cs_variable(ctx, match, line, line_number, scope):
    modifiers, var_type, name = match.group(1), match.group(2), match.group(3)
    if _is_keyword(var_type, name):
        return False
    is_const = re.search(r"\bconst\b", modifiers) or (
        re.search(r"\bstatic\b", modifiers) and re.search(r"\breadonly\b", modifiers)
    )
    if is_const:
        ctx.add(name, "constant", scope, line_number, var_type, "Constant field")
    else:
        ctx.add(name, "variable", scope, line_number, var_type, "Variable declaration")
    return True


CSHARP_RULES = (
    Rule(re.compile(r"^(?:global\s+)?using\s+(?:static\s+)?(?:\w+\s*=\s*)?([\w.]+)\s*;"), _cs_using),
    Rule(re.compile(r"^namespace\s+([\w.]+)"), _cs_namespace),
    Rule(re.compile(r"(?<![\w.])(class|interface|struct|enum|record)\s+(\w+)"), _class_like),
    Rule(re.compile(r"^" + _CS_MODIFIERS + _CS_TYPE + r"\s+(\w+)\s*\{\s*(?:get|set|init)\b"), _cs_property),
    Rule(re.compile(r"^(?:(?:public|private|protected|internal|static)\s+)*(\w+)\s*\([^)]*\)"), _constructor),
    Rule(re.compile(r"^" + _CS_MODIFIERS + _CS_TYPE + r"\s+(\w+)\s*(?:<[^>]*>)?\s*\("), _typed_method),
    Rule(re.compile(r"^" + _CS_MODIFIERS + _CS_TYPE + r"\s+(\w+)\s*(?:=|;|,)"), _cs_variable),
)


def scan_csharp(line: str, line_number: int, scope: str, ctx: ScanContext) -> None:
    apply_rules(CSHARP_RULES, ctx, line, line_number, scope)


# ---------------------------------------------------------------------------
# Go
# ---------------------------------------------------------------------------

def _go_import_name(alias: Optional[str], path: str) -> Optional[str]:
    if alias and alias not in (".", "_"):
        return alias
    return path.split("/")[-1]


def _go_group_open(ctx, match, line, line_number, scope):
    ctx.group = match.group(1)
    return True


def _go_method(ctx, match, line, line_number, scope):
    receiver, name = match.group(1), match.group(2)
    ctx.add(name, "method", scope, line_number, description=f"Method on {receiver}")
    ctx.push_scope(name)
    return True


def _go_function(ctx, match, line, line_number, scope):
    name = match.group(1)
    ctx.add(name, "function", scope, line_number, description="Function declaration")
    ctx.push_scope(name)
    return True


def _go_type(ctx, match, line, line_number, scope):
    name, kind = match.group(1), match.group(2)
    ctx.add(name, "class", scope, line_number, kind, f"{kind.capitalize()} type")
    if opens_scope(line):
        ctx.push_scope(name, is_class=True)
    return True


def _go_var(ctx, match, line, line_number, scope):
    ctx.add(match.group(1), "variable", scope, line_number, _normalize_type(match.group(2)), "Variable declaration")
    return True


def _go_short_var(ctx, match, line, line_number, scope):
    for name in match.group(1).split(","):
        name = name.strip()
        if name != "_":
            ctx.add(name, "variable", scope, line_number, description="Short variable declaration")
    return True


def _go_const(ctx, match, line, line_number, scope):
    ctx.add(match.group(1), "constant", scope, line_number, _normalize_type(match.group(2)), "Constant declaration")
    return True


def _go_import(ctx, match, line, line_number, scope):
    ctx.add(_go_import_name(match.group(1), match.group(2)), "import", scope, line_number, description="Package import")
    return True


def _go_field(ctx, match, line, line_number, scope):
    if not ctx.in_class_scope():
        return False
    for name in match.group(1).split(","):
        ctx.add(name, "property", scope, line_number, match.group(2), "Struct field")
    return True


def _go_interface_method(ctx, match, line, line_number, scope):
    if not ctx.in_class_scope():
        return False
    ctx.add(match.group(1), "method", scope, line_number, description="Interface method")
    return True


_GO_DECL_TAIL = r"(?:\s+([^=\s][^=]*?))?\s*(?:=|$)"

GO_RULES = (
    Rule(re.compile(r"^(import|const|var)\s*\(\s*$"), _go_group_open),
    Rule(re.compile(r"^func\s+\(\s*(?:\w+\s+)?\*?([\w.]+)[^)]*\)\s*(\w+)\s*[\[(]"), _go_method),
    Rule(re.compile(r"^func\s+(\w+)\s*[\[(]"), _go_function),
    Rule(re.compile(r"^type\s+(\w+)(?:\[[^\]]*\])?\s+(struct|interface)\b"), _go_type),
    Rule(re.compile(r"^var\s+(\w+)" + _GO_DECL_TAIL), _go_var),
    Rule(re.compile(r"((?:\w+\s*,\s*)*\w+)\s*:="), _go_short_var),
    Rule(re.compile(r"^const\s+(\w+)" + _GO_DECL_TAIL), _go_const),
    Rule(re.compile(r"^import\s+(?:(\w+|\.)\s+)?\"([^\"]+)\""), _go_import),
    Rule(re.compile(r"^(\w+)\s*\([^)]*\)"), _go_interface_method),
    Rule(re.compile(r"^(\w+(?:\s*,\s*\w+)*)\s+([*\[\]\w.]+(?:\{\})?)\s*(?:`.*`)?$"), _go_field),
)

_GO_GROUP_IMPORT = re.compile(r"^(?:(\w+|\.)\s+)?\"([^\"]+)\"")
_GO_GROUP_NAME = re.compile(r"^(\w+)" + _GO_DECL_TAIL)


def _scan_go_group(line: str, line_number: int, scope: str, ctx: ScanContext) -> None:
    """Handle one line inside an import (...) / const (...) / var (...) group."""
    if line.startswith(")"):
        ctx.group = None
        return

    if ctx.group == "import":
        match = _GO_GROUP_IMPORT.match(line)
        if match:
            name = _go_import_name(match.group(1), match.group(2))
            ctx.add(name, "import", scope, line_number, description="Package import")
        return

    match = _GO_GROUP_NAME.match(line)
    if match:
        data_type = _normalize_type(match.group(2))
        if ctx.group == "const":
            ctx.add(match.group(1), "constant", scope, line_number, data_type, "Constant declaration")
        else:
            ctx.add(match.group(1), "variable", scope, line_number, data_type, "Variable declaration")


def scan_go(line: str, line_number: int, scope: str, ctx: ScanContext) -> None:
    if ctx.group is not None:
        _scan_go_group(line, line_number, scope, ctx)
        return

    apply_rules(GO_RULES, ctx, line, line_number, scope)


# ---------------------------------------------------------------------------
# Rust
# ---------------------------------------------------------------------------

_RUST_RETURN_TYPE = re.compile(r"->\s*(.+?)\s*(?:\{|;|\bwhere\b|$)")


def _rust_fn(ctx, match, line, line_number, scope):
    name = match.group(1)
    returns = _RUST_RETURN_TYPE.search(line, match.end())
    return_type = returns.group(1) if returns else None
    if ctx.in_class_scope():
        ctx.add(name, "method", scope, line_number, return_type, f"Associated function of {scope}")
    else:
        ctx.add(name, "function", scope, line_number, return_type, "Function definition")
    if opens_scope(line):
        ctx.push_scope(name)
    return True


def _rust_type(ctx, match, line, line_number, scope):
    keyword, name = match.group(1), match.group(2)
    ctx.add(name, "class", scope, line_number, keyword, f"{keyword.capitalize()} definition")
    if opens_scope(line):
        ctx.push_scope(name, is_class=True)
    return True


def _rust_impl(ctx, match, line, line_number, scope):
    if opens_scope(line):
        ctx.push_scope(match.group(1).split("::")[-1], is_class=True)
    return True


def _rust_let(ctx, match, line, line_number, scope):
    ctx.add(match.group(1), "variable", scope, line_number, match.group(2), "Let binding")
    return True


def _rust_static(ctx, match, line, line_number, scope):
    keyword, name, data_type = match.group(1), match.group(2), match.group(3)
    ctx.add(name, "constant", scope, line_number, data_type, f"{keyword.capitalize()} item")
    return True


def _rust_use(ctx, match, line, line_number, scope):
    path = match.group(1).strip()
    if "{" in path:
        items = path.partition("{")[2]
        # Nested groups flatten to their last path segment: io::{self, Write}
        names = [item.split("::")[-1].strip("{} ") for item in _split_names(items.rstrip("} "))]
    else:
        names = [_split_names(path)[0].split("::")[-1]]
    for name in names:
        if name not in ("self", "*", "super", "crate"):
            ctx.add(name, "import", scope, line_number, description="Use declaration")
    return True


def _rust_field(ctx, match, line, line_number, scope):
    if not ctx.in_class_scope():
        return False
    ctx.add(match.group(1), "property", scope, line_number, match.group(2), "Struct field")
    return True


_RUST_VISIBILITY = r"(?:pub(?:\([^)]*\))?\s+)?"

RUST_RULES = (
    Rule(re.compile(r"\bfn\s+(\w+)\s*[<(]"), _rust_fn),
    Rule(re.compile(r"^" + _RUST_VISIBILITY + r"(struct|enum|union|trait)\s+(\w+)"), _rust_type),
    Rule(
        re.compile(r"^(?:unsafe\s+)?impl\b(?:\s*<[^>]*>)?\s+(?:[\w:]+(?:<[^>]*>)?\s+for\s+)?([\w:]+)"),
        _rust_impl,
    ),
    Rule(re.compile(r"\blet\s+(?:mut\s+)?(\w+)\s*(?::\s*([^=;]+?))?\s*(?:=|;)"), _rust_let),
    Rule(re.compile(r"^" + _RUST_VISIBILITY + r"(static|const)\s+(?:mut\s+)?(\w+)\s*:\s*([^=]+?)\s*="), _rust_static),
    Rule(re.compile(r"^" + _RUST_VISIBILITY + r"use\s+([^;]+);?"), _rust_use),
    Rule(re.compile(r"^" + _RUST_VISIBILITY + r"(\w+)\s*:\s*([^,]+?),?$"), _rust_field),
)


def scan_rust(line: str, line_number: int, scope: str, ctx: ScanContext) -> None:
    apply_rules(RUST_RULES, ctx, line, line_number, scope)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def scan_line(language: str, line: str, line_number: int, scope: str, ctx: ScanContext) -> None:
    """Send one line to the scanner for `language`.

    The language set is closed; anything else raises UnsupportedLanguage.
    """
    if language == "javascript":
        scan_javascript(line, line_number, scope, ctx)
    elif language == "python":
        scan_python(line, line_number, scope, ctx)
    elif language == "java":
        scan_java(line, line_number, scope, ctx)
    elif language == "c":
        scan_c(line, line_number, scope, ctx)
    elif language == "cpp":
        scan_cpp(line, line_number, scope, ctx)
    elif language == "csharp":
        scan_csharp(line, line_number, scope, ctx)
    elif language == "go":
        scan_go(line, line_number, scope, ctx)
    elif language == "rust":
        scan_rust(line, line_number, scope, ctx)
    else:
        raise UnsupportedLanguage.for_language(language)
