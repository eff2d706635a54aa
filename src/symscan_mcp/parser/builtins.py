"""Static registries of names provided by a language's standard environment."""

from dataclasses import dataclass
from types import MappingProxyType


# Built-in Python functions, types and singleton constants
PYTHON_BUILTINS = frozenset({
    "abs", "aiter", "all", "anext", "any", "ascii", "bin", "bool", "breakpoint",
    "bytearray", "bytes", "callable", "chr", "classmethod", "compile", "complex",
    "delattr", "dict", "dir", "divmod", "enumerate", "eval", "exec", "filter",
    "float", "format", "frozenset", "getattr", "globals", "hasattr", "hash",
    "help", "hex", "id", "input", "int", "isinstance", "issubclass", "iter",
    "len", "list", "locals", "map", "max", "memoryview", "min", "next",
    "object", "oct", "open", "ord", "pow", "print", "property", "range",
    "repr", "reversed", "round", "set", "setattr", "slice", "sorted",
    "staticmethod", "str", "sum", "super", "tuple", "type", "vars", "zip",
    "__import__",
    "None", "True", "False", "NotImplemented", "Ellipsis",
})


@dataclass(frozen=True)
class BuiltinObject:
    """A well-known global object and the methods it exposes."""
    type_tag: str
    methods: frozenset[str]


def _obj(type_tag: str, *methods: str) -> BuiltinObject:
    return BuiltinObject(type_tag=type_tag, methods=frozenset(methods))


# JavaScript global objects whose dotted calls are reported as built-ins
JAVASCRIPT_BUILTIN_OBJECTS = MappingProxyType({
    "console": _obj(
        "Console",
        "log", "error", "warn", "info", "debug", "trace", "table", "dir",
        "group", "groupEnd", "time", "timeEnd", "assert", "count", "clear",
    ),
    "Math": _obj(
        "Math",
        "abs", "ceil", "floor", "round", "trunc", "sign", "max", "min", "pow",
        "sqrt", "cbrt", "random", "log", "log2", "log10", "exp", "sin", "cos",
        "tan", "asin", "acos", "atan", "atan2", "hypot",
    ),
    "JSON": _obj("JSON", "parse", "stringify"),
    "Object": _obj(
        "ObjectConstructor",
        "keys", "values", "entries", "assign", "freeze", "isFrozen", "seal",
        "create", "defineProperty", "getPrototypeOf", "setPrototypeOf",
        "fromEntries", "getOwnPropertyNames",
    ),
    "Array": _obj("ArrayConstructor", "isArray", "from", "of"),
    "Promise": _obj("PromiseConstructor", "all", "allSettled", "any", "race", "resolve", "reject"),
    "Number": _obj(
        "NumberConstructor",
        "isInteger", "isFinite", "isNaN", "isSafeInteger", "parseFloat", "parseInt",
    ),
    "String": _obj("StringConstructor", "fromCharCode", "fromCodePoint", "raw"),
    "Date": _obj("DateConstructor", "now", "parse", "UTC"),
    "Reflect": _obj("Reflect", "apply", "construct", "get", "set", "has", "ownKeys", "deleteProperty"),
    "document": _obj(
        "Document",
        "getElementById", "getElementsByClassName", "getElementsByTagName",
        "querySelector", "querySelectorAll", "createElement", "createTextNode",
        "addEventListener", "removeEventListener",
    ),
    "window": _obj(
        "Window",
        "alert", "confirm", "prompt", "setTimeout", "clearTimeout", "setInterval",
        "clearInterval", "requestAnimationFrame", "addEventListener", "fetch",
    ),
})


def is_python_builtin(name: str) -> bool:
    return name in PYTHON_BUILTINS


def lookup_javascript_builtin(obj: str, method: str):
    """Return the BuiltinObject for obj.method, or None if not a known built-in."""
    entry = JAVASCRIPT_BUILTIN_OBJECTS.get(obj)
    if entry is not None and method in entry.methods:
        return entry
    return None
