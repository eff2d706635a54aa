"""Parser package for extracting symbols from source code."""

from ..errors import UnsupportedLanguage
from .symbols import Symbol, SYMBOL_TYPES, GLOBAL_SCOPE, BUILTINS_SCOPE, clean_name
from .languages import (
    LanguageSpec,
    LANGUAGE_REGISTRY,
    LANGUAGE_EXTENSIONS,
    SUPPORTED_LANGUAGES,
    get_language_spec,
)
from .builtins import PYTHON_BUILTINS, JAVASCRIPT_BUILTIN_OBJECTS, BuiltinObject
from .context import ScanContext
from .extractor import scan, scan_file, is_comment, remove_duplicates, detect_language
from .hierarchy import SymbolNode, build_scope_tree, flatten_tree

__all__ = [
    "Symbol",
    "SYMBOL_TYPES",
    "GLOBAL_SCOPE",
    "BUILTINS_SCOPE",
    "clean_name",
    "LanguageSpec",
    "LANGUAGE_REGISTRY",
    "LANGUAGE_EXTENSIONS",
    "SUPPORTED_LANGUAGES",
    "get_language_spec",
    "PYTHON_BUILTINS",
    "JAVASCRIPT_BUILTIN_OBJECTS",
    "BuiltinObject",
    "ScanContext",
    "UnsupportedLanguage",
    "scan",
    "scan_file",
    "is_comment",
    "remove_duplicates",
    "detect_language",
    "SymbolNode",
    "build_scope_tree",
    "flatten_tree",
]
