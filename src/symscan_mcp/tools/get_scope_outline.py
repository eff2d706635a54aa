"""Get scope outline - symbols nested under the constructs that declare them."""

from ..errors import UnsupportedLanguage
from ..parser import build_scope_tree, scan


def get_scope_outline(source: str, language: str) -> dict:
    """Get symbols of a source text with hierarchical structure.

    Args:
        source: Source code to scan
        language: Language id

    Returns:
        Dict with symbols outline
    """
    try:
        symbols = scan(source, language)
    except UnsupportedLanguage as e:
        return {"error": e.message, "code": e.error_name, "details": e.details}

    tree = build_scope_tree(symbols)

    return {
        "language": language,
        "symbol_count": len(symbols),
        "symbols": [_node_to_dict(n) for n in tree]
    }


def _node_to_dict(node) -> dict:
    """Convert SymbolNode to output dict."""
    result = {
        "name": node.symbol.name,
        "type": node.symbol.type,
        "scope": node.symbol.scope,
        "line": node.symbol.line,
    }

    if node.symbol.data_type is not None:
        result["dataType"] = node.symbol.data_type

    if node.children:
        result["children"] = [_node_to_dict(c) for c in node.children]

    return result
