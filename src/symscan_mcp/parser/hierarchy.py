"""Build a scope tree from the flat symbol list for outlines."""

from dataclasses import dataclass, field

from .symbols import Symbol

# Symbol types whose name can appear as another symbol's scope
SCOPE_OPENING_TYPES = frozenset({"class", "function", "method", "constructor"})


@dataclass
class SymbolNode:
    """A node in the symbol tree with children."""
    symbol: Symbol
    children: list["SymbolNode"] = field(default_factory=list)


def build_scope_tree(symbols: list[Symbol]) -> list[SymbolNode]:
    """Build a hierarchical tree from flat symbol list.

    A symbol becomes a child of the nearest preceding class/function/method/
    constructor whose name equals its scope. Everything else (global,
    builtins, scopes with no matching declaration) is a root.
    """
    openers: dict[str, SymbolNode] = {}
    roots = []

    for symbol in symbols:
        node = SymbolNode(symbol=symbol)
        parent = openers.get(symbol.scope)
        if parent is not None and parent.symbol is not symbol:
            parent.children.append(node)
        else:
            roots.append(node)

        if symbol.type in SCOPE_OPENING_TYPES:
            openers[symbol.name] = node

    return roots


def flatten_tree(nodes: list[SymbolNode], depth: int = 0) -> list[tuple[Symbol, int]]:
    """Flatten symbol tree with depth information.

    Returns list of (symbol, depth) tuples for indentation.
    """
    result = []
    for node in nodes:
        result.append((node.symbol, depth))
        result.extend(flatten_tree(node.children, depth + 1))
    return result
