"""Scan inline source text."""

from ..errors import UnsupportedLanguage
from ..parser import Symbol, SYMBOL_TYPES, scan


def count_by_type(symbols: list[Symbol]) -> dict[str, int]:
    """Count symbols per type, in SYMBOL_TYPES order, omitting zeros."""
    counts = {}
    for kind in SYMBOL_TYPES:
        total = sum(1 for s in symbols if s.type == kind)
        if total:
            counts[kind] = total
    return counts


def scan_source(source: str, language: str) -> dict:
    """Extract the symbol table from source text.

    Args:
        source: Source code to scan
        language: Language id

    Returns:
        Dict with symbols and per-type counts
    """
    try:
        symbols = scan(source, language)
    except UnsupportedLanguage as e:
        return {"error": e.message, "code": e.error_name, "details": e.details}

    return {
        "language": language,
        "symbol_count": len(symbols),
        "counts": count_by_type(symbols),
        "symbols": [s.to_dict() for s in symbols],
    }
