"""Filter and sort a scanned symbol table."""

from typing import Optional

from ..errors import UnsupportedLanguage
from ..parser import scan

# Sortable record keys, in wire naming
SORT_KEYS = ("name", "type", "scope", "line", "dataType", "language", "description")


def search_symbols(
    source: str,
    language: str,
    query: str = "",
    type: Optional[str] = None,
    sort_by: str = "line",
    order: str = "asc",
) -> dict:
    """Search the symbol table of a source text.

    Args:
        source: Source code to scan
        language: Language id
        query: Case-insensitive substring matched against name or scope
        type: Optional symbol type filter ("all" means no filter)
        sort_by: Record key to sort on
        order: "asc" or "desc"; records missing the key always sort last

    Returns:
        Dict with matching symbols
    """
    if sort_by not in SORT_KEYS:
        return {"error": f"Invalid sort key: {sort_by}", "valid": list(SORT_KEYS)}
    if order not in ("asc", "desc"):
        return {"error": f"Invalid sort order: {order}"}

    try:
        symbols = scan(source, language)
    except UnsupportedLanguage as e:
        return {"error": e.message, "code": e.error_name, "details": e.details}

    records = [s.to_dict() for s in symbols]
    query_lower = query.lower()

    matches = []
    for record in records:
        # Apply filters
        if type and type != "all" and record["type"] != type:
            continue
        if query_lower and not (
            query_lower in record["name"].lower() or query_lower in record["scope"].lower()
        ):
            continue
        matches.append(record)

    results = sort_records(matches, sort_by, descending=(order == "desc"))

    return {
        "language": language,
        "query": query,
        "type": type or "all",
        "sort_by": sort_by,
        "order": order,
        "total": len(records),
        "result_count": len(results),
        "results": results,
    }


def sort_records(records: list[dict], key: str, descending: bool = False) -> list[dict]:
    """Sort records on key; records without the key go to the end."""
    present = [r for r in records if r.get(key) is not None]
    missing = [r for r in records if r.get(key) is None]

    if key == "line":
        present.sort(key=lambda r: r[key], reverse=descending)
    else:
        present.sort(key=lambda r: str(r[key]).lower(), reverse=descending)

    return present + missing
