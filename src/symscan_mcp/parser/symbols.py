"""Symbol dataclass and utility functions."""

from dataclasses import dataclass
from typing import Optional


# Closed set of symbol kinds
SYMBOL_TYPES = (
    "variable",
    "function",
    "class",
    "method",
    "parameter",
    "constant",
    "import",
    "builtin",
    "property",
    "constructor",
)

GLOBAL_SCOPE = "global"
BUILTINS_SCOPE = "builtins"


@dataclass
class Symbol:
    """A declared identifier found by a line scanner."""
    name: str                           # Identifier text (e.g., "area")
    type: str                           # One of SYMBOL_TYPES
    scope: str                          # Enclosing construct, "global" or "builtins"
    line: int                           # Declaring line number (1-indexed)
    language: str                       # Language id the scan ran under
    data_type: Optional[str] = None     # Declared/annotated type, if any
    description: Optional[str] = None   # Display helper (e.g., "Class definition")

    @property
    def key(self) -> tuple[str, str, str]:
        """Identity used for deduplication."""
        return (self.name, self.scope, self.type)

    def to_dict(self) -> dict:
        """Serialize using the wire field names."""
        result = {
            "name": self.name,
            "type": self.type,
            "scope": self.scope,
            "line": self.line,
            "language": self.language,
        }
        if self.data_type is not None:
            result["dataType"] = self.data_type
        if self.description is not None:
            result["description"] = self.description
        return result


def clean_name(text: str) -> str:
    """Strip surrounding whitespace and quote characters from an identifier.

    Example: ' "fmt" ' -> fmt
    """
    return text.strip().strip("\"'`").strip()
