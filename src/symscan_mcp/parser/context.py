"""Per-scan mutable state: scope stack and accumulated symbols."""

from typing import Optional

from .symbols import Symbol, SYMBOL_TYPES, GLOBAL_SCOPE, clean_name


class ScanContext:
    """Scope stack plus output list for a single scan.

    Created fresh by the orchestrator for every call and discarded afterwards.
    The stack always holds GLOBAL_SCOPE at index 0.
    """

    def __init__(self, language: str):
        self.language = language
        self.symbols: list[Symbol] = []
        self.scope_stack: list[str] = [GLOBAL_SCOPE]
        # Names pushed by class-like constructs (class, struct, impl, trait)
        self.class_scopes: set[str] = set()
        # Names declared as classes anywhere so far
        self.class_names: set[str] = set()
        # Every name emitted so far, used to suppress repeated built-ins
        self.seen_names: set[str] = set()
        # Open Go declaration group: "import", "const", "var" or None
        self.group: Optional[str] = None

    @property
    def current_scope(self) -> str:
        return self.scope_stack[-1]

    @property
    def at_root(self) -> bool:
        return len(self.scope_stack) == 1

    def push_scope(self, name: str, is_class: bool = False) -> None:
        self.scope_stack.append(name)
        if is_class:
            self.class_scopes.add(name)

    def pop_scope(self) -> Optional[str]:
        """Pop the innermost scope. Never pops the global scope."""
        if len(self.scope_stack) > 1:
            return self.scope_stack.pop()
        return None

    def in_class_scope(self) -> bool:
        """True when the innermost scope was opened by a class-like construct."""
        return not self.at_root and self.current_scope in self.class_scopes

    def enclosing_class(self) -> Optional[str]:
        """Nearest class-like scope on the stack, innermost first."""
        for name in reversed(self.scope_stack[1:]):
            if name in self.class_scopes:
                return name
        return None

    def add(
        self,
        name: str,
        type: str,
        scope: str,
        line: int,
        data_type: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Optional[Symbol]:
        """Clean and record a symbol. Empty names are dropped."""
        if type not in SYMBOL_TYPES:
            raise ValueError(f"Unknown symbol type: {type}")

        name = clean_name(name)
        if not name:
            return None

        if data_type is not None:
            data_type = data_type.strip() or None

        symbol = Symbol(
            name=name,
            type=type,
            scope=scope,
            line=line,
            language=self.language,
            data_type=data_type,
            description=description,
        )
        self.symbols.append(symbol)
        self.seen_names.add(name)
        if type == "class":
            self.class_names.add(name)
        return symbol
