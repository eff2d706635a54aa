"""Line-by-line symbol extractor: comment filter, dispatch, scope tracking, dedup."""

import os
from pathlib import Path
from typing import Optional, Union

from ..errors import FileScanError, UnsupportedLanguage
from ..logging import get_logger
from .context import ScanContext
from .languages import LANGUAGE_EXTENSIONS, LanguageSpec, get_language_spec
from .scanners import scan_line
from .symbols import Symbol

logger = get_logger(__name__)

CLOSING_BRACE = "}"


def scan(source: str, language: str) -> list[Symbol]:
    """Extract symbols from source text.

    Args:
        source: Raw source code (may be empty)
        language: Language id (must be in LANGUAGE_REGISTRY)

    Returns:
        Symbols in emission order, deduplicated on (name, scope, type)

    Raises:
        UnsupportedLanguage: if language is not one of the supported ids
    """
    spec = get_language_spec(language)
    ctx = ScanContext(spec.id)

    lines = source.split("\n")
    for index, raw_line in enumerate(lines):
        line = raw_line.strip()

        # Skip empty lines and comments
        if not line or _is_skipped_comment(line, spec):
            continue

        scan_line(spec.id, line, index + 1, ctx.current_scope, ctx)

        # Only a line that is exactly "}" closes a scope
        if line == CLOSING_BRACE:
            ctx.pop_scope()

    symbols = remove_duplicates(ctx.symbols)
    logger.debug(
        "scan_complete",
        language=spec.id,
        lines=len(lines),
        emitted=len(ctx.symbols),
        symbols=len(symbols),
    )
    return symbols


def is_comment(line: str, language: str) -> bool:
    """Whether a trimmed line is comment-only for the given language."""
    spec = get_language_spec(language)
    return any(pattern.match(line) for pattern in spec.comment_patterns)


def _is_skipped_comment(line: str, spec: LanguageSpec) -> bool:
    # Preprocessor lines the scanner understands are not treated as comments
    if spec.directive_prefixes and line.startswith(spec.directive_prefixes):
        return False
    return any(pattern.match(line) for pattern in spec.comment_patterns)


def remove_duplicates(symbols: list[Symbol]) -> list[Symbol]:
    """Keep the first symbol for each (name, scope, type), preserving order."""
    seen = set()
    unique = []
    for symbol in symbols:
        if symbol.key in seen:
            continue
        seen.add(symbol.key)
        unique.append(symbol)
    return unique


def detect_language(filename: str) -> Optional[str]:
    """Map a file name to a language id by extension."""
    _, ext = os.path.splitext(filename)
    return LANGUAGE_EXTENSIONS.get(ext.lower())


def scan_file(
    path: Union[str, Path],
    language: Optional[str] = None,
    max_size: Optional[int] = None,
) -> list[Symbol]:
    """Read a file from disk and scan it.

    Args:
        path: File to scan
        language: Language id; detected from the extension when omitted
        max_size: Optional size limit in bytes

    Raises:
        FileScanError: missing file, not a regular file, or over max_size
        UnsupportedLanguage: unknown language or extension
    """
    file_path = Path(path).expanduser()

    if not file_path.exists():
        raise FileScanError.not_found(str(path))
    if not file_path.is_file():
        raise FileScanError.not_a_file(str(path))

    if language is None:
        language = detect_language(file_path.name)
        if language is None:
            raise UnsupportedLanguage.for_extension(file_path.name)

    if max_size is not None:
        size = file_path.stat().st_size
        if size > max_size:
            raise FileScanError.too_large(str(path), size, max_size)

    content = file_path.read_text(encoding="utf-8", errors="replace")
    return scan(content, language)
