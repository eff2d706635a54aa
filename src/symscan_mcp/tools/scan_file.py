"""Scan a single file from disk."""

from pathlib import Path
from typing import Optional

from ..config import DEFAULT_MAX_FILE_SIZE
from ..errors import SymscanError
from ..logging import get_logger
from ..parser import detect_language, scan_file
from .scan_source import count_by_type

logger = get_logger(__name__)


def scan_file_tool(
    path: str,
    language: Optional[str] = None,
    max_size: int = DEFAULT_MAX_FILE_SIZE,
) -> dict:
    """Scan one source file.

    Args:
        path: Path to file (absolute or relative, supports ~)
        language: Language id; detected from the extension when omitted
        max_size: Maximum file size in bytes

    Returns:
        Dict with symbols and per-type counts
    """
    file_path = Path(path).expanduser().resolve()
    language = language or detect_language(file_path.name)

    try:
        symbols = scan_file(file_path, language=language, max_size=max_size)
    except SymscanError as e:
        logger.info("scan_file_rejected", path=str(file_path), error=e.error_name)
        return {"error": e.message, "code": e.error_name, "details": e.details}
    except OSError as e:
        logger.warning("file_read_failed", path=str(file_path), error=str(e))
        return {"error": f"Failed to read {path}: {e}"}

    return {
        "file": str(file_path),
        "language": language,
        "symbol_count": len(symbols),
        "counts": count_by_type(symbols),
        "symbols": [s.to_dict() for s in symbols],
    }
