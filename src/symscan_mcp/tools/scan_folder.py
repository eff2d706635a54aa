"""Scan local folder tool - walk, filter, scan each supported file."""

from pathlib import Path
from typing import Optional

import pathspec

from ..config import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_FILES
from ..errors import FileScanError
from ..logging import get_logger
from ..parser import LANGUAGE_EXTENSIONS, scan
from .scan_source import count_by_type

logger = get_logger(__name__)


# File patterns to skip
SKIP_PATTERNS = [
    "node_modules/", "vendor/", "venv/", ".venv/", "__pycache__/",
    "dist/", "build/", ".git/", ".tox/", ".mypy_cache/",
    "target/",
    ".gradle/",
    ".min.js", ".bundle.js",
    "package-lock.json", "yarn.lock", "go.sum",
    "generated/",
]

PRIORITY_DIRS = ["src/", "lib/", "pkg/", "cmd/", "internal/"]


def should_skip_file(path: str) -> bool:
    """Check if file should be skipped based on path patterns."""
    # Normalize path separators for matching
    normalized = path.replace("\\", "/")
    for pattern in SKIP_PATTERNS:
        if pattern in normalized:
            return True
    return False


def load_gitignore(folder_path: Path) -> Optional[pathspec.PathSpec]:
    """Parse the folder's .gitignore, if any."""
    gitignore = folder_path / ".gitignore"
    if not gitignore.is_file():
        return None
    try:
        lines = gitignore.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as e:
        logger.warning("gitignore_read_failed", path=str(gitignore), error=str(e))
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


def discover_local_files(
    folder_path: Path,
    max_files: int = DEFAULT_MAX_FILES,
    max_size: int = DEFAULT_MAX_FILE_SIZE,
) -> list[Path]:
    """Discover source files in a local folder.

    Args:
        folder_path: Root folder to scan
        max_files: Maximum number of files to return
        max_size: Maximum file size in bytes

    Returns:
        List of Path objects for source files
    """
    gitignore_spec = load_gitignore(folder_path)
    files = []

    for file_path in folder_path.rglob("*"):
        if not file_path.is_file():
            continue

        rel_path = file_path.relative_to(folder_path).as_posix()

        if should_skip_file(rel_path):
            continue

        if gitignore_spec is not None and gitignore_spec.match_file(rel_path):
            continue

        # Extension filter
        if file_path.suffix.lower() not in LANGUAGE_EXTENSIONS:
            continue

        # Size limit
        try:
            if file_path.stat().st_size > max_size:
                continue
        except OSError:
            continue

        files.append(file_path)

    # File count limit with prioritization
    if len(files) > max_files:
        def priority_key(file_path: Path) -> tuple:
            rel_path = file_path.relative_to(folder_path).as_posix()
            for i, prefix in enumerate(PRIORITY_DIRS):
                if rel_path.startswith(prefix):
                    return (i, rel_path.count("/"), rel_path)
            # Not in priority dir - sort after
            return (len(PRIORITY_DIRS), rel_path.count("/"), rel_path)

        files.sort(key=priority_key)
        files = files[:max_files]
    else:
        files.sort()

    return files


def scan_folder(
    path: str,
    max_files: int = DEFAULT_MAX_FILES,
    max_size: int = DEFAULT_MAX_FILE_SIZE,
) -> dict:
    """Scan every supported source file in a local folder.

    Args:
        path: Path to local folder (absolute or relative)
        max_files: Maximum number of files to scan
        max_size: Maximum file size in bytes

    Returns:
        Dict with per-file symbol tables
    """
    folder_path = Path(path).expanduser().resolve()

    if not folder_path.exists():
        e = FileScanError.not_found(path)
        return {"error": e.message, "code": e.error_name}

    if not folder_path.is_dir():
        e = FileScanError.not_a_directory(path)
        return {"error": e.message, "code": e.error_name}

    source_files = discover_local_files(folder_path, max_files=max_files, max_size=max_size)
    if not source_files:
        return {"error": "No source files found"}

    warnings = []
    files = {}
    languages = {}
    symbol_count = 0

    for file_path in source_files:
        rel_path = file_path.relative_to(folder_path).as_posix()
        language = LANGUAGE_EXTENSIONS[file_path.suffix.lower()]

        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("file_read_failed", path=rel_path, error=str(e))
            warnings.append(f"Failed to read {rel_path}: {e}")
            continue

        symbols = scan(content, language)
        languages[language] = languages.get(language, 0) + 1
        symbol_count += len(symbols)
        files[rel_path] = {
            "language": language,
            "counts": count_by_type(symbols),
            "symbols": [s.to_dict() for s in symbols],
        }

    logger.info("folder_scanned", path=str(folder_path), files=len(files), symbols=symbol_count)

    result = {
        "folder_path": str(folder_path),
        "file_count": len(files),
        "symbol_count": symbol_count,
        "languages": languages,
        "files": files,
    }

    if warnings:
        result["warnings"] = warnings

    if len(source_files) >= max_files:
        result["note"] = f"Folder has many files; scanned first {max_files}"

    return result
