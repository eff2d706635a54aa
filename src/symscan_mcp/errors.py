"""Error types with typed error codes.

Error code ranges:
- 1xxx: Language selection
- 2xxx: File access
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Language (1xxx)
    UNSUPPORTED_LANGUAGE = 1001
    UNKNOWN_EXTENSION = 1002

    # Files (2xxx)
    FILE_NOT_FOUND = 2001
    NOT_A_FILE = 2002
    NOT_A_DIRECTORY = 2003
    FILE_TOO_LARGE = 2004

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True)
class SymscanError(Exception):
    """Base error with structured context for MCP responses."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'UNSUPPORTED_LANGUAGE')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON/MCP responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class UnsupportedLanguage(SymscanError):
    """The language selector does not match any known scanner."""

    @property
    def language(self) -> str:
        return self.details.get("language", "")

    @classmethod
    def for_language(cls, language: str) -> "UnsupportedLanguage":
        from .parser.languages import SUPPORTED_LANGUAGES

        return cls(
            code=ErrorCode.UNSUPPORTED_LANGUAGE,
            message=f"Unsupported language: {language!r}",
            details={"language": language, "supported": list(SUPPORTED_LANGUAGES)},
        )

    @classmethod
    def for_extension(cls, filename: str) -> "UnsupportedLanguage":
        return cls(
            code=ErrorCode.UNKNOWN_EXTENSION,
            message=f"Cannot detect language from file name: {filename}",
            details={"language": "", "file": filename},
        )


class FileScanError(SymscanError):
    """A file or folder could not be scanned."""

    @classmethod
    def not_found(cls, path: str) -> "FileScanError":
        return cls(
            code=ErrorCode.FILE_NOT_FOUND,
            message=f"Path not found: {path}",
            details={"path": path},
        )

    @classmethod
    def not_a_file(cls, path: str) -> "FileScanError":
        return cls(
            code=ErrorCode.NOT_A_FILE,
            message=f"Path is not a file: {path}",
            details={"path": path},
        )

    @classmethod
    def not_a_directory(cls, path: str) -> "FileScanError":
        return cls(
            code=ErrorCode.NOT_A_DIRECTORY,
            message=f"Path is not a directory: {path}",
            details={"path": path},
        )

    @classmethod
    def too_large(cls, path: str, size: int, limit: int) -> "FileScanError":
        return cls(
            code=ErrorCode.FILE_TOO_LARGE,
            message=f"File exceeds {limit} bytes: {path}",
            details={"path": path, "size": size, "limit": limit},
        )
