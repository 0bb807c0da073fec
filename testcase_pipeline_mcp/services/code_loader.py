"""
Code Loader Service - Loads JavaScript source from a file or a string.

Size and content checks belong to the analyzer; the loader only deals with
where the text comes from.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..constants import ALLOWED_EXTENSIONS
from .base import ErrorCode, ServiceResult


@dataclass(frozen=True)
class LoadedCode:
    """
    Result of successfully loading code.

    Attributes:
        content: The source code
        module_name: Name used in the generated require() line
        source_path: Original file path (None if loaded from string)
    """
    content: str
    module_name: str
    source_path: str | None = None


class CodeLoader:
    """
    Loads source code from files or direct input.

    Handles:
    - File path validation (extension, existence, permissions)
    - Module name extraction
    - Fallback to direct code when the file is unavailable
    """

    def __init__(self, allowed_extensions: frozenset[str] = ALLOWED_EXTENSIONS):
        self._allowed_extensions = allowed_extensions

    def load(
        self,
        code: str | None = None,
        file_path: str | None = None
    ) -> ServiceResult[LoadedCode]:
        """
        Load code from file path or direct input.

        Priority:
        1. If file_path provided and file exists → load from file
        2. If file_path provided but file missing → use code as fallback
        3. If only code provided → use code directly
        4. If neither provided → error
        """
        if file_path:
            return self._load_from_file(file_path, fallback_code=code)
        elif code is not None:
            return ServiceResult.ok(LoadedCode(content=code, module_name="module"))
        else:
            return ServiceResult.fail(
                ErrorCode.MISSING_INPUT,
                "Please provide either 'file_path' or 'code'"
            )

    def _load_from_file(
        self,
        file_path: str,
        fallback_code: str | None = None
    ) -> ServiceResult[LoadedCode]:
        path = Path(file_path)
        module_name = self._extract_module_name(file_path)

        if path.suffix not in self._allowed_extensions:
            return ServiceResult.fail(
                ErrorCode.INVALID_EXTENSION,
                f"Only JavaScript files allowed (got {path.suffix or 'no extension'})",
                details={
                    "extension": path.suffix,
                    "allowed": sorted(self._allowed_extensions)
                }
            )

        fallback = None
        if fallback_code is not None:
            fallback = ServiceResult.ok(LoadedCode(content=fallback_code, module_name=module_name))

        if not path.exists():
            return fallback or ServiceResult.fail(
                ErrorCode.FILE_NOT_FOUND,
                f"File not found: {file_path}"
            )

        if not path.is_file():
            return ServiceResult.fail(
                ErrorCode.INVALID_INPUT,
                f"Path is not a file: {file_path}"
            )

        try:
            content = path.read_text(encoding="utf-8")
        except PermissionError:
            return fallback or ServiceResult.fail(
                ErrorCode.PERMISSION_DENIED,
                f"Permission denied: {file_path}"
            )
        except UnicodeDecodeError:
            return fallback or ServiceResult.fail(
                ErrorCode.INVALID_INPUT,
                f"File is not UTF-8 text: {file_path}"
            )
        except OSError as e:
            return fallback or ServiceResult.fail(
                ErrorCode.INTERNAL_ERROR,
                f"Error reading file: {e}"
            )

        return ServiceResult.ok(LoadedCode(
            content=content,
            module_name=module_name,
            source_path=file_path
        ))

    def _extract_module_name(self, file_path: str) -> str:
        """Module name is the filename without extension."""
        return Path(file_path).stem
