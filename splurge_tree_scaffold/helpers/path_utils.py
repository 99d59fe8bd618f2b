"""Path validation helpers for tree and output files.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import platform
from pathlib import Path

from ..exceptions import ValidationError

_INVALID_NAME_CHARS = '<>:"|?*'


class PathValidationError(ValidationError):
    """Raised when path validation fails."""

    def __init__(self, message: str, path: str, validation_type: str = "path"):
        self.path = path
        super().__init__(message, validation_type, field=path)


def validate_source_path(source_path: str | Path) -> Path:
    """Validate and normalize the path of a ``.tree`` file.

    The file itself is not opened; a missing file is reported by the reader.

    Raises:
        PathValidationError: If the path is empty, a directory or contains
            characters no file name may hold.
    """
    path = Path(source_path)
    path_str = str(source_path)

    if not path_str.strip():
        raise PathValidationError("Source path cannot be empty", path_str, "empty_path")

    if any(char in path.name for char in _INVALID_NAME_CHARS):
        raise PathValidationError(
            f"Path contains invalid characters: {_INVALID_NAME_CHARS}", path_str, "invalid_chars"
        )

    if path.is_dir():
        raise PathValidationError(f"Source path is a directory: {path_str}", path_str, "is_directory")

    return path


def validate_target_path(target_path: str | Path) -> Path:
    """Validate an output path without touching the filesystem.

    Raises:
        PathValidationError: If the path is empty or has an invalid name.
    """
    path = Path(target_path)

    if not str(target_path).strip():
        raise PathValidationError("Target path cannot be empty", str(target_path), "empty_path")

    if any(char in path.name for char in _INVALID_NAME_CHARS):
        raise PathValidationError(
            f"Path contains invalid characters: {_INVALID_NAME_CHARS}", str(path), "invalid_chars"
        )

    return path


def ensure_parent_dir(target_path: str | Path) -> None:
    """Create the parent directory of ``target_path`` if needed."""
    path = Path(target_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PathValidationError(f"Cannot create parent directory: {e}", str(path.parent), "parent_creation") from e


def suggest_path_fixes(error: Exception, path: str) -> list[str]:
    """Return hints for resolving a file access error on ``path``."""
    suggestions = []
    path_obj = Path(path)

    if isinstance(error, FileNotFoundError):
        if not path_obj.parent.exists():
            suggestions.append(f"Create the parent directory: {path_obj.parent}")
        suggestions.append(f"Check if the path exists: {path}")

    elif isinstance(error, PermissionError):
        suggestions.append(f"Check read/write permissions for: {path}")
        if platform.system() == "Windows":
            suggestions.append("Check if file is open in another program")

    elif isinstance(error, UnicodeDecodeError):
        suggestions.append("Tree files must be encoded as UTF-8")

    elif isinstance(error, OSError):
        suggestions.append(f"Check if path contains valid characters: {path}")

    return suggestions
