"""
Filesystem utilities for depregistry.

Helpers for walking the metadata tree and for writing the generated
registry. Every filesystem failure is normalized to
:class:`~depregistry.exceptions.FileOperationError`.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from datetime import datetime
from typing import List, Optional, Union

from depregistry.utils.logger import get_logger
from depregistry.constants import MAX_FILE_SIZE
from depregistry.exceptions import FileOperationError

logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path) -> Path:
    """Resolve ``path`` and make sure it is an existing regular file."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def _atomic_write(target: Path, content: str) -> None:
    """Write text to ``target`` via a temporary sibling file and ``replace``."""
    target.parent.mkdir(parents=True, exist_ok=True)
    temp_path: Optional[Path] = None

    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=str(target.parent),
            delete=False,
            prefix=f".{target.name}.",
            suffix=".tmp",
        ) as tmp:
            temp_path = Path(tmp.name)
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())

        temp_path.replace(target)

    except OSError as exc:
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
                logger.debug("Cleaned up temporary file: %s", temp_path)
            except OSError as cleanup_exc:
                logger.warning(
                    "Failed to clean up temporary file %s: %s",
                    temp_path,
                    cleanup_exc,
                )

        raise FileOperationError(
            f"Atomic write failed: {exc}",
            file_path=str(target),
            operation="write",
            original_error=exc,
        ) from exc


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Read a text file, refusing files larger than ``max_size`` bytes.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (``None`` disables it).
        encoding: Text encoding.

    Returns:
        File contents as a string.

    Raises:
        FileOperationError: The file is missing, too large or unreadable.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def read_text_if_exists(file_path: PathLike) -> Optional[str]:
    """Return the file's contents with trailing newlines removed.

    Returns ``None`` when ``file_path`` is not a regular file, which is how
    optional metadata files (such as ``requires``) are checked.
    """
    path = Path(file_path)
    if not path.is_file():
        return None
    return safe_read_file(path).rstrip("\r\n")


def list_subdirectories(directory: PathLike) -> List[Path]:
    """Return the immediate sub-directories of ``directory`` sorted by name.

    A missing directory yields an empty list.

    Raises:
        FileOperationError: The directory exists but cannot be listed.
    """
    root = Path(directory)
    if not root.is_dir():
        return []

    try:
        return sorted(
            (entry for entry in root.iterdir() if entry.is_dir()),
            key=lambda entry: entry.name,
        )
    except OSError as exc:
        raise FileOperationError(
            f"Failed to list directory: {exc}",
            file_path=str(root),
            operation="list",
            original_error=exc,
        ) from exc


def create_backup(file_path: PathLike) -> Path:
    """Copy ``file_path`` to ``<name>.<timestamp>.backup`` beside it."""
    path = _validated_file(Path(file_path))
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    backup_path = path.with_name(f"{path.name}.{timestamp}.backup")

    try:
        shutil.copy2(path, backup_path)
    except OSError as exc:
        raise FileOperationError(
            f"Failed to create backup: {exc}",
            file_path=str(path),
            operation="backup",
            original_error=exc,
        ) from exc

    logger.debug("Created backup: %s", backup_path)
    return backup_path


def restore_backup(backup_path: PathLike, target_path: PathLike) -> None:
    """Copy a backup over ``target_path``."""
    backup = Path(backup_path)
    target = Path(target_path)

    if not backup.is_file():
        raise FileOperationError(
            f"Backup file not found: {backup}",
            file_path=str(backup),
            operation="restore",
        )

    try:
        shutil.copy2(backup, target)
    except OSError as exc:
        raise FileOperationError(
            f"Failed to restore backup: {exc}",
            file_path=str(target),
            operation="restore",
            original_error=exc,
        ) from exc

    logger.debug("Restored %s from backup %s", target, backup)


def safe_write_file(
    file_path: PathLike,
    content: str,
    *,
    create_backup_file: bool = True,
) -> Optional[Path]:
    """Atomically write text to a file.

    When ``create_backup_file`` is set and the target already exists, a
    backup is taken first and restored if the write fails.

    Returns:
        Path to the created backup, if any.
    """
    path = Path(file_path)
    backup: Optional[Path] = None

    if create_backup_file and path.is_file():
        backup = create_backup(path)

    try:
        _atomic_write(path, content)
    except FileOperationError:
        if backup is not None:
            try:
                restore_backup(backup, path)
            except FileOperationError as restore_exc:
                logger.warning("Could not restore %s: %s", path, restore_exc)
        raise

    return backup
