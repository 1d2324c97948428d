"""File system abstraction for the icon sprite compiler.

Provides a consistent interface for the file system operations the compiler
performs: reading icon sources, writing the sprite, copying component
templates and creating directories. This module works with path_utils.py so
that path normalization is handled the same way everywhere.
"""

import os
import shutil
import tempfile
from pathlib import Path

from icon_sprite.utils.path_utils import path_resolver

# Type aliases for clarity and documentation
PathLike = str | Path
FileContent = str | bytes


def read_text(file_path: PathLike) -> str:
    """Read text content from a file.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        The text content of the file

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read due to permissions
        UnicodeDecodeError: If the file content cannot be decoded as text
    """
    normalized_path = path_resolver.normalize_path(file_path)
    with open(normalized_path, encoding="utf-8") as f:
        return f.read()


def read_head(file_path: PathLike, size: int) -> bytes:
    """Read at most ``size`` leading bytes of a file.

    Args:
        file_path: Path to the file (string or Path object)
        size: Maximum number of bytes to read

    Returns:
        The leading bytes of the file (shorter if the file is smaller)

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read due to permissions
    """
    normalized_path = path_resolver.normalize_path(file_path)
    with open(normalized_path, "rb") as f:
        return f.read(size)


def write_text(file_path: PathLike, content: str, make_dirs: bool = True) -> None:
    """Write text content to a file.

    Args:
        file_path: Path to the file (string or Path object)
        content: Text content to write
        make_dirs: Whether to create parent directories if they don't exist

    Raises:
        FileNotFoundError: If the parent directory does not exist and make_dirs is False
        PermissionError: If the file cannot be written due to permissions
    """
    normalized_path = path_resolver.normalize_path(file_path)

    if make_dirs:
        ensure_dir_exists(normalized_path.parent)

    with open(normalized_path, "w", encoding="utf-8") as f:
        f.write(content)


def write_bytes(file_path: PathLike, content: bytes, make_dirs: bool = True) -> None:
    """Write binary content to a file.

    Args:
        file_path: Path to the file (string or Path object)
        content: Binary content to write
        make_dirs: Whether to create parent directories if they don't exist
    """
    normalized_path = path_resolver.normalize_path(file_path)

    if make_dirs:
        ensure_dir_exists(normalized_path.parent)

    with open(normalized_path, "wb") as f:
        f.write(content)


def ensure_dir_exists(dir_path: PathLike) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Wrapper around path_resolver.ensure_dir_exists for API consistency.

    Args:
        dir_path: Directory path (string or Path object)

    Returns:
        Path to the directory
    """
    return path_resolver.ensure_dir_exists(dir_path)


def file_exists(file_path: PathLike) -> bool:
    """Check if a file exists.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        True if the file exists, False otherwise
    """
    normalized_path = path_resolver.normalize_path(file_path)
    return normalized_path.exists() and normalized_path.is_file()


def list_files(dir_path: PathLike, pattern: str = "*") -> list[Path]:
    """List files directly inside a directory, sorted by name.

    Args:
        dir_path: Path to the directory (string or Path object)
        pattern: Glob pattern to match files

    Returns:
        Sorted list of Path objects for matching files (directories excluded)

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path exists but is not a directory
    """
    normalized_path = path_resolver.normalize_path(dir_path)

    if not normalized_path.exists():
        raise FileNotFoundError(f"Directory not found: {normalized_path}")

    if not normalized_path.is_dir():
        raise NotADirectoryError(f"Not a directory: {normalized_path}")

    return sorted(p for p in normalized_path.glob(pattern) if p.is_file())


def copy_file(src_path: PathLike, dst_path: PathLike, make_dirs: bool = True) -> None:
    """Copy a file from source to destination.

    Args:
        src_path: Path to the source file (string or Path object)
        dst_path: Path to the destination file (string or Path object)
        make_dirs: Whether to create parent directories for the destination if they don't exist

    Raises:
        FileNotFoundError: If the source file does not exist
        PermissionError: If the source cannot be read or the destination cannot be written
    """
    src = path_resolver.normalize_path(src_path)
    dst = path_resolver.normalize_path(dst_path)

    if not src.is_file():
        raise FileNotFoundError(f"Source file not found: {src}")

    if make_dirs:
        ensure_dir_exists(dst.parent)

    shutil.copyfile(src, dst)


def create_temp_file(
    directory: PathLike, suffix: str | None = None, prefix: str | None = None
) -> Path:
    """Create an empty temporary file in ``directory``.

    Args:
        directory: Directory to create the file in
        suffix: Optional suffix for the filename
        prefix: Optional prefix for the filename

    Returns:
        Path to the created temporary file
    """
    temp_dir = ensure_dir_exists(directory)

    temp_file = tempfile.NamedTemporaryFile(
        dir=temp_dir, prefix=prefix, suffix=suffix, delete=False
    )
    temp_file.close()

    return Path(temp_file.name)


def atomic_write(file_path: PathLike, content: FileContent, make_dirs: bool = True) -> None:
    """Write to a file atomically by using a temporary file.

    The target is either completely replaced or left untouched, so an
    interrupted run never leaves a truncated sprite behind.

    Args:
        file_path: Path to the file (string or Path object)
        content: Content to write (string or bytes)
        make_dirs: Whether to create parent directories if they don't exist

    Raises:
        FileNotFoundError: If the parent directory does not exist and make_dirs is False
        PermissionError: If the file cannot be written due to permissions
    """
    normalized_path = path_resolver.normalize_path(file_path)

    if make_dirs:
        ensure_dir_exists(normalized_path.parent)
    elif not normalized_path.parent.is_dir():
        raise FileNotFoundError(f"Directory not found: {normalized_path.parent}")

    temp_file = create_temp_file(
        normalized_path.parent, suffix=normalized_path.suffix, prefix=".tmp-"
    )

    try:
        if isinstance(content, bytes):
            write_bytes(temp_file, content, make_dirs=False)
        else:
            write_text(temp_file, content, make_dirs=False)

        # Atomic on POSIX; os.replace also overwrites on Windows
        os.replace(temp_file, normalized_path)
    except Exception:
        if temp_file.exists():
            temp_file.unlink()
        raise
