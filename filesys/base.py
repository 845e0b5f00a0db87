"""
Filesystem Interfaces

Defines the operation contract shared by every backend:
- FileSystem: path-based operations (create, open, mkdir, rename, ...)
- File: a handle returned by open/create (read, write, seek, readdir, ...)
- OpenMode: access modes accepted by FileSystem.open

Calling code should depend on these interfaces only, so the in-memory
backend and the OS backend stay interchangeable.

Author: YSNRFD
Version: 1.0.0
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from filesys.exceptions import (
    FileNotFoundError,
    FileExistsError,
    PermissionDeniedError,
    NotADirectoryError,
)

if TYPE_CHECKING:
    from filesys.fileinfo import FileInfo


class OpenMode(Enum):
    """File open modes."""
    READ = 'r'
    WRITE = 'w'
    READ_WRITE = 'r+'

    @property
    def readable(self) -> bool:
        return self in (OpenMode.READ, OpenMode.READ_WRITE)

    @property
    def writable(self) -> bool:
        return self in (OpenMode.WRITE, OpenMode.READ_WRITE)


class File(ABC):
    """
    Abstract handle to an open file or directory.

    File handles support read/write/seek; directory handles support
    readdir. Calling the other family of methods raises
    IsADirectoryError or NotADirectoryError respectively.

    Handles are context managers:
        >>> with fs.create('/tmp/a.txt') as f:
        ...     f.write(b'data')
    """

    name: str

    @abstractmethod
    def read(self, size: int = -1) -> bytes:
        """
        Read up to size bytes from the cursor (all remaining if size < 0).

        Returns b'' at end of file.
        """

    @abstractmethod
    def readinto(self, buffer) -> int:
        """Read into a writable bytes-like object; returns bytes copied."""

    @abstractmethod
    def write(self, data) -> int:
        """Write bytes at the cursor; returns the number of bytes written."""

    @abstractmethod
    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the cursor and return the new absolute position."""

    @abstractmethod
    def tell(self) -> int:
        """Return the current cursor position."""

    @abstractmethod
    def stat(self) -> 'FileInfo':
        """Return a FileInfo snapshot for the handle's entry."""

    @abstractmethod
    def readdir(self, n: int = -1) -> Tuple[List['FileInfo'], bool]:
        """
        Read the next page of directory entries.

        Returns:
            (entries, eof) where eof is True when n > 0 and fewer than
            n entries remained.
        """

    @abstractmethod
    def close(self) -> None:
        """Close the handle. Closing twice is allowed."""

    @property
    @abstractmethod
    def closed(self) -> bool:
        """True once close() has been called."""

    def __enter__(self) -> 'File':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class FileSystem(ABC):
    """
    Abstract filesystem.

    All paths are strings using '/' as separator. Relative paths are
    resolved against the instance's working directory (see change_dir).
    Every failure is raised as a FileSystemException subclass.
    """

    @abstractmethod
    def open(self, path: str, mode: OpenMode = OpenMode.READ) -> File:
        """Open an existing file or directory."""

    @abstractmethod
    def create(self, path: str) -> File:
        """Create or truncate a file and return a read-write handle."""

    @abstractmethod
    def mkdir(self, path: str, mode: int = 0o777) -> None:
        """Create a single directory; the parent must exist."""

    @abstractmethod
    def mkdir_all(self, path: str, mode: int = 0o777) -> None:
        """Create a directory and every missing parent."""

    @abstractmethod
    def remove(self, path: str) -> None:
        """Remove a file or an empty directory."""

    @abstractmethod
    def remove_all(self, path: str) -> None:
        """Remove a file or a directory with everything under it."""

    @abstractmethod
    def rename(self, old_path: str, new_path: str) -> None:
        """Move or rename a file or directory."""

    @abstractmethod
    def stat(self, path: str) -> 'FileInfo':
        """Return a FileInfo for the entry at path."""

    @abstractmethod
    def chtimes(self, path: str, atime: float, mtime: float) -> None:
        """Set access and modification times (seconds since the epoch)."""

    @abstractmethod
    def read_dir(self, path: str) -> List['FileInfo']:
        """List a directory's entries sorted by name."""

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """Return the full content of a file."""

    @abstractmethod
    def write_file(self, path: str, data: bytes, mode: int = 0o666) -> None:
        """Replace the full content of a file, creating it if absent."""

    @abstractmethod
    def put_file(self, path: str, data: bytes, mode: int = 0o666) -> None:
        """Like write_file, but also creates missing parent directories."""

    @abstractmethod
    def change_dir(self, path: str) -> 'FileSystem':
        """Return a filesystem sharing this one's tree, working in path."""

    @abstractmethod
    def current_dir(self) -> str:
        """Return the absolute path of the working directory."""

    # Queries built on stat

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        try:
            self.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except PermissionDeniedError:
            # Only the root is rejected this way, and the root exists
            return True
        return True

    def is_directory(self, path: str) -> bool:
        """Check if a path is a directory."""
        try:
            return self.stat(path).is_dir
        except (FileNotFoundError, NotADirectoryError):
            return False
        except PermissionDeniedError:
            return True

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        try:
            return not self.stat(path).is_dir
        except (FileNotFoundError, NotADirectoryError, PermissionDeniedError):
            return False

    # Error classification

    @staticmethod
    def is_not_exist(error: Optional[BaseException]) -> bool:
        """True if error reports a missing file or directory."""
        return isinstance(error, FileNotFoundError)

    @staticmethod
    def is_exist(error: Optional[BaseException]) -> bool:
        """True if error reports an entry that already exists."""
        return isinstance(error, FileExistsError)

    @staticmethod
    def is_permission(error: Optional[BaseException]) -> bool:
        """True if error reports a denied permission."""
        return isinstance(error, PermissionDeniedError)
