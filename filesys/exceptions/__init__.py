"""
Filesys Exception Hierarchy

All errors raised by the filesystem backends and their handles inherit from
FileSystemException. Each class maps to one error kind so callers can
dispatch with ``except`` clauses instead of inspecting messages.

Architecture:
    FileSystemException (Base)
    ├── FileNotFoundError
    ├── FileExistsError
    ├── PermissionDeniedError
    ├── DirectoryNotEmptyError
    ├── InvalidPathError
    ├── IsADirectoryError
    ├── NotADirectoryError
    ├── HandleClosedError
    ├── NotReadableError
    ├── NotWritableError
    ├── NegativeSeekError
    ├── SeekOverflowError
    ├── InvalidArgumentError
    └── ContentMismatchError

Note that several names shadow Python builtins on purpose; import them
from this package explicitly.
"""

from .fs_exceptions import (
    FileSystemException,
    FileNotFoundError,
    FileExistsError,
    PermissionDeniedError,
    DirectoryNotEmptyError,
    InvalidPathError,
    IsADirectoryError,
    NotADirectoryError,
    HandleClosedError,
    NotReadableError,
    NotWritableError,
    NegativeSeekError,
    SeekOverflowError,
    InvalidArgumentError,
    ContentMismatchError,
)

__all__ = [
    "FileSystemException",
    "FileNotFoundError",
    "FileExistsError",
    "PermissionDeniedError",
    "DirectoryNotEmptyError",
    "InvalidPathError",
    "IsADirectoryError",
    "NotADirectoryError",
    "HandleClosedError",
    "NotReadableError",
    "NotWritableError",
    "NegativeSeekError",
    "SeekOverflowError",
    "InvalidArgumentError",
    "ContentMismatchError",
]
