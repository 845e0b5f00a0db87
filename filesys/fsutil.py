"""
Filesystem Utilities

Helpers for building and checking directory structures through any
FileSystem backend, mostly for test setup:

    >>> fs = VirtualFileSystem()
    >>> create_structure(fs, files={'/a/b/f.txt': b'Hello'}, dirs=['/a/c'])
    >>> verify_file_content(fs, '/a/b/f.txt', b'Hello')

Author: YSNRFD
Version: 1.0.0
"""

from typing import Iterable, Mapping, Optional

from filesys.base import FileSystem
from filesys.exceptions import ContentMismatchError


ABBREVIATE_AT = 20


def create_structure(
    fs: FileSystem,
    files: Optional[Mapping[str, bytes]] = None,
    dirs: Optional[Iterable[str]] = None
) -> None:
    """
    Create many files and directories.

    Files are written first (with their parent directories), then the
    directories. The first error stops the process and is raised.
    """
    if files is not None:
        put_files(fs, files)
    if dirs is not None:
        mkdir_many(fs, dirs)


def put_files(fs: FileSystem, files: Mapping[str, bytes]) -> None:
    """Create many files, including missing parent directories."""
    for path, data in files.items():
        put_file(fs, path, data)


def put_file(fs: FileSystem, path: str, data: bytes) -> None:
    """Like fs.write_file, but also creates all missing directories."""
    fs.put_file(path, data)


def mkdir_many(fs: FileSystem, paths: Iterable[str]) -> None:
    """Run mkdir_all for every path."""
    for path in paths:
        fs.mkdir_all(path)


def _abbreviate(data: bytes) -> str:
    text = data.decode('utf-8', errors='replace')
    if len(data) > ABBREVIATE_AT:
        text = data[:17].decode('utf-8', errors='replace') + '...'
    return text


def verify_file_content(fs: FileSystem, path: str, data: bytes) -> None:
    """
    Check that a file exists and holds exactly data.

    Raises:
        FileNotFoundError and friends: The file cannot be read
        ContentMismatchError: The content differs
    """
    content = fs.read_file(path)
    if content != data:
        raise ContentMismatchError(path, expected=_abbreviate(data), actual=_abbreviate(content))
