"""
OS File System Module

Backend that delegates to the host operating system through os, io and
shutil. It satisfies the same FileSystem contract as the virtual backend:
- OSError is translated into the filesys exception classes
- rename applies the same overwrite and "into itself" rules
- directory listings are sorted by name and paginated the same way

Relative paths are resolved against the instance's working directory,
never against the process's, so change_dir does not touch global state.

Author: YSNRFD
Version: 1.0.0
"""

import errno
import io
import os
import shutil
from contextlib import contextmanager
from datetime import datetime
from typing import Optional, List, Tuple, Union

from filesys.base import FileSystem, File, OpenMode
from filesys.fileinfo import FileInfo
from filesys.exceptions import (
    DirectoryNotEmptyError,
    FileExistsError,
    FileNotFoundError,
    FileSystemException,
    HandleClosedError,
    InvalidArgumentError,
    InvalidPathError,
    IsADirectoryError,
    NegativeSeekError,
    NotADirectoryError,
    NotReadableError,
    NotWritableError,
    PermissionDeniedError,
    SeekOverflowError,
)
from filesys.logger import get_logger
from filesys.virtual.handle import DirectoryIterator, MAX_POSITION


_OPEN_FLAGS = {
    OpenMode.READ: (os.O_RDONLY, 'r'),
    OpenMode.WRITE: (os.O_WRONLY, 'w'),
    OpenMode.READ_WRITE: (os.O_RDWR, 'r+'),
}


def translate_os_error(
    error: OSError,
    operation: str,
    path: str,
    new_path: Optional[str] = None
) -> FileSystemException:
    """
    Map an OSError onto the matching FileSystemException subclass.

    Unknown errno values become a plain FileSystemException carrying the
    errno and the system's message.
    """
    code = error.errno

    if code == errno.ENOENT:
        return FileNotFoundError(path, operation=operation, new_path=new_path)
    if code == errno.EEXIST:
        return FileExistsError(path, operation=operation, new_path=new_path)
    if code in (errno.EACCES, errno.EPERM):
        return PermissionDeniedError(path, operation=operation, new_path=new_path)
    if code == errno.ENOTDIR:
        return NotADirectoryError(path, operation=operation, new_path=new_path)
    if code == errno.EISDIR:
        return IsADirectoryError(path, operation=operation)
    if code == errno.ENOTEMPTY:
        return DirectoryNotEmptyError(path, operation=operation)
    if code == errno.EINVAL:
        return InvalidArgumentError(error.strerror or "invalid argument", path=path, operation=operation)

    return FileSystemException(
        message=error.strerror or str(error),
        path=path,
        operation=operation,
        new_path=new_path,
        context={'errno': code}
    )


@contextmanager
def _translated(operation: str, path: str, new_path: Optional[str] = None):
    try:
        yield
    except OSError as e:
        raise translate_os_error(e, operation, path, new_path) from e


class OsFileHandle(File):
    """Handle over an io.FileIO opened by OsFileSystem."""

    def __init__(self, raw: io.FileIO, name: str, can_read: bool, can_write: bool):
        self._raw = raw
        self.name = name
        self.can_read = can_read
        self.can_write = can_write

    def __repr__(self) -> str:
        state = 'closed' if self.closed else 'open'
        return f"<OsFileHandle name={self.name!r} {state}>"

    @property
    def closed(self) -> bool:
        return self._raw.closed

    def _check(self, operation: str) -> None:
        if self._raw.closed:
            raise HandleClosedError(self.name, operation=operation)

    def read(self, size: int = -1) -> bytes:
        self._check('read')
        if not self.can_read:
            raise NotReadableError(self.name, operation='read')
        with _translated('read', self.name):
            return self._raw.read(size) or b''

    def readinto(self, buffer) -> int:
        self._check('read')
        if not self.can_read:
            raise NotReadableError(self.name, operation='read')
        with _translated('read', self.name):
            return self._raw.readinto(buffer) or 0

    def write(self, data) -> int:
        self._check('write')
        if not self.can_write:
            raise NotWritableError(self.name, operation='write')
        payload = memoryview(data).tobytes()
        if not payload:
            return 0
        with _translated('write', self.name):
            written = 0
            while written < len(payload):
                written += self._raw.write(payload[written:])
            return written

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        self._check('seek')
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise InvalidArgumentError(
                f"offset must be an integer, got {type(offset).__name__}",
                path=self.name,
                operation='seek'
            )
        if whence not in (os.SEEK_SET, os.SEEK_CUR, os.SEEK_END):
            raise InvalidArgumentError(
                f"invalid whence: {whence!r}", path=self.name, operation='seek'
            )
        with _translated('seek', self.name):
            if whence == os.SEEK_SET:
                position = offset
            elif whence == os.SEEK_CUR:
                position = self._raw.tell() + offset
            else:
                position = os.fstat(self._raw.fileno()).st_size + offset
            if position < 0:
                raise NegativeSeekError(self.name, position)
            if position > MAX_POSITION:
                raise SeekOverflowError(self.name, position)
            return self._raw.seek(position, os.SEEK_SET)

    def tell(self) -> int:
        self._check('tell')
        with _translated('tell', self.name):
            return self._raw.tell()

    def stat(self) -> FileInfo:
        self._check('stat')
        with _translated('stat', self.name):
            result = os.fstat(self._raw.fileno())
        return FileInfo.from_stat_result(os.path.basename(self.name.rstrip(os.sep)), result)

    def readdir(self, n: int = -1) -> Tuple[List[FileInfo], bool]:
        self._check('readdir')
        raise NotADirectoryError(self.name, operation='readdir')

    def close(self) -> None:
        with _translated('close', self.name):
            self._raw.close()


class OsDirectoryHandle(File):
    """Listing-only handle over a host directory."""

    def __init__(self, path: str, name: str):
        self._path = path
        self.name = name
        self._closed = False
        self._iterator = DirectoryIterator(lambda: _list_directory(path, name))

    def __repr__(self) -> str:
        state = 'closed' if self._closed else 'open'
        return f"<OsDirectoryHandle name={self.name!r} {state}>"

    @property
    def closed(self) -> bool:
        return self._closed

    def _check(self, operation: str) -> None:
        if self._closed:
            raise HandleClosedError(self.name, operation=operation)

    def _reject(self, operation: str):
        self._check(operation)
        raise IsADirectoryError(self.name, operation=operation)

    def read(self, size: int = -1) -> bytes:
        self._reject('read')

    def readinto(self, buffer) -> int:
        self._reject('read')

    def write(self, data) -> int:
        self._reject('write')

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        self._reject('seek')

    def tell(self) -> int:
        self._reject('tell')

    def stat(self) -> FileInfo:
        self._check('stat')
        with _translated('stat', self.name):
            result = os.stat(self._path)
        return FileInfo.from_stat_result(os.path.basename(os.path.normpath(self._path)), result)

    def readdir(self, n: int = -1) -> Tuple[List[FileInfo], bool]:
        self._check('readdir')
        return self._iterator.next_page(n)

    def close(self) -> None:
        self._closed = True


def _list_directory(path: str, name: str) -> List[FileInfo]:
    with _translated('readdir', name):
        with os.scandir(path) as entries:
            infos = [
                FileInfo.from_stat_result(entry.name, entry.stat(follow_symlinks=False))
                for entry in entries
            ]
    infos.sort(key=lambda info: info.name)
    return infos


class OsFileSystem(FileSystem):
    """
    Filesystem backed by the host OS.

    Example:
        >>> fs = OsFileSystem('/tmp')
        >>> fs.put_file('demo/a.txt', b'Hello')
        >>> fs.read_file('/tmp/demo/a.txt')
        b'Hello'
    """

    def __init__(self, working_dir: Optional[str] = None):
        self._working_dir = os.path.abspath(working_dir or os.getcwd())
        self._logger = get_logger('osfs')

    def __repr__(self) -> str:
        return f"<OsFileSystem cwd={self._working_dir!r}>"

    def _abs(self, path: str) -> str:
        """Anchor path at the working directory, keeping a trailing separator."""
        if not path:
            return path
        return os.path.join(self._working_dir, path)

    def open(self, path: str, mode: Union[OpenMode, str] = OpenMode.READ) -> File:
        try:
            mode = OpenMode(mode)
        except ValueError:
            raise InvalidArgumentError(
                f"invalid open mode: {mode!r}", path=path, operation='open'
            ) from None

        target = self._abs(path)
        with _translated('open', path):
            if os.path.isdir(target):
                return OsDirectoryHandle(target, path)
            flags, raw_mode = _OPEN_FLAGS[mode]
            fd = os.open(target, flags)
            raw = io.FileIO(fd, raw_mode, closefd=True)
        return OsFileHandle(raw, path, can_read=mode.readable, can_write=mode.writable)

    def create(self, path: str) -> File:
        if path.endswith(os.sep):
            raise InvalidPathError(path, operation='create', reason="path names a directory")
        with _translated('create', path):
            raw = io.FileIO(self._abs(path), 'w+')
        return OsFileHandle(raw, path, can_read=True, can_write=True)

    def mkdir(self, path: str, mode: int = 0o777) -> None:
        target = self._abs(path)
        if target and os.path.dirname(os.path.abspath(target)) == os.path.abspath(target):
            return
        with _translated('mkdir', path):
            os.mkdir(target, mode)
        self._logger.debug("Created directory", context={'path': target})

    def mkdir_all(self, path: str, mode: int = 0o777) -> None:
        target = self._abs(path) or self._working_dir
        with _translated('mkdir', path):
            if os.path.exists(target) and not os.path.isdir(target):
                raise NotADirectoryError(path, operation='mkdir')
            os.makedirs(target, mode, exist_ok=True)

    def remove(self, path: str) -> None:
        target = self._abs(path)
        with _translated('remove', path):
            if os.path.isdir(target) and not os.path.islink(target):
                os.rmdir(target)
            else:
                os.remove(target)
        self._logger.debug("Removed resource", context={'path': target})

    def remove_all(self, path: str) -> None:
        target = self._abs(path)
        with _translated('remove', path):
            if os.path.isdir(target) and not os.path.islink(target):
                shutil.rmtree(target)
            else:
                os.remove(target)
        self._logger.debug("Removed tree", context={'path': target})

    def rename(self, old_path: str, new_path: str) -> None:
        operation = 'rename'
        if not old_path or not new_path:
            raise InvalidPathError(
                old_path, operation=operation, new_path=new_path, reason="empty path"
            )

        source = os.path.normpath(self._abs(old_path))
        target = os.path.normpath(self._abs(new_path))
        with _translated(operation, old_path, new_path):
            os.lstat(source)
            source_is_dir = os.path.isdir(source)
            if source == target:
                return
            if target.startswith(source + os.sep):
                raise InvalidPathError(
                    old_path,
                    operation=operation,
                    new_path=new_path,
                    reason="invalid destination"
                )
            if os.path.lexists(target) and (source_is_dir or os.path.isdir(target)):
                raise FileExistsError(old_path, operation=operation, new_path=new_path)
            os.rename(source, target)
        self._logger.debug("Renamed resource", context={'from': source, 'to': target})

    def stat(self, path: str) -> FileInfo:
        target = self._abs(path)
        with _translated('stat', path):
            result = os.stat(target)
        return FileInfo.from_stat_result(os.path.basename(os.path.normpath(target)), result)

    def chtimes(
        self,
        path: str,
        atime: Union[float, datetime],
        mtime: Union[float, datetime]
    ) -> None:
        if isinstance(atime, datetime):
            atime = atime.timestamp()
        if isinstance(mtime, datetime):
            mtime = mtime.timestamp()
        with _translated('chtimes', path):
            os.utime(self._abs(path), (atime, mtime))

    def read_dir(self, path: str) -> List[FileInfo]:
        if path == '':
            raise InvalidPathError(path, operation='readdir', reason="empty path")
        return _list_directory(self._abs(path), path)

    def read_file(self, path: str) -> bytes:
        with _translated('readfile', path):
            with open(self._abs(path), 'rb') as f:
                return f.read()

    def write_file(self, path: str, data: bytes, mode: int = 0o666) -> None:
        if path.endswith(os.sep):
            raise InvalidPathError(path, operation='writefile', reason="path names a directory")
        payload = memoryview(data).tobytes()
        with _translated('writefile', path):
            fd = os.open(self._abs(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            with io.FileIO(fd, 'w', closefd=True) as raw:
                written = 0
                while written < len(payload):
                    written += raw.write(payload[written:])
        self._logger.debug("Wrote file", context={'path': path, 'size': len(payload)})

    def put_file(self, path: str, data: bytes, mode: int = 0o666) -> None:
        directory = os.path.dirname(path)
        if directory:
            self.mkdir_all(directory)
        self.write_file(path, data, mode)

    def change_dir(self, path: str) -> 'OsFileSystem':
        if path == '':
            raise InvalidPathError(path, operation='cd', reason="empty path")
        target = os.path.normpath(self._abs(path))
        with _translated('cd', path):
            if not os.path.isdir(target):
                os.stat(target)
                raise NotADirectoryError(path, operation='cd')
        return OsFileSystem(target)

    def current_dir(self) -> str:
        return self._working_dir
