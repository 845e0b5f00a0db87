"""
Handle Module

Cursor objects over a single resource of the virtual tree:
- FileHandle: positioned read/write/seek over a file's byte buffer
- DirectoryHandle: paginated listing of a directory's children
- DirectoryIterator: the listing cursor used by DirectoryHandle

A handle keeps a direct reference to its resource. If the resource is
removed from the tree while the handle is open, the handle keeps working
on the detached resource, the same way an open file survives unlink.

Author: YSNRFD
Version: 1.0.0
"""

import os
import sys
from typing import Callable, Optional, List, Tuple

from filesys.base import File
from filesys.fileinfo import FileInfo
from filesys.exceptions import (
    HandleClosedError,
    InvalidArgumentError,
    IsADirectoryError,
    NegativeSeekError,
    NotADirectoryError,
    NotReadableError,
    NotWritableError,
    SeekOverflowError,
)
from filesys.logger import get_logger
from .resource import Resource, DEFAULT_DIR_MODE, DEFAULT_FILE_MODE


MAX_POSITION = sys.maxsize

_logger = get_logger('handle')


class VirtualHandle(File):
    """Behaviour shared by file and directory handles."""

    def __init__(
        self,
        resource: Optional[Resource],
        name: str,
        dir_mode: int = DEFAULT_DIR_MODE,
        file_mode: int = DEFAULT_FILE_MODE
    ):
        self._resource = resource
        self.name = name
        self._dir_mode = dir_mode
        self._file_mode = file_mode
        self._closed = False

    def __repr__(self) -> str:
        state = 'closed' if self._closed else 'open'
        return f"<{self.__class__.__name__} name={self.name!r} {state}>"

    @property
    def closed(self) -> bool:
        return self._closed

    def _check(self, operation: str) -> Resource:
        """Return the resource, or raise if the handle cannot be used."""
        if self._resource is None:
            raise InvalidArgumentError(
                "handle is not bound to a resource",
                path=self.name,
                operation=operation
            )
        if self._closed:
            raise HandleClosedError(self.name, operation=operation)
        return self._resource

    def stat(self) -> FileInfo:
        resource = self._check('stat')
        return resource.stat(self._dir_mode, self._file_mode)

    def close(self) -> None:
        if self._resource is None:
            raise InvalidArgumentError(
                "handle is not bound to a resource",
                path=self.name,
                operation='close'
            )
        self._closed = True


class FileHandle(VirtualHandle):
    """
    Positioned cursor over a file.

    Read and write permission are fixed when the handle is opened.
    Writing past the end of the data first pads the gap with zero bytes.
    The resource's modification time is updated when a handle that
    wrote data is closed.

    Example:
        >>> f = fs.create('/a.txt')
        >>> f.write(b'Hello')
        5
        >>> f.seek(8)
        8
        >>> f.write(b'Hey')
        3
        >>> fs.read_file('/a.txt')
        b'Hello\\x00\\x00\\x00Hey'
    """

    def __init__(
        self,
        resource: Optional[Resource],
        name: str,
        can_read: bool = True,
        can_write: bool = False,
        dir_mode: int = DEFAULT_DIR_MODE,
        file_mode: int = DEFAULT_FILE_MODE
    ):
        super().__init__(resource, name, dir_mode, file_mode)
        self.position = 0
        self.can_read = can_read
        self.can_write = can_write
        self.modified = False

    def _check_readable(self, operation: str) -> Resource:
        resource = self._check(operation)
        if not self.can_read:
            raise NotReadableError(self.name, operation=operation)
        return resource

    def read(self, size: int = -1) -> bytes:
        resource = self._check_readable('read')
        if size == 0:
            return b''

        data = resource.data
        if self.position >= len(data):
            return b''

        if size is None or size < 0:
            end = len(data)
        else:
            end = min(len(data), self.position + size)

        chunk = bytes(data[self.position:end])
        self.position = end
        return chunk

    def readinto(self, buffer) -> int:
        resource = self._check_readable('read')
        view = memoryview(buffer).cast('B')
        if len(view) == 0:
            return 0

        data = resource.data
        if self.position >= len(data):
            return 0

        n = min(len(view), len(data) - self.position)
        view[:n] = data[self.position:self.position + n]
        self.position += n
        return n

    def write(self, data) -> int:
        resource = self._check('write')
        if not self.can_write:
            raise NotWritableError(self.name, operation='write')

        payload = memoryview(data).tobytes()
        if not payload:
            return 0

        buffer = resource.data
        if self.position > len(buffer):
            # Sparse extension
            buffer.extend(bytes(self.position - len(buffer)))

        end = self.position + len(payload)
        buffer[self.position:end] = payload

        self.position = end
        self.modified = True
        return len(payload)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        resource = self._check('seek')
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise InvalidArgumentError(
                f"offset must be an integer, got {type(offset).__name__}",
                path=self.name,
                operation='seek'
            )

        if whence == os.SEEK_SET:
            position = offset
        elif whence == os.SEEK_CUR:
            position = self.position + offset
        elif whence == os.SEEK_END:
            position = len(resource.data) + offset
        else:
            raise InvalidArgumentError(
                f"invalid whence: {whence!r}",
                path=self.name,
                operation='seek'
            )

        if position < 0:
            raise NegativeSeekError(self.name, position)
        if position > MAX_POSITION:
            raise SeekOverflowError(self.name, position)

        self.position = position
        return position

    def tell(self) -> int:
        self._check('tell')
        return self.position

    def readdir(self, n: int = -1) -> Tuple[List[FileInfo], bool]:
        self._check('readdir')
        raise NotADirectoryError(self.name, operation='readdir')

    def close(self) -> None:
        super().close()
        if self.modified:
            self._resource.touch()
            self.modified = False
            _logger.debug(
                "Closed modified file",
                context={'name': self.name, 'size': self._resource.size}
            )


class DirectoryIterator:
    """
    Listing cursor over a directory.

    ``list_entries`` returns the directory's entries sorted by name; it is
    called again for every page, and ``position`` is an index into that
    sorted listing. Both backends page through directories with this.
    """

    def __init__(self, list_entries: Callable[[], List[FileInfo]]):
        self._list_entries = list_entries
        self.position = 0

    def next_page(self, n: int = -1) -> Tuple[List[FileInfo], bool]:
        """
        Return the next page of entries.

        Args:
            n: Maximum number of entries; n <= 0 returns everything left

        Returns:
            (entries, eof). eof is True when n > 0 and fewer than n
            entries were left.
        """
        infos = self._list_entries()
        start = min(self.position, len(infos))

        if n <= 0:
            self.position = len(infos)
            return infos[start:], False

        end = start + n
        eof = end > len(infos)
        if eof:
            end = len(infos)

        self.position = end
        return infos[start:end], eof


class DirectoryHandle(VirtualHandle):
    """
    Listing-only handle over a directory.

    Read, write and seek raise IsADirectoryError.
    """

    def __init__(
        self,
        resource: Optional[Resource],
        name: str,
        dir_mode: int = DEFAULT_DIR_MODE,
        file_mode: int = DEFAULT_FILE_MODE
    ):
        super().__init__(resource, name, dir_mode, file_mode)
        self._iterator = (
            DirectoryIterator(lambda: resource.list_children(dir_mode, file_mode))
            if resource is not None else None
        )

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

    def readdir(self, n: int = -1) -> Tuple[List[FileInfo], bool]:
        self._check('readdir')
        return self._iterator.next_page(n)
