"""
Virtual File System (VFS) Module

An in-memory filesystem with POSIX-like path semantics:
- Hierarchical tree of Resource nodes
- Absolute and working-directory relative paths
- Positioned file handles and paginated directory handles
- Rename/remove rules matching a real filesystem without touching one

Several VirtualFileSystem objects may share one tree: change_dir returns
a new facade over the same root with a different working directory, so
a mutation made through one is visible through all of them.

The tree is not locked. One caller at a time.

Author: YSNRFD
Version: 1.0.0
"""

import copy
from datetime import datetime
from functools import wraps
from typing import Optional, List, Union

from filesys.base import FileSystem, File, OpenMode
from filesys.fileinfo import FileInfo
from filesys.exceptions import (
    DirectoryNotEmptyError,
    FileExistsError,
    FileNotFoundError,
    InvalidArgumentError,
    InvalidPathError,
    IsADirectoryError,
    NotADirectoryError,
    PermissionDeniedError,
)
from filesys.logger import get_logger
from .handle import DirectoryHandle, FileHandle
from .path_resolver import PathResolver, SEPARATOR
from .resource import Resource, DEFAULT_DIR_MODE, DEFAULT_FILE_MODE


def _requires_tree(operation: str):
    """
    Decorator rejecting calls on an instance that has no tree, e.g. one
    obtained through ``object.__new__`` without running ``__init__``.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            if getattr(self, '_root', None) is None or getattr(self, '_current_dir', None) is None:
                path = args[0] if args and isinstance(args[0], str) else None
                raise InvalidArgumentError(
                    "filesystem is not initialized",
                    path=path,
                    operation=operation
                )
            return func(self, *args, **kwargs)
        return wrapper
    return decorator


class VirtualFileSystem(FileSystem):
    """
    In-memory filesystem.

    Example:
        >>> fs = VirtualFileSystem()
        >>> fs.mkdir_all('/tmp/work')
        >>> fs.write_file('/tmp/work/a.txt', b'Hello')
        >>> work = fs.change_dir('/tmp/work')
        >>> work.read_file('a.txt')
        b'Hello'
        >>> work.current_dir()
        '/tmp/work'
    """

    def __init__(
        self,
        root: Optional[Resource] = None,
        current_dir: Optional[Resource] = None,
        dir_mode: int = DEFAULT_DIR_MODE,
        file_mode: int = DEFAULT_FILE_MODE
    ):
        self._root = root if root is not None else Resource.make_directory('')
        self._current_dir = current_dir if current_dir is not None else self._root
        self._dir_mode = dir_mode
        self._file_mode = file_mode
        self._logger = get_logger('vfs')

    def __repr__(self) -> str:
        if getattr(self, '_root', None) is None:
            return "<VirtualFileSystem uninitialized>"
        return f"<VirtualFileSystem cwd={self.current_dir()!r}>"

    @property
    def root(self) -> Resource:
        return self._root

    # Tree walking

    def _walk(
        self,
        start: Resource,
        components: List[str],
        create_missing: bool,
        path: str,
        operation: str,
        new_path: Optional[str] = None
    ) -> Resource:
        """
        Walk cleaned components from start and return the directory reached.

        Missing directories are created when create_missing is set;
        descending through a file raises NotADirectoryError.
        """
        current = start

        for component in components:
            if component == '..':
                if current.parent is not None:
                    current = current.parent
                continue

            child = current.get_child(component)
            if child is not None:
                if not child.is_dir:
                    raise NotADirectoryError(path, operation=operation, new_path=new_path)
                current = child
                continue

            if not create_missing:
                raise FileNotFoundError(path, operation=operation, new_path=new_path)

            child = Resource.make_directory(component)
            current.add_child(child)
            current = child

        return current

    def _start(self, path: str) -> Resource:
        return self._root if PathResolver.is_absolute(path) else self._current_dir

    @_requires_tree('lookup')
    def get_directory(
        self,
        path: str,
        create_missing: bool = False,
        operation: str = 'lookup'
    ) -> Resource:
        """
        Resolve path to a directory resource.

        Args:
            path: Absolute or working-directory relative path
            create_missing: Create missing directories on the way
            operation: Operation name reported in errors

        Raises:
            FileNotFoundError: A component is missing and create_missing is off
            NotADirectoryError: A component is a file
        """
        parsed = PathResolver.parse(path)
        return self._walk(self._start(path), parsed.components, create_missing, path, operation)

    @_requires_tree('lookup')
    def get_resource(
        self,
        path: str,
        operation: str = 'lookup',
        new_path: Optional[str] = None
    ) -> Resource:
        """
        Resolve path to a file or directory resource other than the root.

        A trailing separator requires the resource to be a directory.

        Raises:
            FileNotFoundError: Nothing exists at path
            NotADirectoryError: A file was reached through a directory-only path
            PermissionDeniedError: The path resolves to the root
        """
        if path == '':
            raise FileNotFoundError(path, operation=operation, new_path=new_path)

        parsed = PathResolver.parse(path)
        components = parsed.components
        start = self._start(path)

        if not components or components[-1] == '..':
            resource = self._walk(start, components, False, path, operation, new_path)
        else:
            parent = self._walk(start, components[:-1], False, path, operation, new_path)
            resource = parent.get_child(components[-1])
            if resource is None:
                raise FileNotFoundError(path, operation=operation, new_path=new_path)
            if parsed.trailing_separator and not resource.is_dir:
                raise NotADirectoryError(path, operation=operation, new_path=new_path)

        if resource.is_root:
            raise PermissionDeniedError(path, operation=operation, new_path=new_path)
        return resource

    def _create_file(self, path: str, create_missing: bool, operation: str) -> Resource:
        """Insert an empty file at path, replacing an existing file."""
        if path.endswith(SEPARATOR):
            raise InvalidPathError(path, operation=operation, reason="path names a directory")

        parsed = PathResolver.parse(path)
        if not parsed.components or parsed.components[-1] == '..':
            raise InvalidPathError(path, operation=operation, reason="missing file name")

        name = parsed.components[-1]
        parent = self._walk(
            self._start(path), parsed.components[:-1], create_missing, path, operation
        )

        existing = parent.get_child(name)
        if existing is not None and existing.is_dir:
            raise IsADirectoryError(path, operation=operation)

        resource = Resource.make_file(name)
        parent.add_child(resource)
        return resource

    def _detach(self, resource: Resource, path: str, operation: str) -> None:
        parent = resource.parent
        if parent is None or parent.get_child(resource.name) is not resource:
            raise FileNotFoundError(path, operation=operation)
        parent.remove_child(resource.name)

    # Operations

    @_requires_tree('mkdir')
    def mkdir(self, path: str, mode: int = 0o777) -> None:
        """
        Create a single directory. Paths naming the root, '.' or '..' are
        accepted as a no-op.

        Raises:
            FileNotFoundError: The parent directory does not exist
            FileExistsError: Something already exists with that name
        """
        parsed = PathResolver.parse(path)
        if not parsed.components or parsed.components[-1] == '..':
            return

        name = parsed.components[-1]
        parent = self._walk(self._start(path), parsed.components[:-1], False, path, 'mkdir')
        if parent.get_child(name) is not None:
            raise FileExistsError(path, operation='mkdir')

        parent.add_child(Resource.make_directory(name))
        self._logger.debug("Created directory", context={'path': path})

    @_requires_tree('mkdir')
    def mkdir_all(self, path: str, mode: int = 0o777) -> None:
        """Create path and any missing parents; existing directories are kept."""
        self.get_directory(path, create_missing=True, operation='mkdir')
        self._logger.debug("Ensured directory", context={'path': path})

    @_requires_tree('remove')
    def remove(self, path: str) -> None:
        """Remove a file or an empty directory."""
        self._remove(path, recursive=False)

    @_requires_tree('remove')
    def remove_all(self, path: str) -> None:
        """Remove a file or a directory together with its subtree."""
        self._remove(path, recursive=True)

    def _remove(self, path: str, recursive: bool) -> None:
        resource = self.get_resource(path, operation='remove')
        if not recursive and resource.is_dir and resource.children:
            raise DirectoryNotEmptyError(path, operation='remove')

        self._detach(resource, path, 'remove')
        self._logger.debug(
            "Removed resource",
            context={'path': path, 'recursive': recursive, 'directory': resource.is_dir}
        )

    @_requires_tree('rename')
    def rename(self, old_path: str, new_path: str) -> None:
        """
        Move or rename a resource.

        The destination's parent must exist. A file may replace a file;
        nothing may replace a directory, and a directory may not replace
        a file. A directory cannot be moved below itself.
        """
        operation = 'rename'
        if not old_path or not new_path:
            raise InvalidPathError(
                old_path, operation=operation, new_path=new_path, reason="empty path"
            )

        source = self.get_resource(old_path, operation=operation, new_path=new_path)

        cwd = self.current_dir()
        source_path = PathResolver.resolve(old_path, cwd)
        target_path = PathResolver.resolve(new_path, cwd)
        if source_path == target_path:
            return
        if target_path == SEPARATOR:
            raise PermissionDeniedError(old_path, operation=operation, new_path=new_path)
        if PathResolver.is_within(target_path, source_path):
            raise InvalidPathError(
                old_path,
                operation=operation,
                new_path=new_path,
                reason="invalid destination"
            )

        target_dir, target_name = PathResolver.split(target_path)
        target_parent = self._walk(
            self._root,
            PathResolver.parse(target_dir).components,
            False,
            old_path,
            operation,
            new_path
        )

        existing = target_parent.get_child(target_name)
        if existing is not None and (existing.is_dir or source.is_dir):
            raise FileExistsError(old_path, operation=operation, new_path=new_path)

        self._detach(source, old_path, operation)
        source.name = target_name
        target_parent.add_child(source)
        self._logger.debug(
            "Renamed resource",
            context={'from': source_path, 'to': target_path}
        )

    @_requires_tree('stat')
    def stat(self, path: str) -> FileInfo:
        return self.get_resource(path, operation='stat').stat(self._dir_mode, self._file_mode)

    @_requires_tree('open')
    def open(self, path: str, mode: Union[OpenMode, str] = OpenMode.READ) -> File:
        """
        Open a file or directory.

        Files get a cursor at offset 0 with the access given by mode;
        directories get a listing-only handle whatever the mode.
        Opening never creates or truncates.
        """
        try:
            mode = OpenMode(mode)
        except ValueError:
            raise InvalidArgumentError(
                f"invalid open mode: {mode!r}", path=path, operation='open'
            ) from None

        resource = self.get_resource(path, operation='open')
        if resource.is_dir:
            return DirectoryHandle(resource, path, self._dir_mode, self._file_mode)
        return FileHandle(
            resource,
            path,
            can_read=mode.readable,
            can_write=mode.writable,
            dir_mode=self._dir_mode,
            file_mode=self._file_mode
        )

    @_requires_tree('create')
    def create(self, path: str) -> File:
        """Create or truncate a file and open it read-write at offset 0."""
        resource = self._create_file(path, False, 'create')
        self._logger.debug("Created file", context={'path': path})
        return FileHandle(
            resource,
            path,
            can_read=True,
            can_write=True,
            dir_mode=self._dir_mode,
            file_mode=self._file_mode
        )

    @_requires_tree('chtimes')
    def chtimes(
        self,
        path: str,
        atime: Union[float, datetime],
        mtime: Union[float, datetime]
    ) -> None:
        """Set the modification time; access times are not tracked."""
        resource = self.get_resource(path, operation='chtimes')
        if isinstance(mtime, datetime):
            mtime = mtime.timestamp()
        resource.touch(float(mtime))
        self._logger.debug("Changed times", context={'path': path, 'mtime': mtime})

    @_requires_tree('readdir')
    def read_dir(self, path: str) -> List[FileInfo]:
        """List a directory's entries sorted by name."""
        if path == '':
            raise InvalidPathError(path, operation='readdir', reason="empty path")
        directory = self.get_directory(path, operation='readdir')
        return directory.list_children(self._dir_mode, self._file_mode)

    @_requires_tree('readfile')
    def read_file(self, path: str) -> bytes:
        """Return a copy of a file's content."""
        resource = self.get_resource(path, operation='readfile')
        if resource.is_dir:
            raise IsADirectoryError(path, operation='readfile')
        return bytes(resource.data)

    @_requires_tree('writefile')
    def write_file(self, path: str, data: bytes, mode: int = 0o666) -> None:
        """Replace a file's content, creating the file if absent."""
        payload = memoryview(data).tobytes()
        resource = self._create_file(path, False, 'writefile')
        resource.data.extend(payload)
        self._logger.debug("Wrote file", context={'path': path, 'size': len(payload)})

    @_requires_tree('putfile')
    def put_file(self, path: str, data: bytes, mode: int = 0o666) -> None:
        """Like write_file, creating missing parent directories first."""
        payload = memoryview(data).tobytes()
        resource = self._create_file(path, True, 'putfile')
        resource.data.extend(payload)
        self._logger.debug("Put file", context={'path': path, 'size': len(payload)})

    @_requires_tree('cd')
    def change_dir(self, path: str) -> 'VirtualFileSystem':
        """Return a facade over the same tree working in path."""
        if path == '':
            raise InvalidPathError(path, operation='cd', reason="empty path")
        directory = self.get_directory(path, operation='cd')
        return VirtualFileSystem(
            root=self._root,
            current_dir=directory,
            dir_mode=self._dir_mode,
            file_mode=self._file_mode
        )

    @_requires_tree('getwd')
    def current_dir(self) -> str:
        """Absolute path of the working directory."""
        if self._current_dir is self._root:
            return SEPARATOR
        return SEPARATOR + SEPARATOR.join(self._current_dir.path_components())

    @_requires_tree('clone')
    def clone(self) -> 'VirtualFileSystem':
        """
        Deep copy of the whole tree, with the working directory mapped to
        its copy. Mutations of the clone are not visible here and vice versa.
        """
        root, current_dir = copy.deepcopy((self._root, self._current_dir))
        return VirtualFileSystem(
            root=root,
            current_dir=current_dir,
            dir_mode=self._dir_mode,
            file_mode=self._file_mode
        )
