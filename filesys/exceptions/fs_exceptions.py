"""
Filesystem Exceptions

Exceptions raised by both filesystem backends and by open file handles.
Every exception records the operation that failed and the path (or, for
rename, both paths) involved, so calling code can react without parsing
messages.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all filesystem-related errors.

    Attributes:
        message: Human-readable error description
        path: File path associated with the error (if applicable)
        new_path: Destination path for two-path operations (rename)
        operation: Name of the operation that failed ("open", "rename", ...)
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        new_path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.operation = operation
        self.new_path = new_path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path is not None:
            self.context["path"] = path
        if new_path is not None:
            self.context["new_path"] = new_path
        if operation:
            self.context["operation"] = operation

    def __str__(self) -> str:
        base = f"[Error {self.error_code}]"
        if self.operation:
            base = f"{base} {self.operation}"
        if self.path is not None:
            base = f"{base} {self.path}"
        if self.new_path is not None:
            base = f"{base} -> {self.new_path}"
        return f"{base}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"operation={self.operation!r}, "
            f"path={self.path!r}, "
            f"error_code={self.error_code})"
        )


class FileNotFoundError(FileSystemException):
    """
    The specified file or directory does not exist.

    Example:
        >>> raise FileNotFoundError("/path/to/file", operation="open")
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        new_path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="no such file or directory",
            path=path,
            operation=operation,
            new_path=new_path,
            error_code=4001,
            context=context
        )


class FileExistsError(FileSystemException):
    """
    The destination already exists and the operation may not replace it.

    Raised by mkdir on an existing name, and by rename when the destination
    is a directory or when a directory would replace a file.
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        new_path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="file already exists",
            path=path,
            operation=operation,
            new_path=new_path,
            error_code=4002,
            context=context
        )


class PermissionDeniedError(FileSystemException):
    """
    Permission denied for the operation.

    The virtual backend does not enforce permission bits; it raises this
    for operations that target the root directory itself (remove, rename,
    stat, open, chtimes). The OS backend raises it for EACCES and EPERM.

    Example:
        >>> raise PermissionDeniedError("/", operation="remove")
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        new_path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="permission denied",
            path=path,
            operation=operation,
            new_path=new_path,
            error_code=4003,
            context=context
        )


class DirectoryNotEmptyError(FileSystemException):
    """
    Directory is not empty.

    Raised when a non-recursive remove targets a directory that still
    contains files or subdirectories.
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="directory not empty",
            path=path,
            operation=operation,
            error_code=4004,
            context=context
        )


class InvalidPathError(FileSystemException):
    """
    The path cannot name the requested entry.

    Raised for empty paths, for paths with a trailing separator where a
    file name is required, and for a rename that would move a directory
    into itself or one of its descendants.
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        new_path: Optional[str] = None,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=reason or "invalid path",
            path=path,
            operation=operation,
            new_path=new_path,
            error_code=4005,
            context=ctx
        )
        self.reason = reason


class IsADirectoryError(FileSystemException):
    """
    A file operation was attempted on a directory.

    Example:
        >>> raise IsADirectoryError("/home", operation="readfile")
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="is a directory",
            path=path,
            operation=operation,
            error_code=4008,
            context=context
        )


class NotADirectoryError(FileSystemException):
    """
    A directory operation was attempted on a file, or a path tried to
    descend through a file.

    Example:
        >>> raise NotADirectoryError("/etc/passwd/x", operation="stat")
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        new_path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="not a directory",
            path=path,
            operation=operation,
            new_path=new_path,
            error_code=4009,
            context=context
        )


class HandleClosedError(FileSystemException):
    """An operation was attempted on a handle that has been closed."""

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="file already closed",
            path=path,
            operation=operation,
            error_code=4010,
            context=context
        )


class NotReadableError(FileSystemException):
    """The handle was opened without read access."""

    def __init__(
        self,
        path: str,
        operation: Optional[str] = "read",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="file not opened for reading",
            path=path,
            operation=operation,
            error_code=4011,
            context=context
        )


class NotWritableError(FileSystemException):
    """The handle was opened without write access."""

    def __init__(
        self,
        path: str,
        operation: Optional[str] = "write",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="file not opened for writing",
            path=path,
            operation=operation,
            error_code=4012,
            context=context
        )


class NegativeSeekError(FileSystemException):
    """
    A seek would move the cursor before the start of the file.

    Attributes:
        position: The (negative) position that was computed
    """

    def __init__(
        self,
        path: str,
        position: int,
        operation: Optional[str] = "seek",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["position"] = position
        super().__init__(
            message="negative position",
            path=path,
            operation=operation,
            error_code=4013,
            context=ctx
        )
        self.position = position


class SeekOverflowError(FileSystemException):
    """
    A seek would move the cursor past the largest representable position.

    Attributes:
        position: The position that was computed
    """

    def __init__(
        self,
        path: str,
        position: int,
        operation: Optional[str] = "seek",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["position"] = position
        super().__init__(
            message="new position is too large",
            path=path,
            operation=operation,
            error_code=4014,
            context=ctx
        )
        self.position = position


class InvalidArgumentError(FileSystemException):
    """
    An argument is invalid, or the object was used before it was set up.

    Example:
        >>> raise InvalidArgumentError("unknown whence: 7", operation="seek")
    """

    def __init__(
        self,
        message: str = "invalid argument",
        path: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            path=path,
            operation=operation,
            error_code=4015,
            context=context
        )


class ContentMismatchError(FileSystemException):
    """
    A file exists but its content differs from what was expected.

    Raised by the verification helpers in :mod:`filesys.fsutil`.

    Attributes:
        expected: Expected content (abbreviated)
        actual: Actual content (abbreviated)
    """

    def __init__(
        self,
        path: str,
        expected: str,
        actual: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["expected"] = expected
        ctx["actual"] = actual
        super().__init__(
            message=f"expected file content '{expected}', got '{actual}'",
            path=path,
            operation="verify",
            error_code=4016,
            context=ctx
        )
        self.expected = expected
        self.actual = actual
