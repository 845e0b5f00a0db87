"""
Filesys OS Backend Module

The FileSystem contract implemented on top of the host operating system.
"""

from .osfs import OsFileSystem, OsFileHandle, OsDirectoryHandle, translate_os_error

__all__ = [
    'OsFileSystem',
    'OsFileHandle',
    'OsDirectoryHandle',
    'translate_os_error',
]
