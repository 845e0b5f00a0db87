"""
Filesys - Interchangeable Filesystem Backends

A hierarchical file-storage abstraction with two backends behind one
interface:
- VirtualFileSystem: a filesystem simulated entirely in memory, for
  deterministic and isolated tests
- OsFileSystem: the same operations delegated to the host OS

Implemented in Python 3.10+ using only the standard library.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .exceptions import FileSystemException
from .base import FileSystem, File, OpenMode
from .fileinfo import FileInfo
from .virtual import VirtualFileSystem
from .osfs import OsFileSystem
from .factory import create_filesystem, configure_logging

__all__ = [
    'FileSystem',
    'File',
    'OpenMode',
    'FileInfo',
    'FileSystemException',
    'VirtualFileSystem',
    'OsFileSystem',
    'create_filesystem',
    'configure_logging',
]
