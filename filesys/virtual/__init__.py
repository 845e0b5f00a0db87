"""
Filesys Virtual File System Module

An in-memory filesystem for deterministic, isolated use:
- Hierarchical tree of resources
- POSIX-like path resolution
- Positioned file handles and paginated directory handles
"""

from .resource import Resource, ResourceType
from .path_resolver import PathResolver, ParsedPath, SEPARATOR
from .handle import FileHandle, DirectoryHandle, DirectoryIterator
from .vfs import VirtualFileSystem

__all__ = [
    # Resource tree
    'Resource',
    'ResourceType',
    # Path Resolver
    'PathResolver',
    'ParsedPath',
    'SEPARATOR',
    # Handles
    'FileHandle',
    'DirectoryHandle',
    'DirectoryIterator',
    # VFS
    'VirtualFileSystem',
]
