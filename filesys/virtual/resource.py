"""
Resource Module

The node type of the in-memory tree. A resource is either a file holding
a byte buffer or a directory holding name-keyed children.

Ownership runs downwards only: a node belongs to the ``children`` mapping
of its parent. The ``parent`` attribute is a navigation aid for ``..``
and for rebuilding absolute paths. Removing a node deletes the parent's
mapping entry and nothing else, so a handle that already holds the node
keeps reading and writing it after it has been detached.

Author: YSNRFD
Version: 1.0.0
"""

import stat as stat_module
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List

from filesys.fileinfo import FileInfo


DEFAULT_DIR_MODE = 0o777
DEFAULT_FILE_MODE = 0o666


class ResourceType(Enum):
    """Kinds of resources."""
    FILE = 1
    DIRECTORY = 2


@dataclass(eq=False)
class Resource:
    """
    A node in the virtual tree.

    Invariants:
    - a FILE has ``data`` and no ``children``
    - a DIRECTORY has ``children`` and no ``data``
    - sibling names are unique (they are the keys of ``children``)
    - only the root has ``parent`` set to None
    """

    name: str
    resource_type: ResourceType
    parent: Optional['Resource'] = field(default=None, repr=False)
    mod_time: float = field(default_factory=time.time)
    data: Optional[bytearray] = field(default=None, repr=False)
    children: Optional[dict[str, 'Resource']] = field(default=None, repr=False)

    def __post_init__(self):
        if self.is_dir:
            if self.children is None:
                self.children = {}
            self.data = None
        else:
            if self.data is None:
                self.data = bytearray()
            self.children = None

    @classmethod
    def make_directory(cls, name: str, parent: Optional['Resource'] = None) -> 'Resource':
        return cls(name=name, resource_type=ResourceType.DIRECTORY, parent=parent)

    @classmethod
    def make_file(
        cls,
        name: str,
        parent: Optional['Resource'] = None,
        data: bytes = b''
    ) -> 'Resource':
        return cls(
            name=name,
            resource_type=ResourceType.FILE,
            parent=parent,
            data=bytearray(data)
        )

    @property
    def is_dir(self) -> bool:
        return self.resource_type == ResourceType.DIRECTORY

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def size(self) -> int:
        """Byte size of a file; 0 for directories."""
        if self.is_dir:
            return 0
        return len(self.data)

    def touch(self, mtime: Optional[float] = None) -> None:
        """Update the modification time."""
        self.mod_time = time.time() if mtime is None else mtime

    # Directory operations

    def get_child(self, name: str) -> Optional['Resource']:
        """Get a child by name, or None."""
        if not self.is_dir:
            return None
        return self.children.get(name)

    def add_child(self, child: 'Resource') -> None:
        """
        Insert child under its current name, replacing any entry with that
        name, and make this directory its parent.
        """
        if not self.is_dir:
            raise ValueError("Not a directory")

        self.children[child.name] = child
        child.parent = self
        self.touch()

    def remove_child(self, name: str) -> Optional['Resource']:
        """
        Detach a child. The child keeps its parent reference so that
        handles and working directories inside it can still navigate.
        """
        if not self.is_dir:
            raise ValueError("Not a directory")

        child = self.children.pop(name, None)
        if child is not None:
            self.touch()
        return child

    def path_components(self) -> List[str]:
        """Names from the top of the chain down to this node (top excluded)."""
        names: List[str] = []
        current = self
        while current.parent is not None:
            names.append(current.name)
            current = current.parent
        names.reverse()
        return names

    # Snapshots

    def stat(self, dir_mode: int = DEFAULT_DIR_MODE, file_mode: int = DEFAULT_FILE_MODE) -> FileInfo:
        """Return an immutable FileInfo snapshot of this node."""
        if self.is_dir:
            mode = stat_module.S_IFDIR | dir_mode
        else:
            mode = stat_module.S_IFREG | file_mode
        return FileInfo(
            name=self.name,
            size=self.size,
            mode=mode,
            mod_time=self.mod_time
        )

    def list_children(
        self,
        dir_mode: int = DEFAULT_DIR_MODE,
        file_mode: int = DEFAULT_FILE_MODE
    ) -> List[FileInfo]:
        """FileInfo for every child, sorted by name."""
        if not self.is_dir:
            return []
        return [
            self.children[name].stat(dir_mode, file_mode)
            for name in sorted(self.children)
        ]
