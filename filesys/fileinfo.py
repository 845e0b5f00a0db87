"""
File Info Module

Immutable snapshot of a file or directory, returned by stat and by
directory listings. Both backends produce this type.

Author: YSNRFD
Version: 1.0.0
"""

import os
import stat as stat_module
import time
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FileInfo:
    """
    Snapshot of an entry's metadata.

    Attributes:
        name: Base name of the entry
        size: Size in bytes (0 for directories)
        mode: st_mode-style bits (file type and permissions)
        mod_time: Modification time, seconds since the epoch
    """

    name: str
    size: int
    mode: int
    mod_time: float

    @property
    def is_dir(self) -> bool:
        return stat_module.S_ISDIR(self.mode)

    @property
    def permissions(self) -> int:
        """Permission bits only."""
        return stat_module.S_IMODE(self.mode)

    @property
    def mode_string(self) -> str:
        """ls-style mode string, e.g. 'drwxrwxrwx'."""
        return stat_module.filemode(self.mode)

    @classmethod
    def from_stat_result(cls, name: str, result: os.stat_result) -> 'FileInfo':
        """Build a FileInfo from os.stat() output."""
        is_dir = stat_module.S_ISDIR(result.st_mode)
        return cls(
            name=name,
            size=0 if is_dir else result.st_size,
            mode=result.st_mode,
            mod_time=result.st_mtime
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for display."""
        return {
            'name': self.name,
            'type': 'DIRECTORY' if self.is_dir else 'FILE',
            'mode': self.mode_string,
            'size': self.size,
            'mtime': time.strftime('%Y-%m-%d %H:%M', time.localtime(self.mod_time)),
        }
