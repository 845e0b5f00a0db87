"""
Path Resolver Module

Lexical path handling for the virtual file system. Nothing here touches
the tree: these helpers turn a path string into the canonical form that
the tree walk in vfs.py consumes.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import List, Tuple


SEPARATOR = '/'


@dataclass
class ParsedPath:
    """A parsed path with its components."""
    is_absolute: bool
    components: List[str]
    trailing_separator: bool = False

    def __str__(self) -> str:
        if self.is_absolute:
            return SEPARATOR + SEPARATOR.join(self.components)
        return SEPARATOR.join(self.components) if self.components else '.'


class PathResolver:
    """
    Parses and normalizes filesystem paths.

    Handles:
    - Absolute and relative paths
    - Repeated separators and . components
    - .. components (dropped above the root of an absolute path, kept
      at the front of a relative one)
    - Trailing separators, which mark a path that must name a directory
    """

    @staticmethod
    def parse(path: str) -> ParsedPath:
        """
        Parse a path into normalized components.

        Args:
            path: Path string to parse

        Returns:
            ParsedPath with components
        """
        is_absolute = path.startswith(SEPARATOR)
        result: List[str] = []

        for component in path.split(SEPARATOR):
            if component in ('', '.'):
                continue
            if component == '..':
                if result and result[-1] != '..':
                    result.pop()
                elif not is_absolute:
                    result.append(component)
                continue
            result.append(component)

        return ParsedPath(
            is_absolute=is_absolute,
            components=result,
            trailing_separator=len(path) > 1 and path.endswith(SEPARATOR)
        )

    @staticmethod
    def clean(path: str) -> str:
        """
        Return the shortest path equivalent to path.

        Examples:
            >>> PathResolver.clean('/home/../tmp/.')
            '/tmp'
            >>> PathResolver.clean('a//b/../../..')
            '..'
            >>> PathResolver.clean('')
            '.'
        """
        return str(PathResolver.parse(path))

    @staticmethod
    def join(*paths: str) -> str:
        """
        Join path components; an absolute component discards what precedes it.

        Args:
            *paths: Path components to join

        Returns:
            Cleaned, joined path string
        """
        if not paths:
            return '.'

        result = paths[0]

        for path in paths[1:]:
            if path.startswith(SEPARATOR):
                result = path
            elif path:
                result = result.rstrip(SEPARATOR) + SEPARATOR + path if result else path

        return PathResolver.clean(result)

    @staticmethod
    def resolve(path: str, cwd: str = SEPARATOR) -> str:
        """
        Resolve a path against an absolute working directory.

        Args:
            path: Path to resolve
            cwd: Current working directory

        Returns:
            Absolute cleaned path
        """
        if PathResolver.is_absolute(path):
            return PathResolver.clean(path)
        return PathResolver.join(cwd, path)

    @staticmethod
    def split(path: str) -> Tuple[str, str]:
        """
        Split a path after its last separator.

        The directory part keeps its trailing separator so that an
        absolute path stays absolute; a bare name has an empty directory.

        Examples:
            >>> PathResolver.split('/a/b.txt')
            ('/a/', 'b.txt')
            >>> PathResolver.split('b.txt')
            ('', 'b.txt')
            >>> PathResolver.split('/a/')
            ('/a/', '')
        """
        index = path.rfind(SEPARATOR)
        return path[:index + 1], path[index + 1:]

    @staticmethod
    def dirname(path: str) -> str:
        """Get the directory portion of a cleaned path."""
        cleaned = PathResolver.clean(path)
        head, _ = PathResolver.split(cleaned)
        if not head:
            return '.'
        return PathResolver.clean(head)

    @staticmethod
    def basename(path: str) -> str:
        """Get the last component of a cleaned path."""
        cleaned = PathResolver.clean(path)
        if cleaned == SEPARATOR:
            return SEPARATOR
        return PathResolver.split(cleaned)[1]

    @staticmethod
    def is_absolute(path: str) -> bool:
        """Check if a path is absolute."""
        return path.startswith(SEPARATOR)

    @staticmethod
    def is_within(path: str, ancestor: str) -> bool:
        """
        Check if path lies strictly below ancestor.

        Both arguments must be cleaned absolute paths.
        """
        if ancestor == SEPARATOR:
            return path != SEPARATOR and path.startswith(SEPARATOR)
        return path.startswith(ancestor + SEPARATOR)
