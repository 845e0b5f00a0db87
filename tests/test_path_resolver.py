"""
Path Resolver Tests

Run with: python -m pytest tests/test_path_resolver.py -v
"""

import unittest

from filesys.virtual.path_resolver import PathResolver


class TestClean(unittest.TestCase):
    """Test lexical path cleaning."""

    def test_absolute_paths(self):
        """Test cleaning of absolute paths."""
        self.assertEqual(PathResolver.clean('/home/../tmp/.'), '/tmp')
        self.assertEqual(PathResolver.clean('//a///b/'), '/a/b')
        self.assertEqual(PathResolver.clean('/'), '/')

    def test_parent_above_root_is_dropped(self):
        """Test that .. cannot climb above the root."""
        self.assertEqual(PathResolver.clean('/..'), '/')
        self.assertEqual(PathResolver.clean('/../../a'), '/a')

    def test_relative_paths(self):
        """Test cleaning of relative paths."""
        self.assertEqual(PathResolver.clean(''), '.')
        self.assertEqual(PathResolver.clean('./a/./b'), 'a/b')
        self.assertEqual(PathResolver.clean('a//b/../../..'), '..')
        self.assertEqual(PathResolver.clean('../../x'), '../../x')

    def test_trailing_separator(self):
        """Test that a trailing separator is recorded but not kept."""
        parsed = PathResolver.parse('/a/b/')
        self.assertTrue(parsed.trailing_separator)
        self.assertEqual(parsed.components, ['a', 'b'])
        self.assertFalse(PathResolver.parse('/').trailing_separator)
        self.assertFalse(PathResolver.parse('/a/b').trailing_separator)


class TestJoinAndResolve(unittest.TestCase):
    """Test joining and resolving against a working directory."""

    def test_join(self):
        """Test joining components."""
        self.assertEqual(PathResolver.join('/home', 'user'), '/home/user')
        self.assertEqual(PathResolver.join('/home', '/etc'), '/etc')
        self.assertEqual(PathResolver.join('', 'x'), 'x')
        self.assertEqual(PathResolver.join(), '.')

    def test_resolve(self):
        """Test resolving relative paths."""
        self.assertEqual(PathResolver.resolve('x/../y', '/a'), '/a/y')
        self.assertEqual(PathResolver.resolve('/z', '/a'), '/z')
        self.assertEqual(PathResolver.resolve('..', '/'), '/')
        self.assertEqual(PathResolver.resolve('.', '/a/b'), '/a/b')


class TestSplit(unittest.TestCase):
    """Test splitting paths."""

    def test_split(self):
        """Test splitting after the last separator."""
        self.assertEqual(PathResolver.split('/a/b.txt'), ('/a/', 'b.txt'))
        self.assertEqual(PathResolver.split('b.txt'), ('', 'b.txt'))
        self.assertEqual(PathResolver.split('/a/'), ('/a/', ''))
        self.assertEqual(PathResolver.split('/b'), ('/', 'b'))

    def test_dirname_and_basename(self):
        """Test dirname and basename."""
        self.assertEqual(PathResolver.dirname('/home/user/file.txt'), '/home/user')
        self.assertEqual(PathResolver.basename('/home/user/file.txt'), 'file.txt')
        self.assertEqual(PathResolver.dirname('/file'), '/')
        self.assertEqual(PathResolver.dirname('file'), '.')
        self.assertEqual(PathResolver.basename('/'), '/')


class TestIsWithin(unittest.TestCase):
    """Test descendant checks."""

    def test_is_within(self):
        """Test strict descendant detection."""
        self.assertTrue(PathResolver.is_within('/a/d/e', '/a/d'))
        self.assertTrue(PathResolver.is_within('/a/d/e/f', '/a/d'))
        self.assertFalse(PathResolver.is_within('/a/dd', '/a/d'))
        self.assertFalse(PathResolver.is_within('/a/d', '/a/d'))
        self.assertTrue(PathResolver.is_within('/x', '/'))
        self.assertFalse(PathResolver.is_within('/', '/'))


if __name__ == '__main__':
    unittest.main()
