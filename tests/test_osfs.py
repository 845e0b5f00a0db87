"""
OS File System Tests

Every test runs inside a fresh temporary directory.

Run with: python -m pytest tests/test_osfs.py -v
"""

import errno
import os
import sys
import tempfile
import time
import unittest

from filesys import OpenMode, OsFileSystem
from filesys.exceptions import (
    DirectoryNotEmptyError,
    FileExistsError,
    FileNotFoundError,
    FileSystemException,
    HandleClosedError,
    InvalidArgumentError,
    InvalidPathError,
    IsADirectoryError,
    NegativeSeekError,
    NotADirectoryError,
    NotReadableError,
    NotWritableError,
    PermissionDeniedError,
    SeekOverflowError,
)
from filesys.fsutil import create_structure, verify_file_content
from filesys.osfs import translate_os_error


class OsTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name
        self.fs = OsFileSystem(self.root)
        create_structure(
            self.fs,
            files={
                'a/b/f.txt': b'Hello',
                'a/b/Z.txt': b'Hi',
                'a/k/h.txt': b'Hey',
            },
            dirs=['a/b/c', 'a/d']
        )

    def tearDown(self):
        self._tmp.cleanup()


class TestOsFileSystem(OsTestCase):
    """Test path operations against the host filesystem."""

    def test_read_and_write(self):
        """Test whole-file access with relative and absolute paths."""
        self.assertEqual(self.fs.read_file('a/b/f.txt'), b'Hello')
        self.assertEqual(
            self.fs.read_file(os.path.join(self.root, 'a', 'b', 'f.txt')),
            b'Hello'
        )

        self.fs.write_file('a/b/f.txt', b'Bye')
        verify_file_content(self.fs, 'a/b/f.txt', b'Bye')

    def test_read_dir_sorted(self):
        """Test that listings are sorted by name."""
        infos = self.fs.read_dir('a/b')
        self.assertEqual([i.name for i in infos], ['Z.txt', 'c', 'f.txt'])
        self.assertTrue(infos[1].is_dir)
        self.assertEqual(infos[1].size, 0)

    def test_stat(self):
        """Test FileInfo from the host."""
        info = self.fs.stat('a/b/f.txt')
        self.assertEqual(info.name, 'f.txt')
        self.assertEqual(info.size, 5)
        self.assertFalse(info.is_dir)

        with self.assertRaises(FileNotFoundError):
            self.fs.stat('a/nope')
        with self.assertRaises(NotADirectoryError):
            self.fs.stat('a/b/f.txt/')

    def test_mkdir(self):
        """Test single and recursive directory creation."""
        self.fs.mkdir('a/e')
        self.assertTrue(self.fs.is_directory('a/e'))

        with self.assertRaises(FileExistsError):
            self.fs.mkdir('a/e')
        with self.assertRaises(FileNotFoundError):
            self.fs.mkdir('x/y')

        self.fs.mkdir_all('x/y/z')
        self.fs.mkdir_all('x/y/z')
        self.assertTrue(self.fs.is_directory('x/y/z'))

        with self.assertRaises(NotADirectoryError):
            self.fs.mkdir_all('a/b/f.txt')

    def test_remove(self):
        """Test removing files and directories."""
        with self.assertRaises(DirectoryNotEmptyError):
            self.fs.remove('a/b')

        self.fs.remove('a/d')
        self.fs.remove('a/b/f.txt')
        self.assertFalse(self.fs.exists('a/d'))
        self.assertFalse(self.fs.exists('a/b/f.txt'))

        self.fs.remove_all('a/b')
        self.assertFalse(self.fs.exists('a/b'))

        with self.assertRaises(FileNotFoundError):
            self.fs.remove('a/nope')

    def test_rename(self):
        """Test the overwrite and nesting rules."""
        self.fs.rename('a/b', 'a/d/e')
        self.assertEqual([i.name for i in self.fs.read_dir('a/d/e')], ['Z.txt', 'c', 'f.txt'])

        with self.assertRaises(FileExistsError):
            self.fs.rename('a/k/h.txt', 'a/d/e/c')
        with self.assertRaises(FileExistsError):
            self.fs.rename('a/k', 'a/d/e/f.txt')
        with self.assertRaises(InvalidPathError):
            self.fs.rename('a/d', 'a/d/e/d')
        with self.assertRaises(FileNotFoundError):
            self.fs.rename('a/nope', 'a/x')
        with self.assertRaises(InvalidPathError):
            self.fs.rename('', 'a/x')

        self.fs.rename('a/k/h.txt', 'a/d/e/f.txt')
        self.assertEqual(self.fs.read_file('a/d/e/f.txt'), b'Hey')

    def test_read_file_errors(self):
        """Test reading a directory and a missing file."""
        with self.assertRaises(IsADirectoryError):
            self.fs.read_file('a/b')
        with self.assertRaises(FileNotFoundError):
            self.fs.read_file('a/nope')

    def test_write_file_errors(self):
        """Test writing to unusable paths."""
        with self.assertRaises(InvalidPathError):
            self.fs.write_file('a/b/', b'')
        with self.assertRaises(FileNotFoundError):
            self.fs.write_file('x/y.txt', b'')

    def test_chtimes(self):
        """Test setting the modification time."""
        mtime = int(time.time()) - 36000
        self.fs.chtimes('a/b/f.txt', mtime, mtime)
        self.assertEqual(int(self.fs.stat('a/b/f.txt').mod_time), mtime)

    def test_change_dir(self):
        """Test working directories."""
        self.assertEqual(self.fs.current_dir(), os.path.abspath(self.root))

        sub = self.fs.change_dir('a/b')
        self.assertEqual(sub.current_dir(), os.path.join(os.path.abspath(self.root), 'a', 'b'))
        self.assertEqual(sub.read_file('f.txt'), b'Hello')
        self.assertEqual(sub.change_dir('..').current_dir(), os.path.join(os.path.abspath(self.root), 'a'))

        with self.assertRaises(InvalidPathError):
            self.fs.change_dir('')
        with self.assertRaises(FileNotFoundError):
            self.fs.change_dir('nope')
        with self.assertRaises(NotADirectoryError):
            self.fs.change_dir('a/b/f.txt')

    def test_open_mode(self):
        """Test that an unknown mode is rejected."""
        with self.assertRaises(InvalidArgumentError):
            self.fs.open('a/b/f.txt', 'rw')


class TestOsHandles(OsTestCase):
    """Test handles over host files and directories."""

    def test_seek_arithmetic(self):
        """Test seeking and sparse writes."""
        with self.fs.create('a/s.txt') as f:
            f.write(b'Hello')
            self.assertEqual(f.seek(1), 1)
            f.write(b'ipp')
            self.assertEqual(f.seek(-2, os.SEEK_CUR), 2)
            f.write(b'ng')
            self.assertEqual(f.seek(3, os.SEEK_END), 8)
            f.write(b'Hey')
            with self.assertRaises(NegativeSeekError):
                f.seek(-1)
            with self.assertRaises(InvalidArgumentError):
                f.seek(0, 7)

        self.assertEqual(self.fs.read_file('a/s.txt'), b'Hingo\x00\x00\x00Hey')

    def test_read_until_eof(self):
        """Test reading to the end."""
        with self.fs.open('a/b/f.txt') as f:
            self.assertEqual(f.read(2), b'He')
            self.assertEqual(f.read(), b'llo')
            self.assertEqual(f.read(), b'')
            self.assertEqual(f.readinto(bytearray(4)), 0)
            self.assertEqual(f.stat().name, 'f.txt')

    def test_access_modes(self):
        """Test read-only and write-only handles."""
        with self.fs.open('a/b/f.txt', OpenMode.READ) as f:
            with self.assertRaises(NotWritableError) as ctx:
                f.write(b'x')
            self.assertEqual(ctx.exception.operation, 'write')
        with self.fs.open('a/b/f.txt', OpenMode.WRITE) as f:
            with self.assertRaises(NotReadableError) as ctx:
                f.read()
            self.assertEqual(ctx.exception.operation, 'read')
            f.write(b'J')
        self.assertEqual(self.fs.read_file('a/b/f.txt'), b'Jello')

    def test_seek_limits(self):
        """Test that huge and non-integer offsets raise filesystem errors."""
        with self.fs.create('a/big.txt') as f:
            with self.assertRaises(SeekOverflowError) as ctx:
                f.seek(2 ** 64)
            self.assertEqual(ctx.exception.position, 2 ** 64)
            self.assertEqual(f.seek(1), 1)
            with self.assertRaises(SeekOverflowError):
                f.seek(sys.maxsize, os.SEEK_CUR)
            with self.assertRaises(InvalidArgumentError):
                f.seek(1.5)
            with self.assertRaises(InvalidArgumentError):
                f.seek(True)
            self.assertEqual(f.tell(), 1)

    def test_closed_handle(self):
        """Test that a closed handle rejects operations."""
        f = self.fs.open('a/b/f.txt')
        f.close()
        f.close()
        with self.assertRaises(HandleClosedError):
            f.read()
        with self.assertRaises(HandleClosedError):
            f.seek(0)

    def test_open_missing(self):
        """Test opening a missing file."""
        with self.assertRaises(FileNotFoundError):
            self.fs.open('a/nope')
        with self.assertRaises(FileNotFoundError):
            self.fs.create('x/new.txt')

    def test_directory_pages(self):
        """Test paginated listing of a host directory."""
        with self.fs.open('a/b') as d:
            entries, eof = d.readdir(2)
            self.assertEqual([e.name for e in entries], ['Z.txt', 'c'])
            self.assertFalse(eof)

            entries, eof = d.readdir(4)
            self.assertEqual([e.name for e in entries], ['f.txt'])
            self.assertTrue(eof)

            with self.assertRaises(IsADirectoryError):
                d.read()
            self.assertTrue(d.stat().is_dir)

        with self.assertRaises(HandleClosedError):
            d.readdir()

    def test_readdir_on_file(self):
        """Test listing a file."""
        with self.fs.open('a/b/f.txt') as f:
            with self.assertRaises(NotADirectoryError):
                f.readdir()


class TestTranslateOsError(unittest.TestCase):
    """Test the errno mapping."""

    def test_known_codes(self):
        """Test the mapped errno values."""
        cases = {
            errno.ENOENT: FileNotFoundError,
            errno.EEXIST: FileExistsError,
            errno.EACCES: PermissionDeniedError,
            errno.EPERM: PermissionDeniedError,
            errno.ENOTDIR: NotADirectoryError,
            errno.EISDIR: IsADirectoryError,
            errno.ENOTEMPTY: DirectoryNotEmptyError,
            errno.EINVAL: InvalidArgumentError,
        }
        for code, expected in cases.items():
            error = translate_os_error(OSError(code, os.strerror(code)), 'open', '/p')
            self.assertIsInstance(error, expected)
            self.assertEqual(error.operation, 'open')
            self.assertEqual(error.path, '/p')

    def test_rename_keeps_both_paths(self):
        """Test that two-path errors record the destination."""
        error = translate_os_error(OSError(errno.EEXIST, 'exists'), 'rename', '/a', '/b')
        self.assertEqual(error.new_path, '/b')
        self.assertIn('/a -> /b', str(error))

    def test_unknown_code(self):
        """Test that unmapped codes keep the errno."""
        error = translate_os_error(OSError(errno.EIO, 'I/O error'), 'read', '/p')
        self.assertIs(type(error), FileSystemException)
        self.assertEqual(error.context['errno'], errno.EIO)
        self.assertEqual(error.message, 'I/O error')


if __name__ == '__main__':
    unittest.main()
