"""Tests for file type classification."""

import os
import stat
from unittest.mock import patch

import pytest

from dufmt.errors import ClassificationError, UnsupportedPlatformError
from dufmt.filetypes import classify, classify_metadata, extension, read_metadata
from dufmt.models import CategoryCode, FileMetadata


def meta(mode: int, nlink: int | None = 1, target_exists: bool = True) -> FileMetadata:
    """Helper to build metadata."""
    return FileMetadata(mode=mode, nlink=nlink, target_exists=target_exists)


class TestClassifyMetadata:
    def test_missing_path_is_orphan(self):
        assert classify_metadata("/nope", None) == "or"

    def test_directory(self):
        assert classify_metadata("/d", meta(stat.S_IFDIR | 0o755, nlink=3)) == "di"

    def test_symlink(self):
        assert classify_metadata("/l", meta(stat.S_IFLNK | 0o777)) == "ln"

    def test_dangling_symlink_is_orphan(self):
        assert classify_metadata("/l", meta(stat.S_IFLNK | 0o777, target_exists=False)) == "or"

    def test_named_pipe(self):
        assert classify_metadata("/p", meta(stat.S_IFIFO | 0o644)) == "pi"

    def test_socket(self):
        assert classify_metadata("/s", meta(stat.S_IFSOCK | 0o755)) == "so"

    def test_char_device(self):
        assert classify_metadata("/dev/null", meta(stat.S_IFCHR | 0o666)) == "cd"

    def test_block_device(self):
        assert classify_metadata("/dev/sda", meta(stat.S_IFBLK | 0o660)) == "bd"

    def test_setuid_wins_over_executable(self):
        assert classify_metadata("/bin/su", meta(stat.S_IFREG | stat.S_ISUID | 0o755)) == "su"

    def test_setgid_wins_over_executable(self):
        assert classify_metadata("/bin/x", meta(stat.S_IFREG | stat.S_ISGID | 0o755)) == "sg"

    def test_setuid_wins_over_setgid(self):
        mode = stat.S_IFREG | stat.S_ISUID | stat.S_ISGID | 0o755
        assert classify_metadata("/bin/x", meta(mode)) == "su"

    @pytest.mark.parametrize("bits", [0o100, 0o010, 0o001])
    def test_any_executable_bit(self, bits):
        assert classify_metadata("/x.sh", meta(stat.S_IFREG | 0o644 | bits)) == "ex"

    def test_executable_wins_over_hardlinks(self):
        assert classify_metadata("/x", meta(stat.S_IFREG | 0o755, nlink=2)) == "ex"

    def test_multi_hardlink(self):
        assert classify_metadata("/a.txt", meta(stat.S_IFREG | 0o644, nlink=2)) == "mh"

    def test_extension(self):
        assert classify_metadata("/a/notes.txt", meta(stat.S_IFREG | 0o644)) == "*.txt"

    def test_last_extension_only(self):
        assert classify_metadata("/a/b.tar.gz", meta(stat.S_IFREG | 0o644)) == "*.gz"

    def test_dotfile_is_all_extension(self):
        assert classify_metadata("/home/u/.bashrc", meta(stat.S_IFREG | 0o644)) == "*.bashrc"

    def test_extension_ignores_dots_in_directories(self):
        assert classify_metadata("/a.d/README", meta(stat.S_IFREG | 0o644)) == "rs"

    def test_plain_file(self):
        assert classify_metadata("/a/README", meta(stat.S_IFREG | 0o644)) == "rs"

    def test_missing_link_count_is_unsupported(self):
        with pytest.raises(UnsupportedPlatformError):
            classify_metadata("/a.txt", meta(stat.S_IFREG | 0o644, nlink=None))

    def test_link_count_not_needed_for_directories(self):
        assert classify_metadata("/d", meta(stat.S_IFDIR | 0o755, nlink=None)) == "di"

    def test_identical_metadata_classifies_identically(self):
        m = meta(stat.S_IFREG | 0o600)
        assert classify_metadata("/x/data.bin", m) == classify_metadata("/x/data.bin", m)


class TestExtension:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("notes.txt", ".txt"),
            ("/a/b.tar.gz", ".gz"),
            ("/home/u/.gitignore", ".gitignore"),
            ("/a.d/README", ""),
            ("Makefile", ""),
        ],
    )
    def test_extension(self, path, expected):
        assert extension(path) == expected


class TestReadMetadata:
    def test_missing_path(self, tmp_path):
        assert read_metadata(str(tmp_path / "missing")) is None

    def test_regular_file(self, tmp_path):
        f = tmp_path / "f"
        f.write_text("x")
        m = read_metadata(str(f))
        assert stat.S_ISREG(m.mode)
        assert m.nlink == 1

    def test_permission_error(self, tmp_path):
        with patch("dufmt.filetypes.os.lstat", side_effect=PermissionError(13, "denied")):
            with pytest.raises(ClassificationError) as exc_info:
                read_metadata(str(tmp_path))
        assert exc_info.value.path == str(tmp_path)


class TestClassify:
    def test_directory(self, tmp_path):
        assert classify(str(tmp_path)) == CategoryCode.DIRECTORY

    def test_missing_path(self, tmp_path):
        assert classify(str(tmp_path / "missing")) == CategoryCode.ORPHAN

    def test_text_file(self, tmp_path):
        f = tmp_path / "notes.txt"
        f.write_text("x")
        assert classify(str(f)) == "*.txt"

    def test_plain_file(self, tmp_path):
        f = tmp_path / "README"
        f.write_text("x")
        os.chmod(f, 0o644)
        assert classify(str(f)) == CategoryCode.RESET

    def test_executable(self, tmp_path):
        f = tmp_path / "run.sh"
        f.write_text("#!/bin/sh\n")
        os.chmod(f, 0o755)
        assert classify(str(f)) == CategoryCode.EXECUTABLE

    def test_symlink(self, tmp_path):
        target = tmp_path / "target.txt"
        target.write_text("x")
        link = tmp_path / "link"
        os.symlink(target, link)
        assert classify(str(link)) == CategoryCode.SYMLINK

    def test_dangling_symlink(self, tmp_path):
        link = tmp_path / "link"
        os.symlink(tmp_path / "gone", link)
        assert classify(str(link)) == CategoryCode.ORPHAN

    def test_hardlink(self, tmp_path):
        f = tmp_path / "a.txt"
        f.write_text("x")
        os.chmod(f, 0o644)
        os.link(f, tmp_path / "b.txt")
        assert classify(str(f)) == CategoryCode.MULTI_HARDLINK

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="no named pipes")
    def test_named_pipe(self, tmp_path):
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)
        assert classify(str(fifo)) == CategoryCode.NAMED_PIPE

    def test_custom_reader(self):
        def reader(path):
            return FileMetadata(mode=stat.S_IFSOCK | 0o755, nlink=1)

        assert classify("/run/app.sock", reader=reader) == CategoryCode.SOCKET
