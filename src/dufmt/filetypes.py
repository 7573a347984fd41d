"""Classify paths into dircolors(5) categories.

Classification looks at lstat metadata only, through a ``MetadataReader``.
The hard link count it needs is not available everywhere: when a reader
reports no link count the classifier raises ``UnsupportedPlatformError``
instead of guessing.
"""

import os
import stat
from typing import Callable, Optional

from dufmt.errors import ClassificationError, UnsupportedPlatformError
from dufmt.models import CategoryCode, FileMetadata

# Returns None when the path does not exist.
MetadataReader = Callable[[str], Optional[FileMetadata]]

EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def extension(path: str) -> str:
    """Extension of the last path element from its final dot, e.g. ".gz".

    Dotfiles are all extension: ".bashrc" gives ".bashrc".
    """
    base = os.path.basename(path)
    i = base.rfind(".")
    return base[i:] if i != -1 else ""


def read_metadata(path: str) -> Optional[FileMetadata]:
    """Read lstat metadata for path.

    Raises:
        ClassificationError: If the path exists but cannot be inspected
    """
    try:
        info = os.lstat(path)
    except FileNotFoundError:
        return None
    except OSError as e:
        raise ClassificationError(path, e.strerror or str(e)) from e

    target_exists = True
    if stat.S_ISLNK(info.st_mode):
        # Targets that cannot be checked, e.g. EACCES, count as unresolved.
        target_exists = os.path.exists(path)

    return FileMetadata(
        mode=info.st_mode,
        nlink=getattr(info, "st_nlink", None),
        target_exists=target_exists,
    )


def classify_metadata(path: str, meta: Optional[FileMetadata]) -> str:
    """Map metadata to a category code. The first matching rule wins."""
    if meta is None:
        return CategoryCode.ORPHAN.value

    mode = meta.mode
    if stat.S_ISDIR(mode):
        return CategoryCode.DIRECTORY.value
    if stat.S_ISLNK(mode):
        if not meta.target_exists:
            return CategoryCode.ORPHAN.value
        return CategoryCode.SYMLINK.value
    if stat.S_ISFIFO(mode):
        return CategoryCode.NAMED_PIPE.value
    if stat.S_ISSOCK(mode):
        return CategoryCode.SOCKET.value
    if stat.S_ISCHR(mode):
        return CategoryCode.CHAR_DEVICE.value
    if stat.S_ISBLK(mode):
        return CategoryCode.BLOCK_DEVICE.value
    if mode & stat.S_ISUID:
        return CategoryCode.SETUID.value
    if mode & stat.S_ISGID:
        return CategoryCode.SETGID.value
    if mode & EXECUTABLE_BITS:
        return CategoryCode.EXECUTABLE.value

    if meta.nlink is None:
        raise UnsupportedPlatformError("hard link count is not available on this platform")
    if meta.nlink > 1:
        return CategoryCode.MULTI_HARDLINK.value

    ext = extension(path)
    if ext:
        return "*" + ext

    return CategoryCode.RESET.value


def classify(path: str, reader: MetadataReader = read_metadata) -> str:
    """
    Return the dircolors code for path, e.g. "di" for a directory.

    Args:
        path: Path to classify (symlinks are not followed)
        reader: Metadata source

    Returns:
        A ``CategoryCode`` value or an extension code such as ``"*.tar"``

    Raises:
        ClassificationError: If metadata cannot be read
        UnsupportedPlatformError: If the platform has no hard link count
    """
    return classify_metadata(path, reader(path))
