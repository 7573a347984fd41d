"""Count filesystem entries under reported paths."""

import logging
import os
import stat

from dufmt.errors import WalkError

logger = logging.getLogger(__name__)


def count_entries(path: str) -> int:
    """
    Count the entries of the subtree rooted at path, the root included.

    Symlinks are counted but not followed. Directories that cannot be read
    below the root are skipped and the count carries on.

    Raises:
        WalkError: If the root itself cannot be read
    """
    try:
        info = os.lstat(path)
    except OSError as e:
        raise WalkError(path, e.strerror or str(e)) from e

    if not stat.S_ISDIR(info.st_mode):
        return 1

    try:
        return 1 + _count_dir(path)
    except OSError as e:
        raise WalkError(path, e.strerror or str(e)) from e


def _count_dir(path: str) -> int:
    n = 0
    with os.scandir(path) as entries:
        for entry in entries:
            n += 1
            try:
                if entry.is_dir(follow_symlinks=False):
                    n += _count_dir(entry.path)
            except OSError as e:
                logger.debug("Skipping %s: %s", entry.path, e)
    return n


def count_children(path: str) -> int:
    """Count entries under path, or 0 if the walk cannot start."""
    try:
        return count_entries(path)
    except WalkError as e:
        logger.warning("%s", e)
        return 0
