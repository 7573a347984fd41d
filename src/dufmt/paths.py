"""Choose which paths to report on from command line arguments."""

import os
import stat

from dufmt.errors import BadArgumentError


def list_entries(directory: str) -> list[str]:
    """Immediate entries of a directory, hidden ones included, sorted by name.

    Entries are joined onto ``directory`` unless it is the current directory.
    """
    try:
        names = sorted(os.listdir(directory))
    except OSError as e:
        raise BadArgumentError(f"{directory}: {e.strerror or e}") from e
    if directory in ("", "."):
        return names
    return [os.path.join(directory, name) for name in names]


def resolve_paths(args: list[str]) -> list[str]:
    """
    Determine which paths to pass to the size report source.

    Args:
        args: Positional command line arguments

    Returns:
        The current directory's entries when no args are given, the entries of
        the directory when a single directory is given, otherwise ``args``.
    """
    if not args:
        return list_entries(".")

    if len(args) == 1:
        first = args[0]
        try:
            info = os.stat(first)
        except OSError as e:
            raise BadArgumentError(f"{first}: {e.strerror or e}") from e
        if stat.S_ISDIR(info.st_mode):
            return list_entries(first)

    return list(args)
