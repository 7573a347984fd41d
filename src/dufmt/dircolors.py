"""Terminal colors for paths, following dircolors(5).

The color database is read once per process, from ``LS_COLORS`` or, when
that is unset, from ``dircolors -b``. It is never rebuilt afterwards
(``reset_color_database`` exists for tests). First construction happens
under a lock so concurrent callers see a single database.

See also: ``dircolors --print-database``.
"""

import logging
import os
import subprocess
import threading
from typing import Callable, Optional

from pydantic import BaseModel, Field

from dufmt.errors import ClassificationError, ColorSourceError
from dufmt.filetypes import classify

logger = logging.getLogger(__name__)

DEFAULT_COLORS_ENV_VAR = "LS_COLORS"
DEFAULT_DIRCOLORS_COMMAND = ["dircolors", "-b"]

ESC = "\033"
RESET_SEQUENCE = ESC + "[0m"

# Anything that produces a raw color specification string.
ColorSource = Callable[[], str]


def run_dircolors(command: Optional[list[str]] = None) -> str:
    """
    Get the color specification from ``dircolors -b``.

    Its output looks like ``LS_COLORS='rs=0:di=01;34:...';\\nexport LS_COLORS``;
    the text between the first and last single quote is returned.

    Raises:
        ColorSourceError: If the command fails or prints something unexpected
    """
    argv = command or DEFAULT_DIRCOLORS_COMMAND
    try:
        result = subprocess.run(argv, capture_output=True, text=True, check=True)
    except (OSError, subprocess.CalledProcessError) as e:
        raise ColorSourceError(f"cannot execute {argv[0]}: {e}") from e

    data = result.stdout
    start, end = data.find("'"), data.rfind("'")
    if start == -1 or end == start:
        raise ColorSourceError(f"`{' '.join(argv)}` returned bad format ({data!r})")
    return data[start + 1 : end]


def parse_color_spec(spec: str) -> dict[str, str]:
    """Parse ``code=attribute`` pairs separated by colons.

    Pairs without exactly one ``=`` are skipped.
    """
    colors = {}
    for pair in spec.split(":"):
        if pair.count("=") != 1:
            continue
        code, attribute = pair.split("=")
        colors[code] = attribute
    return colors


class ColorDatabase(BaseModel):
    """Mapping of dircolors code to SGR attribute string, e.g. "di" -> "01;34"."""

    colors: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_spec(cls, spec: str) -> "ColorDatabase":
        return cls(colors=parse_color_spec(spec))

    def lookup(self, code: str) -> str:
        """Attribute for code, or "" if there is none."""
        return self.colors.get(code, "")

    def __len__(self) -> int:
        return len(self.colors)


def load_color_spec(
    env_var: str = DEFAULT_COLORS_ENV_VAR,
    source: Optional[ColorSource] = None,
) -> str:
    """Color specification from the environment, else from source.

    Returns "" when neither is available.
    """
    spec = os.environ.get(env_var, "")
    if spec:
        return spec

    try:
        return (source or run_dircolors)()
    except ColorSourceError as e:
        logger.warning("no dircolor support: %s", e)
        return ""


_color_database: Optional[ColorDatabase] = None
_color_database_lock = threading.Lock()


def get_color_database(
    env_var: str = DEFAULT_COLORS_ENV_VAR,
    source: Optional[ColorSource] = None,
) -> ColorDatabase:
    """Return the process-wide color database, building it on first use."""
    global _color_database
    if _color_database is None:
        with _color_database_lock:
            if _color_database is None:
                _color_database = ColorDatabase.from_spec(load_color_spec(env_var, source))
    return _color_database


def reset_color_database() -> None:
    """Forget the cached color database."""
    global _color_database
    with _color_database_lock:
        _color_database = None


def wrap(path: str, attribute: str) -> str:
    """Surround path with the escape sequence for attribute, if any."""
    if not attribute:
        return path
    return f"{ESC}[{attribute}m{path}{RESET_SEQUENCE}"


def for_tty(
    path: str,
    database: Optional[ColorDatabase] = None,
    classifier: Callable[[str], str] = classify,
) -> str:
    """
    Wrap path with color sequences based on its type, e.g. dirs in blue.

    Paths that cannot be classified are returned unchanged.

    Raises:
        UnsupportedPlatformError: If classification is impossible on this platform
    """
    if database is None:
        database = get_color_database()

    try:
        code = classifier(path)
    except ClassificationError as e:
        logger.warning("%s", e)
        return path
    return wrap(path, database.lookup(code))
