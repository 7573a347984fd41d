"""Size report source and parser.

A size report is the output of ``du --summarize --bytes``: one
``<bytes>\\t<path>`` line per reported path.
"""

import logging
import os
import subprocess
from typing import Callable, Optional

from dufmt.errors import MalformedReportError, ReportSourceError
from dufmt.models import SizeRecord

logger = logging.getLogger(__name__)

DEFAULT_DU_COMMAND = ["du", "--summarize", "--bytes", "--"]

# Anything that turns a list of paths into raw report bytes.
ReportSource = Callable[[list[str]], bytes]


def run_du(paths: list[str], command: Optional[list[str]] = None) -> bytes:
    """
    Run the size report command over paths.

    Args:
        paths: Paths to summarize
        command: Command and leading arguments (default: du --summarize --bytes --)

    Returns:
        Raw report bytes

    Raises:
        ReportSourceError: If the command cannot be run, or fails without
            producing any report
    """
    argv = [*(command or DEFAULT_DU_COMMAND), *paths]
    try:
        result = subprocess.run(argv, capture_output=True, check=False)
    except OSError as e:
        raise ReportSourceError(f"cannot execute {argv[0]}: {e}") from e

    if result.returncode != 0:
        stderr = os.fsdecode(result.stderr).strip()
        if not result.stdout:
            raise ReportSourceError(
                f"{argv[0]} exited with status {result.returncode}: {stderr}"
            )
        # du still reports what it could read
        logger.warning("%s exited with status %d: %s", argv[0], result.returncode, stderr)

    return result.stdout


def parse_line(line: str) -> SizeRecord:
    """Parse a single ``<bytes>\\t<path>`` line."""
    items = line.split("\t", 1)
    if len(items) != 2:
        raise MalformedReportError(line, "missing tab separator")

    size_text, name = items
    if not (size_text.isascii() and size_text.isdigit()):
        raise MalformedReportError(line, f"invalid byte count {size_text!r}")

    try:
        size = int(size_text)
    except ValueError as e:
        raise MalformedReportError(line, str(e)) from e

    return SizeRecord(name=name, size=size)


def parse_report(data: bytes) -> list[SizeRecord]:
    """
    Parse raw report bytes into size records, in input order.

    Empty lines are skipped. Paths that are not valid UTF-8 are kept
    round-trippable with the filesystem encoding.

    Raises:
        MalformedReportError: On the first line that does not parse
    """
    records = []
    for raw in data.split(b"\n"):
        if not raw:
            continue
        records.append(parse_line(os.fsdecode(raw)))
    return records
