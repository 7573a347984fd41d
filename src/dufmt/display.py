"""Rendering of disk usage reports."""

import math
import os
from typing import Callable, Optional, TextIO

from rich.console import Console

from dufmt.dircolors import ColorDatabase, for_tty
from dufmt.models import ColorMode, ReportSet, SizeRecord

console = Console()

# Diagnostics go to stderr so they never mix with the report.
err_console = Console(stderr=True)

IEC_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]
SIZE_WIDTH = 12
COUNT_WIDTH = 9


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (binary units, e.g. "4.0 KiB")."""
    if size_bytes < 10:
        return f"{size_bytes} B"

    exponent = 0
    while exponent < len(IEC_UNITS) - 1 and size_bytes >= 1024 ** (exponent + 1):
        exponent += 1

    value = math.floor(size_bytes / 1024**exponent * 10 + 0.5) / 10
    if value < 10:
        return f"{value:.1f} {IEC_UNITS[exponent]}"
    return f"{value:.0f} {IEC_UNITS[exponent]}"


def format_count(n: int) -> str:
    """Right-justified child count, blank for a lone entry."""
    if n <= 1:
        return " " * COUNT_WIDTH
    return f"{n:>{COUNT_WIDTH}d}"


def should_colorize(mode: ColorMode, stream: TextIO) -> bool:
    """Whether names written to stream get color sequences."""
    if mode == ColorMode.ALWAYS:
        return True
    if mode == ColorMode.AUTO:
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())
    return False


def format_record(record: SizeRecord, name: str) -> str:
    """One report line, without the trailing newline."""
    return f"{format_size(record.size):>{SIZE_WIDTH}} {format_count(record.child_count)} {name}"


def format_report(
    report: ReportSet,
    colorize: bool = False,
    database: Optional[ColorDatabase] = None,
    colorizer: Callable[..., str] = for_tty,
) -> list[str]:
    """
    Format every row of a report, total last.

    Args:
        report: Records to show
        colorize: Whether to wrap names in color sequences
        database: Color database (default: the process-wide one)
        colorizer: Function wrapping a name given the database

    Returns:
        Lines without trailing newlines
    """
    lines = []
    for record in report.records:
        name = record.name
        if colorize:
            name = colorizer(name, database)
        lines.append(format_record(record, name))
    # The total is not a path and is never colored.
    total = report.total
    lines.append(format_record(total, total.name))
    return lines


def write_report(
    report: ReportSet,
    stream: TextIO,
    mode: ColorMode = ColorMode.AUTO,
    database: Optional[ColorDatabase] = None,
    colorizer: Callable[..., str] = for_tty,
) -> None:
    """Write a report to stream.

    All lines are formatted before anything is written, so an error while
    formatting leaves the stream untouched. Streams with a byte buffer get
    names back in the filesystem encoding, undecodable bytes included.
    """
    lines = format_report(
        report,
        colorize=should_colorize(mode, stream),
        database=database,
        colorizer=colorizer,
    )
    text = "".join(line + "\n" for line in lines)
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(text)
        stream.flush()
        return

    stream.flush()
    buffer.write(os.fsencode(text))
    buffer.flush()
