"""Disk usage summarization for dufmt."""

from typing import Callable, Optional

from dufmt.models import ReportSet, SizeRecord
from dufmt.report import ReportSource, parse_report, run_du
from dufmt.scanner import count_children


def summarize(
    paths: list[str],
    source: Optional[ReportSource] = None,
    counter: Callable[[str], int] = count_children,
) -> ReportSet:
    """
    Build a sorted report for paths.

    Args:
        paths: Paths to report on
        source: Size report source (default: du)
        counter: Counts the entries under each reported path

    Returns:
        ReportSet sorted ascending by size

    Raises:
        ReportSourceError: If the size report cannot be produced
        MalformedReportError: If the size report does not parse
    """
    if not paths:
        return ReportSet()

    data = (source or run_du)(paths)
    records = [
        SizeRecord(name=r.name, size=r.size, child_count=counter(r.name))
        for r in parse_report(data)
    ]
    return ReportSet.from_records(records)
