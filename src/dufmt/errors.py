"""Error types for dufmt.

Fatal errors (MalformedReportError, ReportSourceError, PlatformError) abort the
whole invocation. The others are recovered where they are raised and only
degrade the rendering of a single path.
"""


class DufmtError(Exception):
    """Base class for all dufmt errors."""


class MalformedReportError(DufmtError):
    """A size report line could not be parsed."""

    def __init__(self, line: str, reason: str = "") -> None:
        self.line = line
        self.reason = reason
        message = f"unexpected format: {line!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ReportSourceError(DufmtError):
    """The external size-reporting tool could not be invoked."""


class ClassificationError(DufmtError):
    """Metadata for a path could not be read."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        super().__init__(f"cannot classify {path}: {reason}" if reason else f"cannot classify {path}")


class WalkError(DufmtError):
    """A subtree could not be walked."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        super().__init__(f"cannot walk {path}: {reason}" if reason else f"cannot walk {path}")


class ColorSourceError(DufmtError):
    """No color database could be obtained."""


class PlatformError(DufmtError):
    """The host platform lacks metadata required for classification."""


class UnsupportedPlatformError(PlatformError):
    """Hard-link count metadata is unavailable on this platform."""


class BadArgumentError(DufmtError):
    """A path argument could not be resolved."""
