"""Data models for dufmt."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

TOTAL_NAME = "total"


class ColorMode(str, Enum):
    """When to surround paths with terminal color sequences."""

    NEVER = "never"
    ALWAYS = "always"
    AUTO = "auto"  # Only when stdout is a terminal


class CategoryCode(str, Enum):
    """dircolors(5) codes for file types.

    Extension-specific codes (``*.ext``) are plain strings and are not members.
    """

    RESET = "rs"  # Normal file
    DIRECTORY = "di"
    SYMLINK = "ln"
    MULTI_HARDLINK = "mh"
    NAMED_PIPE = "pi"
    SOCKET = "so"
    BLOCK_DEVICE = "bd"
    CHAR_DEVICE = "cd"
    ORPHAN = "or"
    SETUID = "su"
    SETGID = "sg"
    EXECUTABLE = "ex"


class SizeRecord(BaseModel):
    """One line of a disk usage report."""

    name: str = Field(..., description="Path as reported by the size source")
    size: int = Field(..., ge=0, description="Size in bytes")
    child_count: int = Field(0, ge=0, description="Entries under the path, root included")


class ReportSet(BaseModel):
    """Size records ordered by size with a synthesized total."""

    records: list[SizeRecord] = Field(default_factory=list)

    @classmethod
    def from_records(cls, records: list[SizeRecord]) -> "ReportSet":
        """Build a report set sorted ascending by size.

        The sort is stable so equal sizes keep their report order.
        """
        return cls(records=sorted(records, key=lambda r: r.size))

    @property
    def total_size(self) -> int:
        """Sum of all record sizes."""
        return sum(r.size for r in self.records)

    @property
    def total(self) -> SizeRecord:
        """Synthesized total record."""
        return SizeRecord(name=TOTAL_NAME, size=self.total_size)


class FileMetadata(BaseModel):
    """The subset of lstat metadata the classifier looks at."""

    mode: int = Field(..., description="st_mode, symlinks not followed")
    nlink: Optional[int] = Field(None, description="Hard link count, None if unsupported")
    target_exists: bool = Field(True, description="For symlinks: whether the target resolves")
