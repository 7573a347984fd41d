"""dufmt - disk usage ordered by size with human readable, colorized output."""

__version__ = "0.1.0"
