"""Chronicle CLI - focus sessions and productivity analytics."""

__version__ = "0.1.0"
