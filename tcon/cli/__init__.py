"""Command-line tools for TCon."""

__version__ = "0.2.0"
