"""Align a trailing character to a fixed column in text files."""

__version__ = "0.2.0"
