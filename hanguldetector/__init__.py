"""Detect hard-coded Hangul string literals in source trees."""

__version__ = "0.1.0"
