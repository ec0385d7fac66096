"""Exceptions raised by the detector."""

from __future__ import annotations

from pathlib import Path
from typing import Union


class HangulDetectorError(Exception):
    """Base class for detector failures."""


class RootNotFoundError(HangulDetectorError):
    """Raised when the directory to scan does not exist."""

    def __init__(self, root: Union[str, Path]):
        self.root = root
        super().__init__(f"Root directory not found: {root}")


class FileReadError(HangulDetectorError):
    """Raised when a single source file cannot be read or decoded."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to read {path}: {reason}")
