from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple


# Hangul compatibility jamo (ㄱ-ㅎ) and precomposed syllables (가-힣).
HANGUL_PATTERN = "[ㄱ-ㅎ가-힣]"

DEFAULT_INCLUDE_GLOBS: Tuple[str, ...] = ("*.cs",)

# Lines containing any of these substrings are ignored.
DEFAULT_EXCLUDE_WORDS: Tuple[str, ...] = (
    "//",
    "/*",
    "*/",
    "Debug.",
    "PrintLog(",
    "PrintError(",
    "PrintLogError(",
    "Obsolete(",
    "UIManager.Instance.EditorShowSystemMessage",
    "UnityEditor",
)

DEFAULT_EXCLUDE_DIRS: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Detection:
    line_num: int
    text: str  # the trimmed source line


@dataclass(frozen=True)
class ScanConfig:
    """Immutable settings for one detection run."""

    root: Path
    include_globs: Tuple[str, ...] = DEFAULT_INCLUDE_GLOBS
    exclude_words: Tuple[str, ...] = DEFAULT_EXCLUDE_WORDS
    target_pattern: re.Pattern = field(default_factory=lambda: re.compile(HANGUL_PATTERN))
    exclude_dirs: Tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    max_file_size: Optional[int] = None
