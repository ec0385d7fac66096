from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple, Union

from .models import DEFAULT_EXCLUDE_WORDS, HANGUL_PATTERN


DOUBLE_QUOTE = '"'


def trim_line(line: str) -> str:
    return line.rstrip("\r").strip()


class LineFilter:
    """
    Decides whether a single source line is a detection. A line counts when,
    after trimming, it contains no exclusion word, contains a double quote and
    contains at least one character of the target pattern. The whole trimmed
    line is the recorded text.
    """

    def __init__(
        self,
        exclude_words: Iterable[str] = DEFAULT_EXCLUDE_WORDS,
        target_pattern: Union[str, re.Pattern] = HANGUL_PATTERN,
    ) -> None:
        self.exclude_words: Tuple[str, ...] = tuple(exclude_words)
        if isinstance(target_pattern, str):
            target_pattern = re.compile(target_pattern)
        self.target_pattern: re.Pattern = target_pattern

    def contains_excluded(self, text: str) -> bool:
        for word in self.exclude_words:
            if word in text:
                return True
        return False

    def match(self, line: str) -> Optional[str]:
        text = trim_line(line)
        if self.contains_excluded(text):
            return None
        # no quote, no string literal
        if DOUBLE_QUOTE not in text:
            return None
        if self.target_pattern.search(text) is None:
            return None
        return text

    def is_detection(self, line: str) -> bool:
        return self.match(line) is not None
