from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

from .models import Detection
from .scanner import DEFAULT_LOGGER_NAME, LOG_PREFIX
from .store import ResultStore


REPORT_PREFIX = "HangulDetector"
TIMESTAMP_FORMAT = "%Y-%m-%d_%H%M%S"

Snapshot = Mapping[str, Sequence[Detection]]


class ReportWriter:
    """Renders a frozen result store into a ``HangulDetector_<timestamp>.txt`` file."""

    def __init__(
        self,
        out_dir: Optional[Path] = None,
        fallback_dir: Optional[Path] = None,
        sort: bool = True,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.out_dir = out_dir
        self.fallback_dir = fallback_dir
        self.sort = sort
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())

    def resolve_output_dir(self) -> Path:
        if self.out_dir is not None and self.out_dir.is_dir():
            return self.out_dir
        fallback = self.fallback_dir if self.fallback_dir is not None else Path.cwd()
        if self.out_dir is not None:
            self.logger.warning("Output directory %s does not exist; writing to %s", self.out_dir, fallback)
        return fallback

    def render(self, results: Snapshot) -> str:
        keys: List[str] = list(results.keys())
        if self.sort:
            keys.sort()
        lines: List[str] = []
        for file_path in keys:
            detections = list(results[file_path])
            if self.sort:
                detections.sort(key=lambda d: d.line_num)
            for d in detections:
                lines.append(f"{file_path} ({d.line_num}): {d.text}\n")
        return "".join(lines)

    @staticmethod
    def report_name(now: datetime) -> str:
        return f"{REPORT_PREFIX}_{now.strftime(TIMESTAMP_FORMAT)}.txt"

    def write(self, results: Union[ResultStore, Snapshot], now: Optional[datetime] = None) -> Path:
        snapshot: Dict[str, Sequence[Detection]]
        if isinstance(results, ResultStore):
            snapshot = dict(results.snapshot())
        else:
            snapshot = dict(results)
        report_path = self.resolve_output_dir() / self.report_name(now or datetime.now())
        report_path.write_text(self.render(snapshot), encoding="utf-8")
        self.logger.info("%s Report created: %s", LOG_PREFIX, report_path.as_posix())
        return report_path
