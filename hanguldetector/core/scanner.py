from __future__ import annotations

import fnmatch
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from tqdm import tqdm

from .exceptions import RootNotFoundError
from .filters import LineFilter
from .models import Detection, ScanConfig
from .store import ResultStore
from .utils import normalize_path, read_source_text, split_lines


DEFAULT_LOGGER_NAME = "hanguldetector"
LOG_PREFIX = "[HangulDetector]"
SLOW_SCAN_THRESHOLD_SECONDS = 2.0


def configure_logging(verbose: bool = False, logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Configure and return the package logger.

    INFO is the tool's console channel (banners, one line per detection and
    the report path); ``verbose`` lowers the level to DEBUG for per-file
    diagnostics.
    """

    logger = logging.getLogger(logger_name)
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger


class FileScanner:
    """Reads one file and records every detecting line into the store."""

    def __init__(
        self,
        line_filter: LineFilter,
        store: ResultStore,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.line_filter = line_filter
        self.store = store
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())

    def scan(self, path_key: str, path: Path) -> int:
        content = read_source_text(path)
        file_name = path.name
        found = 0
        for line_num, line in enumerate(split_lines(content), start=1):
            text = self.line_filter.match(line)
            if text is None:
                continue
            self.store.add(path_key, Detection(line_num=line_num, text=text))
            found += 1
            self.logger.info("%s %s (%d): %s", LOG_PREFIX, file_name, line_num, text)
        return found


class DirectoryScanner:
    def __init__(
        self,
        config: ScanConfig,
        store: Optional[ResultStore] = None,
        workers: int = 8,
        *,
        logger: Optional[logging.Logger] = None,
        show_progress: bool = True,
        progress_desc: str = "Scanning files",
    ) -> None:
        self.config = config
        self.root = config.root
        self.store = store if store is not None else ResultStore()
        self.workers = max(1, workers)
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())
        self.show_progress = bool(show_progress)
        self.progress_desc = progress_desc
        self.line_filter = LineFilter(config.exclude_words, config.target_pattern)
        self.file_scanner = FileScanner(self.line_filter, self.store, logger=base_logger)
        self.failures: Dict[str, str] = {}
        self._slow_log_threshold = SLOW_SCAN_THRESHOLD_SECONDS

    def _is_excluded_dir(self, path: Path) -> bool:
        if not self.config.exclude_dirs:
            return False
        try:
            parts = path.relative_to(self.root).parts[:-1]
        except ValueError:
            parts = path.parts[:-1]
        return any(part in self.config.exclude_dirs for part in parts)

    def iter_files(self) -> Iterator[Tuple[str, Path]]:
        """Yield ``(normalised key, path)`` for every file to scan."""
        for p in self.root.rglob("*"):
            if not any(fnmatch.fnmatch(p.name, pat) for pat in self.config.include_globs):
                continue
            if not p.is_file() or self._is_excluded_dir(p):
                continue
            if self.config.max_file_size is not None:
                try:
                    if p.stat().st_size > self.config.max_file_size:
                        self.logger.debug("Skipping %s: larger than %d bytes", p, self.config.max_file_size)
                        continue
                except OSError as exc:
                    self.logger.warning("Unable to stat %s: %s", p, exc)
                    continue
            yield normalize_path(p), p

    def scan(self) -> ResultStore:
        if not self.root.is_dir():
            raise RootNotFoundError(self.root)

        self.logger.info("%s Start.", LOG_PREFIX)
        files: List[Tuple[str, Path]] = list(self.iter_files())
        total_files = len(files)
        self.logger.info("%s Find Files: %d", LOG_PREFIX, total_files)

        self.store.clear()
        self.failures = {}

        progress_bar = None
        if self.show_progress and total_files:
            progress_bar = tqdm(total=total_files, desc=self.progress_desc, unit="file")

        executor = ThreadPoolExecutor(max_workers=self.workers)
        try:
            futures = {executor.submit(self._scan_file, key, path): key for key, path in files}
            for future in as_completed(futures):
                key = futures[future]
                try:
                    future.result()
                except Exception as exc:
                    self._record_failure(key, exc)
                finally:
                    if progress_bar is not None:
                        progress_bar.update(1)
        except KeyboardInterrupt:
            self.logger.info("Scan interrupted by user; shutting down workers")
            raise
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
            if progress_bar is not None:
                progress_bar.close()

        self.store.freeze()
        self.logger.info(
            "%s Scanned %d file(s): %d detection(s) in %d file(s), %d unreadable",
            LOG_PREFIX,
            total_files,
            self.store.detection_count(),
            len(self.store),
            len(self.failures),
        )
        return self.store

    def _scan_file(self, key: str, path: Path) -> int:
        self.logger.debug("Processing %s", key)
        start_time = time.perf_counter()
        try:
            return self.file_scanner.scan(key, path)
        finally:
            duration = time.perf_counter() - start_time
            if duration >= self._slow_log_threshold:
                self.logger.debug("Slow scan for %s took %.2fs", key, duration)

    def _record_failure(self, key: str, exc: Exception) -> None:
        self.failures[key] = str(exc)
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.warning("Error scanning %s", key, exc_info=exc)
        else:
            self.logger.warning("Error scanning %s: %s", key, exc)
