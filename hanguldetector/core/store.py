from __future__ import annotations

import threading
from typing import Dict, List, Tuple

from .models import Detection


class ResultStore:
    """
    Thread-safe aggregation of detections keyed by normalised file path.

    Scan tasks call ``add`` concurrently; each key is written by a single task.
    Once the scan joins, ``freeze`` makes the store read-only and ``snapshot``
    hands out a copy for reporting.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: Dict[str, List[Detection]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def clear(self) -> None:
        with self._lock:
            self._check_writable()
            self._results.clear()

    def add(self, path_key: str, detection: Detection) -> None:
        with self._lock:
            self._check_writable()
            self._results.setdefault(path_key, []).append(detection)

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    def snapshot(self) -> Dict[str, Tuple[Detection, ...]]:
        with self._lock:
            return {key: tuple(items) for key, items in self._results.items()}

    def detection_count(self) -> int:
        with self._lock:
            return sum(len(items) for items in self._results.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def _check_writable(self) -> None:
        if self._frozen:
            raise RuntimeError("ResultStore is frozen; start a new run with a new store")
