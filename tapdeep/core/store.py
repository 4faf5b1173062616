from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEPTH_KEY = "depth"


def default_store_path() -> Path:
    base = os.environ.get("TAPDEEP_HOME")
    root = Path(base) if base else Path.home() / ".tapdeep"
    return root / "progress.json"


class CounterStore:
    """Named integer cells persisted to a JSON file across app restarts.
    File: ~/.tapdeep/progress.json unless TAPDEEP_HOME points elsewhere."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path if file_path is not None else default_store_path()
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._values = self._load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def get_int(self, name: str, default: int = 0) -> int:
        return self._values.get(name, default)

    def set_int(self, name: str, value: int) -> None:
        self._values[name] = int(value)
        self._save()

    def reset(self) -> None:
        """Forget every stored value."""
        self._values = {}
        self._save()

    def save(self) -> None:
        """Persist current state to disk (e.g. on app exit)."""
        self._save()

    def _load(self) -> Dict[str, int]:
        values: Dict[str, int] = {}
        if not self._file_path.exists():
            return values
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load progress from %s: %s", self._file_path, e)
            return values
        if not isinstance(payload, dict):
            logger.warning("Ignoring malformed progress file %s", self._file_path)
            return values

        for key, value in payload.items():
            if isinstance(value, bool) or not isinstance(value, int):
                logger.warning("Ignoring non-integer progress entry %r in %s", key, self._file_path)
                continue
            # counters are non-negative
            values[key] = max(0, value)
        return values

    def _save(self) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(self._values, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save progress to %s: %s", self._file_path, e)
