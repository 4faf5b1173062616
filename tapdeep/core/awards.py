from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import yaml


@dataclass(frozen=True)
class Award:
    key: str
    name: str
    symbol: str
    threshold: int


def default_awards_path() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "awards.yaml"


class AwardCatalog:
    """Ordered, read-only set of award tiers sorted ascending by threshold."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path if path is not None else default_awards_path()
        self._awards = self._load_awards()
        self._by_threshold: Dict[int, Award] = {a.threshold: a for a in self._awards}

    @classmethod
    def from_entries(cls, entries: Iterable[Union[Award, dict]]) -> "AwardCatalog":
        """Build a catalog from in-code entries instead of the YAML file."""
        catalog = cls.__new__(cls)
        catalog._path = None
        catalog._awards = _build_awards(list(entries), source="<entries>")
        catalog._by_threshold = {a.threshold: a for a in catalog._awards}
        return catalog

    def all(self) -> List[Award]:
        return list(self._awards)

    def get(self, key: str) -> Award:
        for award in self._awards:
            if award.key == key:
                return award
        raise KeyError(key)

    def find_by_threshold(self, value: int) -> Optional[Award]:
        """Return the award whose threshold equals ``value`` exactly."""
        return self._by_threshold.get(value)

    def thresholds(self) -> List[int]:
        return [a.threshold for a in self._awards]

    def max_threshold(self) -> int:
        return self._awards[-1].threshold if self._awards else 0

    def __len__(self) -> int:
        return len(self._awards)

    def __iter__(self):
        return iter(self._awards)

    def _load_awards(self) -> List[Award]:
        if not self._path.exists():
            raise FileNotFoundError(f"Awards file not found: {self._path}")
        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{self._path.name}: expected YAML mapping with 'awards'")
        entries = raw.get("awards")
        if not isinstance(entries, list):
            raise ValueError(f"{self._path.name}: missing or invalid 'awards' list")
        return _build_awards(entries, source=self._path.name)


def _build_awards(entries: list, source: str) -> List[Award]:
    if not entries:
        raise ValueError(f"{source}: no awards defined")

    awards: List[Award] = []
    for index, entry in enumerate(entries):
        if isinstance(entry, Award):
            awards.append(entry)
            continue
        if not isinstance(entry, dict):
            raise ValueError(f"{source}: award #{index} is not a mapping")
        name = entry.get("name")
        if not name or not isinstance(name, str) or not name.strip():
            raise ValueError(f"{source}: award #{index} missing or invalid 'name'")
        threshold = entry.get("threshold")
        # bool is an int subclass; reject it explicitly
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
            raise ValueError(f"{source}: award '{name.strip()}' has invalid 'threshold'")
        key = entry.get("key") or f"depth{threshold}"
        symbol = str(entry.get("symbol") or "").strip()
        awards.append(Award(key=str(key), name=name.strip(), symbol=symbol, threshold=threshold))

    seen_thresholds: set[int] = set()
    seen_keys: set[str] = set()
    for award in awards:
        if award.threshold in seen_thresholds:
            raise ValueError(f"{source}: duplicate threshold {award.threshold}")
        if award.key in seen_keys:
            raise ValueError(f"{source}: duplicate key '{award.key}'")
        seen_thresholds.add(award.threshold)
        seen_keys.add(award.key)

    return sorted(awards, key=lambda a: a.threshold)
