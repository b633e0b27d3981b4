# src/vertex_run/game/storage.py
"""
Key-value persistence for the death counter and the best score.

Storage is best effort: unreadable files, missing keys and malformed values all
read back as 0, and failed writes are logged, never raised.
"""
from __future__ import annotations
import json
import logging
import math
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from .config import DEATHS_KEY, RECORD_KEY, MAX_PROGRESS

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store (tests, headless rollouts)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Flat JSON object on disk, rewritten on every set()."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s, starting empty: %s", self.path, e)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring %s: expected a JSON object", self.path)
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write %s: %s", self.path, e)


def _read_int(store: KeyValueStore, key: str) -> int:
    try:
        raw = store.get(key)
    except Exception as e:  # store backends are external; reads must not fail the game
        logger.warning("Reading %r failed: %s", key, e)
        return 0
    if raw is None:
        return 0
    try:
        return int(str(raw).strip())
    except ValueError:
        logger.warning("Ignoring malformed value for %r: %r", key, raw)
        return 0


def _write(store: KeyValueStore, key: str, value: int) -> None:
    try:
        store.set(key, str(value))
    except Exception as e:
        logger.warning("Writing %r failed: %s", key, e)


class RecordBook:
    """Deaths and best progress (0..100) on top of a KeyValueStore."""

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.store: KeyValueStore = store if store is not None else MemoryStore()

    def load_deaths(self) -> int:
        deaths = _read_int(self.store, DEATHS_KEY)
        return deaths if deaths >= 0 else 0

    def save_deaths(self, deaths: int) -> None:
        _write(self.store, DEATHS_KEY, int(deaths))

    def load_record(self) -> int:
        record = _read_int(self.store, RECORD_KEY)
        return max(0, min(MAX_PROGRESS, record))

    def submit_score(self, score: float) -> int:
        """Store score if it beats the record; returns the (possibly new) record."""
        value = min(MAX_PROGRESS, int(math.floor(score)))
        prev = self.load_record()
        if value > prev:
            _write(self.store, RECORD_KEY, value)
            logger.info("New record: %d%%", value)
            return value
        return prev
