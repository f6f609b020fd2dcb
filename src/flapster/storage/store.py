"""
Key-value stores for the best score.

The game only needs ``get``/``set`` on string values. ``JsonFileStore``
keeps a flat JSON object on disk; read failures fall back to an empty store
and write failures are logged and dropped.
"""

from pathlib import Path
from typing import Dict, Optional, Protocol
import json
import logging
import re

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class KeyValueStore(Protocol):
    """Minimal string key-value store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """In-process store. Nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Persistent store backed by a JSON object file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: Dict[str, str] = {}
        self._load()

    def _load(self) -> None:
        """Load data from file."""
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            self._data = {str(k): str(v) for k, v in data.items()}
            logger.info(f"Loaded {len(self._data)} keys from {self.path}")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load store {self.path}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save store {self.path}: {e}")


def parse_score(raw: Optional[str]) -> int:
    """Parse a stored score from its leading digits.

    ``"12.5"`` and ``"12abc"`` read as 12. Anything without a leading integer,
    and any negative value, is 0.
    """
    if raw is None:
        return 0
    match = _LEADING_INT.match(str(raw))
    if match is None:
        logger.warning(f"Ignoring malformed stored score: {raw!r}")
        return 0
    return max(0, int(match.group(1)))


def load_best_score(store: KeyValueStore, key: str) -> int:
    """Read the best score, treating an unreadable store as empty."""
    try:
        raw = store.get(key)
    except Exception as e:
        logger.error(f"Failed to read best score: {e}")
        return 0
    return parse_score(raw)
