"""Durable key-value slot for the plan snapshot: load, save, clear.

Persistence is best-effort. Failures are logged and absorbed so the
in-memory snapshot stays authoritative for the running session.
"""
import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from holiday_hero.models.plan import AppData

logger = logging.getLogger(__name__)


# Bump the suffix on incompatible schema changes; old slots then read as absent
STORAGE_KEY = "holiday_hero_data_v1"


class KeyValueStore(Protocol):
    """Minimal local-storage style backend."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class FileKeyValueStore:
    """One UTF-8 JSON file per key under a state directory."""

    def __init__(self, state_dir: Path):
        self.state_dir = Path(state_dir)

    def _path(self, key: str) -> Path:
        return self.state_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        """Write atomically (write temp then replace)."""
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        temp_path = path.with_suffix(".tmp")
        temp_path.write_text(value, encoding="utf-8")
        temp_path.replace(path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class MemoryKeyValueStore:
    """In-process backend; nothing survives the interpreter."""

    def __init__(self):
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class PersistenceGateway:
    """Reads and writes exactly one AppData snapshot under STORAGE_KEY."""

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY):
        self.store = store
        self.key = key

    def save(self, snapshot: AppData) -> bool:
        """
        Serialize snapshot to JSON and write it under the fixed key.

        Returns True if the write went through. Never raises.
        """
        try:
            payload = snapshot.model_dump_json(by_alias=True)
            self.store.set_item(self.key, payload)
        except Exception as e:
            logger.error(f"Failed to save data under {self.key}: {e}")
            return False

        logger.debug(f"Saved snapshot under {self.key} ({len(payload)} bytes)")
        return True

    def load(self) -> Optional[AppData]:
        """Load snapshot. Returns None if missing, unreadable or invalid."""
        try:
            raw = self.store.get_item(self.key)
        except Exception as e:
            logger.error(f"Failed to read {self.key}: {e}")
            return None

        if not raw:
            return None

        try:
            data = json.loads(raw)
            return AppData.model_validate(data)
        except Exception as e:
            logger.warning(f"Discarding malformed data under {self.key}: {e}")
            return None

    def clear(self) -> None:
        """Remove the slot. Removing an absent slot is fine."""
        try:
            self.store.remove_item(self.key)
        except Exception as e:
            logger.error(f"Failed to clear {self.key}: {e}")


def open_gateway(state_dir: Path) -> PersistenceGateway:
    """Gateway backed by files under state_dir."""
    return PersistenceGateway(FileKeyValueStore(state_dir))
