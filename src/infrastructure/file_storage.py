"""JSON file implementation of the key-value storage port."""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional
from src.domain.storage_interface import IKeyValueStorage, StorageError


logger = logging.getLogger(__name__)


class JsonFileStorage(IKeyValueStorage):
    """Stores every key in one JSON object on disk.

    The file is re-read on each access so separate runs see each other's
    writes. An unreadable or malformed file is treated as empty.
    """

    def __init__(self, path: str):
        """Initialize file storage.

        Args:
            path: Location of the JSON file; parent directories are created
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Error reading storage file {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Storage file {self._path} does not hold a JSON object")
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def _save(self, data: Dict[str, str]) -> None:
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".storage-")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise StorageError(f"Cannot write {self._path}: {e}") from e

    def keys(self):
        return list(self._load().keys())

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            try:
                self._save(data)
            except StorageError as e:
                logger.error(f"Error removing {key!r}: {e}")

