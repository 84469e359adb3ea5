# storefront/storage.py
import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol


class StorageError(Exception):
    """Raised when the persistence medium cannot be read or written."""


class Storage(Protocol):
    """
    Narrow key-value boundary the cart depends on (localStorage-like).

    Values are text; callers own serialization.
    """

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """In-process storage, used by tests and as a throwaway store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class JsonFileStorage:
    """
    All keys live in one JSON object on disk.

    Every page context opens the same file, there is no locking: the last
    writer wins. Writes go through a temp file and ``os.replace`` so a reader
    never sees a half-written file.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            text = self.path.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise StorageError(f"cannot read {self.path}: {e}") from e
        if text == "":
            return {}
        try:
            data = json.loads(text)
        except ValueError as e:
            raise StorageError(f"corrupted store file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"store file {self.path} is not a JSON object")
        return data

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is None:
            return None
        # Hand-edited files may hold the record as a raw JSON value
        return value if isinstance(value, str) else json.dumps(value)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError:
            # A corrupted file is replaced rather than blocking every write
            data = {}
        data[key] = value

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"cannot write {self.path}: {e}") from e
