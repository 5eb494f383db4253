"""
Key/value stores for the language preference.

Both stores expose the small get_item/set_item surface of a browser's
localStorage. JsonFileStorage keeps its values on disk so a preference
survives from one page load (process) to the next.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class PreferenceStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def clear(self) -> None: ...


class MemoryStorage:
    """Dict-backed storage, scoped to the object's lifetime."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class JsonFileStorage:
    """
    Storage persisted as a single JSON object file.

    The file is read on every access and rewritten on every write; a
    missing file reads as empty.

    Examples:
        >>> storage = JsonFileStorage(Path("~/.blog/storage.json").expanduser())
        >>> storage.set_item("blog-language", "vi")
        >>> JsonFileStorage(storage.path).get_item("blog-language")
        'vi'
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in storage file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} must contain a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = str(value)
        self._write(data)
        logger.debug("Stored %s=%s in %s", key, value, self.path)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def clear(self) -> None:
        self._write({})
