import json
import os
import tempfile
from pathlib import Path
from typing import Any

from billboard_reporter.storage.exceptions import StorageError


class JsonFileStore:
    """Key-value storage holding one JSON document per key.

    Each key maps to ``{root}/{key}.json``. Values are always read and
    written whole.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    def get_item(self, key: str) -> Any | None:
        """Return the decoded value stored under ``key``, or None if absent.

        Raises:
            StorageError: if the file cannot be read or is not valid JSON.
        """
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Failed to read '{key}': {exc}") from exc

    def set_item(self, key: str, value: Any) -> None:
        """Serialize ``value`` and replace the stored document atomically.

        Raises:
            StorageError: if the value cannot be serialized or written.
        """
        path = self._path(key)
        try:
            payload = json.dumps(value, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Failed to serialize '{key}': {exc}") from exc
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write '{key}': {exc}") from exc

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._root / f"{key}.json"
