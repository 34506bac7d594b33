"""
JSON file key-value store adapter - Implements KeyValueStore protocol.

Each key is stored as ``<data_dir>/<key>.json``. Writes go to a
temporary file in the same directory that then atomically replaces the
target, so a crash mid-write never leaves a truncated collection.
"""

import logging
import os
import re
import tempfile
from pathlib import Path

from src.domain.exceptions import StoreError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonFileKeyValueStore:
    """
    Implements KeyValueStore protocol on the local filesystem.

    Uses structural subtyping - no explicit inheritance from Protocol.
    The data directory is created on first write.
    """

    def __init__(self, data_dir: Path | str) -> None:
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise StoreError(f"Cannot read key '{key}'") from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._data_dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise StoreError(f"Cannot write key '{key}'") from e

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to delete {path}: {e}")
            raise StoreError(f"Cannot delete key '{key}'") from e

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise StoreError(f"Invalid store key: {key!r}")
        return self._data_dir / f"{key}.json"
