"""Directory-backed key-value medium."""

import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote

from smartchef.errors import StorageError, StorageQuotaExceededError
from smartchef.services.storage import KeyValueMedium

_SUFFIX = ".json"


@dataclass
class FileMedium(KeyValueMedium):
    """Stores each key as one UTF-8 file, replaced atomically on write."""

    root: Path
    quota_bytes: int | None = None

    def get(self, key: str) -> str | None:
        """Return the file contents for a key."""
        try:
            return self._path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Failed to read {key!r}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        """Write a key via a temporary file so readers never see partial data."""
        data = value.encode("utf-8")
        try:
            if self.quota_bytes is not None:
                required = self._used_bytes(excluding=key) + len(data)
                if required > self.quota_bytes:
                    raise StorageQuotaExceededError(key, required, self.quota_bytes)
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.root, suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(data)
                os.replace(tmp_name, self._path(key))
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write {key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        """Remove the file for a key."""
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to delete {key!r}: {exc}") from exc

    def keys(self) -> Iterable[str]:
        """Return keys for every stored file."""
        if not self.root.exists():
            return []
        try:
            return [
                unquote(path.name[: -len(_SUFFIX)])
                for path in self.root.iterdir()
                if path.name.endswith(_SUFFIX)
            ]
        except OSError as exc:
            raise StorageError(f"Failed to list {self.root}: {exc}") from exc

    def _path(self, key: str) -> Path:
        return self.root / f"{quote(key, safe='')}{_SUFFIX}"

    def _used_bytes(self, excluding: str) -> int:
        if not self.root.exists():
            return 0
        skip = self._path(excluding).name
        return sum(
            path.stat().st_size
            for path in self.root.iterdir()
            if path.name.endswith(_SUFFIX) and path.name != skip
        )
