"""JSON key-value storage on top of an opaque string medium."""

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from smartchef.errors import StorageError

SCHEMA_VERSION = 1

_logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class KeyValueMedium(Protocol):
    """Persistent mapping of string keys to string values."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Replace the value stored under a key."""

    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""

    def keys(self) -> Iterable[str]:
        """Return every stored key."""


@dataclass
class InMemoryMedium(KeyValueMedium):
    """Dictionary-backed medium for tests and throwaway sessions."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)

    def keys(self) -> Iterable[str]:
        return list(self.values)


@dataclass
class JsonStore:
    """Reads and writes versioned JSON documents without ever raising."""

    medium: KeyValueMedium

    def read(self, key: str, decode: Callable[[object], T]) -> T | None:
        """Return the decoded value for a key, or None if absent or unreadable."""
        try:
            raw = self.medium.get(key)
        except StorageError as exc:
            _logger.warning("Storage read failed: key=%s error=%s", key, exc)
            return None
        if raw is None:
            return None
        try:
            document = json.loads(raw)
        except ValueError as exc:
            _logger.warning("Stored value is not JSON: key=%s error=%s", key, exc)
            return None
        data = _unwrap(key, document)
        if data is None:
            return None
        try:
            return decode(data)
        except (ValidationError, ValueError, TypeError) as exc:
            _logger.warning("Stored value has wrong shape: key=%s error=%s", key, exc)
            return None

    def write(self, key: str, data: object) -> bool:
        """Overwrite a key with a JSON document; return False if the medium refuses."""
        document = json.dumps(
            {"schemaVersion": SCHEMA_VERSION, "data": data}, ensure_ascii=False
        )
        try:
            self.medium.set(key, document)
        except StorageError as exc:
            _logger.error("Storage write failed: key=%s error=%s", key, exc)
            return False
        return True

    def remove(self, key: str) -> None:
        """Delete a key, logging medium failures."""
        try:
            self.medium.delete(key)
        except StorageError as exc:
            _logger.error("Storage delete failed: key=%s error=%s", key, exc)

    def keys(self, prefix: str = "") -> list[str]:
        """Return stored keys that start with a prefix."""
        try:
            return sorted(key for key in self.medium.keys() if key.startswith(prefix))
        except StorageError as exc:
            _logger.warning("Storage key listing failed: error=%s", exc)
            return []


def _unwrap(key: str, document: object) -> object | None:
    """Strip the version envelope; bare legacy values pass through."""
    if not (
        isinstance(document, dict)
        and "schemaVersion" in document
        and "data" in document
    ):
        return document
    version = document["schemaVersion"]
    if not isinstance(version, int) or version > SCHEMA_VERSION:
        _logger.warning("Unsupported schema version: key=%s version=%s", key, version)
        return None
    return document["data"]


def decode_model(model: type[M]) -> Callable[[object], M]:
    """Return a decoder that validates a single record."""
    return model.model_validate


def decode_list(model: type[M]) -> Callable[[object], list[M]]:
    """Return a decoder for a JSON array that drops records it cannot validate."""

    def _decode(data: object) -> list[M]:
        if not isinstance(data, list):
            raise TypeError(f"expected a list of {model.__name__}, got {type(data)}")
        records: list[M] = []
        for index, item in enumerate(data):
            try:
                records.append(model.model_validate(item))
            except ValidationError as exc:
                _logger.warning(
                    "Dropping invalid %s at index %s: %s",
                    model.__name__,
                    index,
                    exc.error_count(),
                )
        return records

    return _decode
