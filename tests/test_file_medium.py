"""Tests for the directory-backed medium."""

from pathlib import Path

import pytest

from smartchef.adapters.file_medium import FileMedium
from smartchef.errors import StorageQuotaExceededError
from smartchef.services.storage import JsonStore


def test_file_medium_round_trip(tmp_path: Path) -> None:
    medium = FileMedium(root=tmp_path / "data")

    assert medium.get("smartchef_inventory") is None
    medium.set("smartchef_inventory", '["rice"]')
    medium.set("worldwide_JP_10_2026", "{}")

    assert medium.get("smartchef_inventory") == '["rice"]'
    assert sorted(medium.keys()) == ["smartchef_inventory", "worldwide_JP_10_2026"]

    medium.delete("smartchef_inventory")
    medium.delete("smartchef_inventory")

    assert medium.get("smartchef_inventory") is None


def test_file_medium_overwrite_does_not_count_old_value(tmp_path: Path) -> None:
    medium = FileMedium(root=tmp_path, quota_bytes=10)

    medium.set("key", "x" * 8)
    medium.set("key", "y" * 10)

    assert medium.get("key") == "y" * 10


def test_file_medium_enforces_quota(tmp_path: Path) -> None:
    medium = FileMedium(root=tmp_path, quota_bytes=10)
    medium.set("first", "x" * 6)

    with pytest.raises(StorageQuotaExceededError):
        medium.set("second", "y" * 6)

    assert medium.get("second") is None
    assert medium.get("first") == "x" * 6


def test_quota_failure_leaves_previous_value(tmp_path: Path) -> None:
    kv = JsonStore(FileMedium(root=tmp_path, quota_bytes=64))

    assert kv.write("numbers", [1]) is True
    assert kv.write("numbers", list(range(100))) is False
    assert kv.read("numbers", list) == [1]
