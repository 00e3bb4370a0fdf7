"""Local storage backends"""

import pytest

from storefront.client.storage import FileStorage, MemoryStorage, StorageError, StorageQuotaExceeded

def test_memory_storage_roundtrip():
    storage = MemoryStorage()

    assert storage.get_item("cart") is None
    storage.set_item("cart", "[]")
    assert storage.get_item("cart") == "[]"
    storage.remove_item("cart")
    assert storage.get_item("cart") is None

def test_memory_storage_quota_keeps_previous_value():
    storage = MemoryStorage(quota_bytes=10)
    storage.set_item("k", "short")

    with pytest.raises(StorageQuotaExceeded):
        storage.set_item("k", "x" * 20)

    assert storage.get_item("k") == "short"

def test_file_storage_is_shared_between_instances(tmp_path):
    path = str(tmp_path / "nested" / "storage.json")

    FileStorage(path).set_item("cart", '[{"a": 1}]')

    assert FileStorage(path).get_item("cart") == '[{"a": 1}]'

def test_file_storage_remove(tmp_path):
    storage = FileStorage(str(tmp_path / "storage.json"))
    storage.set_item("cart", "[]")
    storage.set_item("other", "1")

    storage.remove_item("cart")
    storage.remove_item("missing")

    assert storage.get_item("cart") is None
    assert storage.get_item("other") == "1"

def test_file_storage_corrupt_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json")

    with pytest.raises(StorageError):
        FileStorage(str(path)).get_item("cart")

def test_file_storage_quota(tmp_path):
    storage = FileStorage(str(tmp_path / "storage.json"), quota_bytes=16)

    with pytest.raises(StorageQuotaExceeded):
        storage.set_item("cart", "x" * 32)

    assert storage.get_item("cart") is None

def test_file_storage_write_recovers_from_corrupt_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{garbage")
    storage = FileStorage(str(path))

    storage.set_item("cart", "[]")

    assert storage.get_item("cart") == "[]"
    assert FileStorage(str(path)).get_item("cart") == "[]"

def test_file_storage_remove_resets_corrupt_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{garbage")
    storage = FileStorage(str(path))

    storage.remove_item("cart")

    assert storage.get_item("cart") is None
