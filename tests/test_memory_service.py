# FILE: tests/test_memory_service.py

import re

import pytest

from backend.errors import NotFoundError
from backend.services.memory_service import MemoryService, generate_memory_id
from backend.services.upload_intake import StoredUpload, UploadIntake


@pytest.fixture
def intake(settings):
    return UploadIntake(settings.upload_dir, url_prefix=settings.upload_url_prefix)


@pytest.fixture
def service(record_store, intake):
    return MemoryService(record_store, intake)


def test_generated_id_format():
    """Generated ids are non-empty strings: millis, dash, 8 hex chars"""
    memory_id = generate_memory_id()
    
    assert isinstance(memory_id, str)
    assert re.match(r"^\d{13,}-[0-9a-f]{8}$", memory_id)


def test_create_without_id(service, sample_memory):
    count, memory_id = service.create(sample_memory)
    
    assert count == 1
    assert memory_id
    assert service.list() == [dict(sample_memory, id=memory_id)]


def test_create_keeps_client_id_as_string(service, sample_memory):
    count, memory_id = service.create(dict(sample_memory, id=42))
    
    assert memory_id == "42"
    assert service.list()[0]["id"] == "42"


def test_create_keeps_extra_fields(service):
    _, memory_id = service.create({"caption": "x", "mood": "happy"})
    
    assert service.list()[0] == {"caption": "x", "mood": "happy", "id": memory_id}


def test_create_appends(service, sample_memory):
    service.create(dict(sample_memory, id="a"))
    count, _ = service.create(dict(sample_memory, id="b"))
    
    assert count == 2
    assert [m["id"] for m in service.list()] == ["a", "b"]


def test_update_merges_only_supplied_fields(service, sample_memory):
    _, memory_id = service.create(sample_memory)
    
    updated = service.update(memory_id, {"caption": "x"})
    
    assert updated == dict(sample_memory, id=memory_id, caption="x")
    assert service.list() == [updated]


def test_update_adds_new_keys(service, sample_memory):
    _, memory_id = service.create(sample_memory)
    
    updated = service.update(memory_id, {"location": "Pier 39"})
    
    assert updated["location"] == "Pier 39"
    assert updated["caption"] == sample_memory["caption"]


def test_update_does_not_change_id(service, sample_memory):
    _, memory_id = service.create(sample_memory)
    
    updated = service.update(memory_id, {"id": "hijack", "name": "Alex"})
    
    assert updated["id"] == memory_id
    assert updated["name"] == "Alex"


def test_update_without_store(service):
    with pytest.raises(NotFoundError) as exc_info:
        service.update("1", {"caption": "x"})
    assert exc_info.value.message == "No memories store"


def test_update_unknown_id(service, sample_memory):
    service.create(dict(sample_memory, id="1"))
    
    with pytest.raises(NotFoundError) as exc_info:
        service.update("2", {"caption": "x"})
    assert exc_info.value.message == "Memory not found"


def test_delete_then_second_delete(service, sample_memory):
    service.create(dict(sample_memory, id="1"))
    service.create(dict(sample_memory, id="2"))
    
    removed = service.delete("1")
    
    assert removed["id"] == "1"
    assert [m["id"] for m in service.list()] == ["2"]
    with pytest.raises(NotFoundError):
        service.delete("1")


def test_delete_removes_uploaded_image(service, intake, sample_memory):
    image = intake.upload_dir / "1700000000000_beach.png"
    image.write_bytes(b"png")
    service.create(dict(sample_memory, id="1", imageUrl=intake.url_for(image.name)))
    
    service.delete("1")
    
    assert not image.exists()


def test_delete_leaves_external_urls_alone(service, intake, sample_memory):
    """An external URL sharing a basename with an upload does not delete it"""
    image = intake.upload_dir / "beach.jpg"
    image.write_bytes(b"jpg")
    service.create(dict(sample_memory, id="1"))
    
    service.delete("1")
    
    assert image.exists()


def test_delete_survives_missing_image(service, intake, sample_memory):
    service.create(dict(sample_memory, id="1", imageUrl=intake.url_for("gone.png")))
    
    assert service.delete("1")["id"] == "1"


def test_delete_survives_unlink_failure(service, intake, sample_memory, monkeypatch):
    """Asset cleanup errors are logged, the delete still succeeds"""
    image = intake.upload_dir / "locked.png"
    image.write_bytes(b"png")
    service.create(dict(sample_memory, id="1", imageUrl=intake.url_for(image.name)))
    
    def _deny(self, *args, **kwargs):
        raise PermissionError("read-only")
    
    monkeypatch.setattr("pathlib.Path.unlink", _deny)
    
    assert service.delete("1")["id"] == "1"
    assert service.list() == []


def test_create_from_upload_defaults(service):
    stored = StoredUpload(
        stored_filename="1700000000000_cat.png",
        original_name="cat.png",
        mime_type="image/png",
        size_bytes=3,
        url="/assets/uploads/1700000000000_cat.png"
    )
    
    memory = service.create_from_upload(stored)
    
    assert memory["name"] == "Anonymous"
    assert memory["caption"] == "cat.png"
    assert memory["details"] == ""
    assert memory["imageUrl"] == stored.url
    assert service.list() == [memory]


def test_corrupt_memories_file_reads_empty(service, record_store, sample_memory):
    record_store.path_for("memories").write_text("not json")
    
    assert service.list() == []
    count, _ = service.create(sample_memory)
    assert count == 1
